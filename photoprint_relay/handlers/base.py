"""
Base Print Method
=================

Abstract base class for dispatch methods: one OS-level way of handing a
file to a printer.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional

from ..config import PRINT_TIMEOUT
from ..errors import PartialPrint
from ..logging_config import AnyLogger, get_logger
from ..models import PageSize


@dataclass(frozen=True)
class PrintRequest:
    """What a method is asked to print."""

    path: Path
    copies: int
    printer_name: Optional[str] = None
    target_page_size: Optional[PageSize] = None

    @property
    def has_printer(self) -> bool:
        return bool(self.printer_name and self.printer_name.strip())

    def with_copies(self, copies: int) -> 'PrintRequest':
        return replace(self, copies=copies)


class PrintMethod(ABC):
    """Abstract base class for dispatch methods."""

    #: Short identifier used in logs and dispatch results
    name = 'base'

    def __init__(self, timeout: float = PRINT_TIMEOUT, log: Optional[AnyLogger] = None):
        self.timeout = timeout
        self.logger = log or get_logger(f'handlers.{self.name}')

    def applies(self, request: PrintRequest) -> bool:
        """Whether this method can handle ``request`` at all."""
        return True

    async def run(self, request: PrintRequest) -> None:
        """
        Print all copies of ``request``.

        The default issues one invocation per copy, strictly one after
        another. Methods whose tool takes a copy count override this.

        Raises:
            PartialPrint: A copy failed after earlier copies printed
            PhotoPrintError: The first copy failed
        """
        for i in range(request.copies):
            self.logger.debug('%s: copy %d/%d', self.name, i + 1, request.copies)
            try:
                await self.print_copy(request)
            except Exception as e:
                if i == 0:
                    raise
                raise PartialPrint(self.name, i, request.copies, e) from e

    @abstractmethod
    async def print_copy(self, request: PrintRequest) -> None:
        """Print a single copy."""
        pass
