"""
Print Dispatcher
================

Drives the host's print methods in fallback order until one succeeds.

On macOS and Linux there is a single method, ``lp``. On Windows no single
print primitive does printer targeting, driver preferences and every file
type at once, so GDI, the shell print verb and the legacy image viewer
are tried in that order.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence, Tuple, Union

from ..config import PLACEHOLDER_PATH, PRINT_TIMEOUT
from ..errors import AllMethodsFailed, PartialPrint
from ..handlers import PrintMethod, PrintRequest, default_methods
from ..logging_config import AnyLogger, get_logger
from ..models import PageSize
from .commands import is_windows

logger = get_logger(__name__)


@dataclass
class DispatchResult:
    """Outcome of a successful dispatch."""

    method: str
    path: Path
    copies: int
    # (method name, error) for every method that failed before the winner
    attempts: List[Tuple[str, str]] = field(default_factory=list)


class PrintDispatcher:
    """Runs a print request through an ordered list of print methods."""

    def __init__(
        self,
        methods: Optional[Sequence[PrintMethod]] = None,
        windows: Optional[bool] = None,
        placeholder_path: Union[str, Path] = PLACEHOLDER_PATH,
        timeout: float = PRINT_TIMEOUT,
    ):
        if windows is None:
            windows = is_windows()
        self.windows = windows
        self.methods = list(methods) if methods is not None else default_methods(windows, timeout=timeout)
        self.placeholder_path = Path(placeholder_path)

    async def dispatch(
        self,
        artifact_path: Union[str, Path],
        copies: int,
        printer_name: Optional[str] = None,
        restricted_mode: bool = False,
        target_page_size: Optional[PageSize] = None,
        log: Optional[AnyLogger] = None,
    ) -> DispatchResult:
        """
        Print ``artifact_path`` with the first method that works.

        Args:
            artifact_path: File to print
            copies: Physical copies requested
            printer_name: Target printer; empty means the OS default queue
            restricted_mode: Print the placeholder image once instead
            target_page_size: Template hint used to rule methods in or out
            log: Job logger (module logger by default)

        Returns:
            DispatchResult naming the method that printed

        Raises:
            AllMethodsFailed: No applicable method succeeded
        """
        log = log or logger

        if restricted_mode:
            log.info('Restricted mode: printing placeholder, 1 copy')
            artifact_path = self.placeholder_path
            copies = 1

        request = PrintRequest(
            path=Path(artifact_path),
            copies=copies,
            printer_name=printer_name,
            target_page_size=target_page_size,
        )

        attempts: List[Tuple[str, str]] = []
        for method in self.methods:
            if not method.applies(request):
                log.info('Skipping %s method for %s', method.name, request.path.name)
                continue

            log.info('Attempting %s method...', method.name)
            try:
                await method.run(request)
            except PartialPrint as e:
                log.warning('%s method failed: %s', method.name, e)
                attempts.append((method.name, str(e)))
                # Only the unprinted copies go to the next method
                request = request.with_copies(e.remaining)
                continue
            except Exception as e:
                log.warning('%s method failed: %s', method.name, e)
                attempts.append((method.name, str(e)))
                continue

            log.info('%s method succeeded', method.name)
            return DispatchResult(
                method=method.name,
                path=request.path,
                copies=copies,
                attempts=attempts,
            )

        log.error('All printing methods failed for %s', request.path.name)
        raise AllMethodsFailed(attempts)
