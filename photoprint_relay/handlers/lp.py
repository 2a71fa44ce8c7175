"""
LP Method
=========

CUPS ``lp`` on macOS and Linux. The copy count is passed to ``lp``,
which fans out the physical copies itself.
"""

from typing import List

from .base import PrintMethod, PrintRequest
from ..printing.commands import run_command


class LPMethod(PrintMethod):
    """Print through the CUPS ``lp`` command."""

    name = 'lp'

    def build_args(self, request: PrintRequest) -> List[str]:
        args = ['lp']
        if request.has_printer:
            args.extend(['-d', request.printer_name])
        args.extend(['-n', str(request.copies), str(request.path)])
        return args

    async def run(self, request: PrintRequest) -> None:
        # Single invocation; lp handles copies
        await self.print_copy(request)

    async def print_copy(self, request: PrintRequest) -> None:
        await run_command(self.build_args(request), self.timeout, self.logger)
