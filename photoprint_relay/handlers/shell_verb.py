"""
Shell Print Verb Method
=======================

Asks the Windows shell to print the file with whatever application is
associated with its type. The shell verb cannot target a printer; jobs
always land in the OS default queue.
"""

from typing import List

from .base import PrintMethod, PrintRequest
from ..printing.commands import run_command


class ShellVerbMethod(PrintMethod):
    """PowerShell ``Start-Process -Verb Print``."""

    name = 'shell_verb'

    def applies(self, request: PrintRequest) -> bool:
        # Strip templates need the driver's cut settings, which this path ignores
        if request.target_page_size and request.target_page_size.is_strip:
            return False
        return True

    def build_args(self, request: PrintRequest) -> List[str]:
        file_path = str(request.path).replace("'", "''")
        command = f"Start-Process -FilePath '{file_path}' -Verb Print -WindowStyle Hidden -Wait"
        return ['powershell', '-NoProfile', '-Command', command]

    async def print_copy(self, request: PrintRequest) -> None:
        if request.has_printer:
            self.logger.debug('Shell print verb ignores printer %r', request.printer_name)
        await run_command(self.build_args(request), self.timeout, self.logger)
