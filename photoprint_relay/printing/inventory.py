"""
Printer Inventory
=================

Queries the host OS for installed printers and the default printer.

Printer enumeration is best effort: a missing tool, a parse failure or a
timeout all mean "unknown", reported as ``None`` or an empty list.
"""

import logging
import re
from typing import List, Optional

from ..config import INVENTORY_TIMEOUT
from ..errors import PhotoPrintError
from ..logging_config import get_logger
from ..models import PrinterInventorySnapshot
from .commands import is_windows, run_command

logger = get_logger(__name__)

_WIN_DEFAULT_QUERY = "(Get-CimInstance Win32_Printer | Where-Object { $_.Default -eq $true }).Name"
_WIN_LIST_QUERY = "(Get-CimInstance Win32_Printer).Name"

_LPSTAT_DEFAULT = re.compile(r'system default destination:\s+(\S+)')


def _powershell(command: str) -> List[str]:
    return ['powershell', '-NoProfile', '-Command', command]


async def detect_default_printer(windows: Optional[bool] = None) -> Optional[str]:
    """Name of the system default printer, or None if it cannot be determined."""
    if windows is None:
        windows = is_windows()

    try:
        if windows:
            result = await run_command(_powershell(_WIN_DEFAULT_QUERY), INVENTORY_TIMEOUT)
            return result.stdout.strip() or None

        result = await run_command(['lpstat', '-d'], INVENTORY_TIMEOUT)
        match = _LPSTAT_DEFAULT.search(result.stdout)
        return match.group(1) if match else None
    except PhotoPrintError as e:
        logger.debug('Default printer query failed: %s', e)
        return None


async def enumerate_printers(windows: Optional[bool] = None) -> List[str]:
    """
    Installed printer names in OS order.

    Raises:
        PhotoPrintError: The enumeration command failed
    """
    if windows is None:
        windows = is_windows()

    if windows:
        result = await run_command(_powershell(_WIN_LIST_QUERY), INVENTORY_TIMEOUT)
        return [line.strip() for line in result.stdout.splitlines() if line.strip()]

    result = await run_command(['lpstat', '-p'], INVENTORY_TIMEOUT)
    return parse_lpstat_printers(result.stdout)


def parse_lpstat_printers(output: str) -> List[str]:
    """Printer names from ``lpstat -p``; indented state messages are skipped."""
    names = []
    for line in output.splitlines():
        # state lines under each printer are indented
        if not line.startswith('printer '):
            continue
        parts = line.split()
        if len(parts) >= 2:
            names.append(parts[1])
    return names


async def list_available_printers(windows: Optional[bool] = None) -> List[str]:
    """Installed printer names, or an empty list on any failure."""
    try:
        return await enumerate_printers(windows)
    except PhotoPrintError as e:
        logger.debug('Printer enumeration failed: %s', e)
        return []


class PrinterInventory:
    """
    Holder of the current :class:`PrinterInventorySnapshot`.

    Readers take ``inventory.snapshot`` and use that value; refreshes build
    a new snapshot and replace the reference in a single assignment.
    """

    def __init__(
        self,
        snapshot: Optional[PrinterInventorySnapshot] = None,
        windows: Optional[bool] = None,
        log: Optional[logging.Logger] = None,
    ):
        self._snapshot = snapshot or PrinterInventorySnapshot()
        self.windows = is_windows() if windows is None else windows
        self.logger = log or logger

    @property
    def snapshot(self) -> PrinterInventorySnapshot:
        return self._snapshot

    def replace(self, snapshot: PrinterInventorySnapshot) -> None:
        self._snapshot = snapshot

    async def refresh(self, strict: bool = False) -> PrinterInventorySnapshot:
        """
        Re-query the OS and swap in a new snapshot.

        Args:
            strict: Raise enumeration errors instead of treating them as an
                empty list. The previous snapshot is kept when this raises.
        """
        default_name = await detect_default_printer(self.windows)
        if strict:
            printers = await enumerate_printers(self.windows)
        else:
            printers = await list_available_printers(self.windows)

        snapshot = PrinterInventorySnapshot(
            default_printer_name=default_name,
            known_printers=tuple(printers),
        )
        self._snapshot = snapshot

        if default_name:
            self.logger.info('Default printer: %s', default_name)
        else:
            self.logger.warning('No default printer detected - jobs will go to the OS default queue')
        self.logger.info('Available printers: %s', ', '.join(printers) or '(none)')
        return snapshot
