"""
Printer Inventory Snapshot
==========================

The last known default printer and installed printer names. Snapshots
are immutable; a refresh builds a new one and swaps the reference.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class PrinterInventorySnapshot:
    """Default printer and installed printers as reported by the OS."""

    default_printer_name: Optional[str] = None
    known_printers: Tuple[str, ...] = ()
    refreshed_at: datetime = field(default_factory=datetime.now)

    def knows(self, printer_name: str) -> bool:
        return printer_name in self.known_printers

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the JSON shape served by ``GET /printers``."""
        return {
            'defaultPrinter': self.default_printer_name or '',
            'availablePrinters': list(self.known_printers),
            'timestamp': self.refreshed_at.isoformat(),
        }
