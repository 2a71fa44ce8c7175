"""
PhotoPrint Relay Printing
=========================

Printer inventory, transient artifacts and the command runner.
The dispatcher lives in :mod:`photoprint_relay.printing.dispatcher`.
"""

from .artifact import printable_artifact, with_printable_artifact
from .commands import CommandResult, is_windows, run_command
from .inventory import (
    PrinterInventory,
    detect_default_printer,
    enumerate_printers,
    list_available_printers,
)

__all__ = [
    'printable_artifact', 'with_printable_artifact',
    'CommandResult', 'is_windows', 'run_command',
    'PrinterInventory', 'detect_default_printer', 'enumerate_printers', 'list_available_printers',
]
