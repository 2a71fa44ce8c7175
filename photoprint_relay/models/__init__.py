"""
PhotoPrint Relay Models
"""

from .job import MediaKind, PageSize, PrintJob
from .inventory import PrinterInventorySnapshot

__all__ = ['MediaKind', 'PageSize', 'PrintJob', 'PrinterInventorySnapshot']
