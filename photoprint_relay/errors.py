"""
PhotoPrint Relay Exceptions
===========================

Exception Hierarchy:
    PhotoPrintError (base)
    ├── CommandError        - External command failed or is missing
    │   └── CommandTimeout  - External command exceeded its timeout
    ├── PrintMethodError    - One dispatch method could not print
    │   └── PartialPrint    - A method failed after printing some copies
    └── AllMethodsFailed    - Every applicable dispatch method failed

Only AllMethodsFailed leaves the dispatcher; the others are caught at
the method boundary and drive the fallback chain.
"""

from typing import Any, Dict, List, Optional, Tuple


class PhotoPrintError(Exception):
    """Base exception for PhotoPrint Relay errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class CommandError(PhotoPrintError):
    """An external command exited non-zero or could not be started."""

    def __init__(self, command: str, returncode: Optional[int] = None, stderr: str = ""):
        if returncode is None:
            message = f"{command}: could not run ({stderr or 'not found'})"
        else:
            message = f"{command}: exited with status {returncode}"
        super().__init__(message, {'stderr': stderr.strip()} if stderr.strip() else None)
        self.command = command
        self.returncode = returncode
        self.stderr = stderr


class CommandTimeout(CommandError):
    """An external command did not finish within its timeout."""

    def __init__(self, command: str, timeout: float):
        PhotoPrintError.__init__(self, f"{command}: timed out after {timeout:g}s")
        self.command = command
        self.returncode = None
        self.stderr = ""
        self.timeout = timeout


class PrintMethodError(PhotoPrintError):
    """A dispatch method failed to print."""


class PartialPrint(PrintMethodError):
    """A method failed part way through a multi-copy job."""

    def __init__(self, method: str, printed: int, requested: int, cause: Exception):
        super().__init__(f"{cause} ({printed} of {requested} copies printed)")
        self.method = method
        self.printed = printed
        self.requested = requested
        self.cause = cause

    @property
    def remaining(self) -> int:
        return self.requested - self.printed


class AllMethodsFailed(PhotoPrintError):
    """Every applicable dispatch method failed."""

    def __init__(self, attempts: List[Tuple[str, str]]):
        super().__init__("All printing methods failed")
        self.attempts = attempts
