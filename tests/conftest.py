"""
Shared fixtures for PhotoPrint Relay tests.
"""

import base64
from pathlib import Path
from typing import Callable, List, Optional

import pytest

from photoprint_relay.errors import AllMethodsFailed, PrintMethodError
from photoprint_relay.handlers import PrintMethod, PrintRequest
from photoprint_relay.models import PrinterInventorySnapshot
from photoprint_relay.orchestrator import JobOrchestrator
from photoprint_relay.printing.dispatcher import DispatchResult
from photoprint_relay.printing.inventory import PrinterInventory

# 1x1 PNG
PNG_BASE64 = 'iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=='
PNG_BYTES = base64.b64decode(PNG_BASE64)


class FakeMethod(PrintMethod):
    """Print method that records its calls instead of printing."""

    def __init__(self, name: str, fail: bool = False,
                 applies: Optional[Callable[[PrintRequest], bool]] = None):
        self.name = name
        self.fail = fail
        self._applies = applies
        self.calls: List[PrintRequest] = []
        super().__init__(timeout=1)

    def applies(self, request: PrintRequest) -> bool:
        if self._applies is None:
            return True
        return self._applies(request)

    async def print_copy(self, request: PrintRequest) -> None:
        self.calls.append(request)
        if self.fail:
            raise PrintMethodError(f'{self.name} broke')


class FakeDispatcher:
    """Dispatcher stand-in recording what it was asked to print."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.calls = []

    async def dispatch(self, artifact_path, copies, printer_name=None,
                       restricted_mode=False, target_page_size=None, log=None):
        path = Path(artifact_path)
        self.calls.append({
            'path': path,
            'existed': path.exists(),
            'content': path.read_bytes() if path.exists() else None,
            'copies': copies,
            'printer_name': printer_name,
            'restricted_mode': restricted_mode,
            'target_page_size': target_page_size,
        })
        if self.fail:
            raise AllMethodsFailed([('lp', 'lp: exited with status 1')])
        return DispatchResult(method='fake', path=path, copies=copies)


@pytest.fixture
def fake_method():
    return FakeMethod


@pytest.fixture
def snapshot():
    return PrinterInventorySnapshot(
        default_printer_name='Office_Laser',
        known_printers=('Office_Laser', 'DNP_DS620'),
    )


@pytest.fixture
def inventory(snapshot):
    return PrinterInventory(snapshot=snapshot, windows=False)


@pytest.fixture
def dispatcher():
    return FakeDispatcher()


@pytest.fixture
def orchestrator(inventory, dispatcher, tmp_path):
    return JobOrchestrator(inventory=inventory, dispatcher=dispatcher, scratch_dir=str(tmp_path))
