"""
Job Orchestrator
================

Takes a print job from the HTTP layer to the printer: resolves which
printer to use, materialises the image, dispatches it and turns the
result into a response payload.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from .config import SCRATCH_DIR, TROUBLESHOOTING
from .errors import AllMethodsFailed
from .logging_config import get_job_logger
from .models import PrintJob
from .printing.artifact import printable_artifact
from .printing.dispatcher import PrintDispatcher
from .printing.inventory import PrinterInventory


@dataclass
class JobOutcome:
    """Result of a submitted job, ready to serialise."""

    job_id: str
    success: bool
    copies: int
    printer: Optional[str]
    method: Optional[str] = None
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        printer = self.printer or 'default'
        if self.success:
            return {
                'jobId': self.job_id,
                'copies': self.copies,
                'printer': printer,
                'success': True,
            }
        return {
            'error': self.error,
            'jobId': self.job_id,
            'printer': printer,
            'success': False,
            'troubleshooting': dict(TROUBLESHOOTING),
        }


class JobOrchestrator:
    """Owns the printer inventory and runs print jobs."""

    def __init__(
        self,
        inventory: Optional[PrinterInventory] = None,
        dispatcher: Optional[PrintDispatcher] = None,
        scratch_dir: str = SCRATCH_DIR,
    ):
        self.inventory = inventory or PrinterInventory()
        self.dispatcher = dispatcher or PrintDispatcher(windows=self.inventory.windows)
        self.scratch_dir = scratch_dir

    def resolve_printer(self, requested: Optional[str]) -> Optional[str]:
        """The requested printer if given, else the last known default."""
        if requested and requested.strip():
            return requested.strip()
        return self.inventory.snapshot.default_printer_name

    async def submit(self, job: PrintJob) -> JobOutcome:
        """Print ``job`` and report how it went."""
        log = get_job_logger(job.id)
        snapshot = self.inventory.snapshot
        printer = self.resolve_printer(job.requested_printer)

        log.info('Print request copies=%d media=%s printer=%s',
                 job.copies, job.media_kind.name, printer or 'default')
        log.debug('Job details: %s', job.to_dict())

        if printer and not snapshot.knows(printer):
            # Snapshot may be stale; let the OS decide
            log.warning('Printer %r not in known printers %s, trying anyway',
                        printer, list(snapshot.known_printers))

        try:
            async with printable_artifact(job.payload, job.media_kind, job_id=job.id,
                                          scratch_dir=self.scratch_dir, log=log) as path:
                result = await self.dispatcher.dispatch(
                    path,
                    job.copies,
                    printer_name=printer,
                    restricted_mode=job.restricted_mode,
                    target_page_size=job.target_page_size,
                    log=log,
                )
        except AllMethodsFailed as e:
            log.error('Print failed: %s', '; '.join(f'{name}: {err}' for name, err in e.attempts) or e)
            return JobOutcome(
                job_id=job.id,
                success=False,
                copies=job.copies,
                printer=printer,
                error=f'Print failed on printer {printer or "default"}: all printing methods failed',
            )

        log.info('Print command completed via %s', result.method)
        return JobOutcome(
            job_id=job.id,
            success=True,
            copies=job.copies,
            printer=printer,
            method=result.method,
        )
