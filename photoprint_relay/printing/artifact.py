"""
Transient print artifacts.

The submitted image is written to the scratch directory for the OS print
tooling to read, and removed again however the print attempt ends.
"""

import uuid
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, Awaitable, Callable, Optional, TypeVar

from ..config import SCRATCH_DIR
from ..logging_config import AnyLogger, get_logger
from ..models import MediaKind

logger = get_logger(__name__)

T = TypeVar('T')


@asynccontextmanager
async def printable_artifact(
    payload: bytes,
    media_kind: MediaKind,
    job_id: Optional[str] = None,
    scratch_dir: Optional[str] = None,
    log: Optional[AnyLogger] = None,
) -> AsyncIterator[Path]:
    """
    Write ``payload`` to ``<scratch_dir>/<job_id>.<ext>`` and yield its path.

    The file is deleted on exit. A failed delete is logged and never
    replaces the outcome of the ``async with`` body.
    """
    log = log or logger
    name = job_id or str(uuid.uuid4())
    path = Path(scratch_dir or SCRATCH_DIR) / f'{name}.{media_kind.extension}'

    try:
        path.write_bytes(payload)
        log.info('Saved print file to %s', path)
        yield path
    finally:
        try:
            path.unlink(missing_ok=True)
            log.debug('Temp file removed: %s', path)
        except OSError as e:
            log.warning('Failed to remove temp file %s: %s', path, e)


async def with_printable_artifact(
    payload: bytes,
    media_kind: MediaKind,
    body: Callable[[Path], Awaitable[T]],
    **kwargs,
) -> T:
    """Run ``body`` with the artifact path; the artifact is removed afterwards."""
    async with printable_artifact(payload, media_kind, **kwargs) as path:
        return await body(path)
