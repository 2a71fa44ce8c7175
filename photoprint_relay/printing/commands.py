"""
External command runner.

Every OS print or printer query goes through :func:`run_command`, which
runs the command without blocking the event loop and bounds it with a
timeout.
"""

import asyncio
import sys
from dataclasses import dataclass
from typing import Optional, Sequence

from ..errors import CommandError, CommandTimeout
from ..logging_config import AnyLogger, get_logger

logger = get_logger(__name__)


def is_windows() -> bool:
    """True when running on a Windows host."""
    return sys.platform == 'win32'


@dataclass
class CommandResult:
    """Decoded output of a finished command."""

    returncode: int
    stdout: str
    stderr: str


async def run_command(
    args: Sequence[str],
    timeout: float,
    log: Optional[AnyLogger] = None,
) -> CommandResult:
    """
    Run ``args`` as a subprocess and wait for it.

    Args:
        args: Program and arguments, no shell interpretation
        timeout: Seconds before the process is killed
        log: Logger for command output (module logger by default)

    Returns:
        CommandResult of a zero exit

    Raises:
        CommandTimeout: The process outlived ``timeout``
        CommandError: The program is missing or exited non-zero
    """
    log = log or logger
    program = args[0]
    log.debug('Running %s', program)

    try:
        process = await asyncio.create_subprocess_exec(
            *args,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as e:
        raise CommandError(program, stderr=str(e)) from e

    try:
        stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=timeout)
    except asyncio.TimeoutError:
        try:
            process.kill()
        except ProcessLookupError:
            pass
        await process.wait()
        raise CommandTimeout(program, timeout)

    result = CommandResult(
        returncode=process.returncode,
        stdout=stdout.decode(errors='replace') if stdout else '',
        stderr=stderr.decode(errors='replace') if stderr else '',
    )
    if result.stdout.strip():
        log.debug('%s: %s', program, result.stdout.strip())
    if result.stderr.strip():
        log.warning('%s: %s', program, result.stderr.strip())

    if result.returncode != 0:
        raise CommandError(program, result.returncode, result.stderr)
    return result
