"""Async helpers for shelling out to provider tooling."""

import asyncio
from dataclasses import dataclass
from typing import Sequence

import structlog

from ...models import ProviderQueryError

logger = structlog.get_logger(__name__)


@dataclass
class CommandResult:
    """Outcome of a finished provider command."""

    returncode: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0


async def run_command(provider_name: str, args: Sequence[str], timeout: float) -> CommandResult:
    """Run a command and capture its output.

    A missing binary or a timeout raises ProviderQueryError; a non-zero exit
    is reported through the result.
    """
    logger.debug("Running provider command", provider=provider_name, command=list(args))
    try:
        proc = await asyncio.create_subprocess_exec(
            *args,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as e:
        raise ProviderQueryError(provider_name, f"Could not run '{args[0]}': {e}") from e

    try:
        stdout, stderr = await asyncio.wait_for(proc.communicate(), timeout=timeout)
    except asyncio.TimeoutError as e:
        proc.kill()
        await proc.wait()
        raise ProviderQueryError(
            provider_name, f"'{' '.join(args)}' timed out after {timeout} seconds"
        ) from e

    result = CommandResult(
        returncode=proc.returncode,
        stdout=stdout.decode(errors="replace").strip(),
        stderr=stderr.decode(errors="replace").strip(),
    )
    if not result.ok:
        logger.debug(
            "Provider command failed",
            provider=provider_name,
            command=list(args),
            returncode=result.returncode,
            stderr=result.stderr,
        )
    return result


async def check_command(provider_name: str, args: Sequence[str], timeout: float) -> CommandResult:
    """Run a command and raise ProviderQueryError unless it exits cleanly."""
    result = await run_command(provider_name, args, timeout)
    if not result.ok:
        detail = result.stderr or result.stdout or f"exit code {result.returncode}"
        raise ProviderQueryError(provider_name, f"'{' '.join(args)}' failed: {detail}")
    return result
