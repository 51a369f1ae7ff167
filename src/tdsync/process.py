"""Async subprocess helper shared by the ``gh``, ``git`` and ``td`` wrappers."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path

_LOG = logging.getLogger(__name__)


@dataclass
class CompletedProcess:
    """Result of a CLI invocation."""

    returncode: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    def failure_detail(self) -> str:
        """Trimmed stderr, or the exit status when the command printed nothing."""
        detail = self.stderr.strip()
        return detail or f"exit status {self.returncode}"


async def run_process(cmd: list[str], *, cwd: Path | None = None) -> CompletedProcess:
    """Execute *cmd* in *cwd* and capture its output.

    Cancelling the awaiting task kills the child before the cancellation
    propagates, so an abandoned ``gh issue create`` cannot finish later.

    Raises:
        OSError: If the executable cannot be started.
    """
    _LOG.debug("Running: %s (cwd=%s)", " ".join(cmd), cwd)
    proc = await asyncio.create_subprocess_exec(
        *cmd,
        cwd=cwd,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
    )
    try:
        stdout_bytes, stderr_bytes = await proc.communicate()
    except asyncio.CancelledError:
        _LOG.debug("Killing %s after cancellation", cmd[0])
        try:
            proc.kill()
        except ProcessLookupError:
            pass  # already exited
        await proc.wait()
        raise
    return CompletedProcess(
        returncode=proc.returncode or 0,
        stdout=stdout_bytes.decode(errors="replace") if stdout_bytes else "",
        stderr=stderr_bytes.decode(errors="replace") if stderr_bytes else "",
    )
