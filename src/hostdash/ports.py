from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, Sequence

from hostdash.errors import ProcessFailure, SourceUnavailable

LOGGER = logging.getLogger(__name__)


class FileReader(Protocol):
    def read_text(self, path: str) -> str:
        ...


@dataclass(frozen=True, slots=True)
class ProcessResult:
    returncode: int
    stdout: str
    stderr: str


class ProcessRunner(Protocol):
    async def run(self, argv: Sequence[str], timeout: float) -> ProcessResult:
        ...


class LocalFileReader:
    """Reads kernel pseudo-files and release files from the local filesystem."""

    def read_text(self, path: str) -> str:
        try:
            return Path(path).read_text(encoding="utf-8")
        except FileNotFoundError as exc:
            raise SourceUnavailable(path, "missing") from exc
        except (OSError, UnicodeDecodeError) as exc:
            raise SourceUnavailable(path, str(exc)) from exc


class AsyncProcessRunner:
    """Runs an external utility without blocking the event loop.

    The child is killed when ``timeout`` expires or when the awaiting task is
    cancelled, so a hung utility never outlives the request that started it.
    """

    async def run(self, argv: Sequence[str], timeout: float) -> ProcessResult:
        if timeout <= 0:
            raise ValueError("timeout must be positive")
        args = list(argv)
        try:
            proc = await asyncio.create_subprocess_exec(
                *args,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as exc:
            raise ProcessFailure(args, f"failed to start: {exc}") from exc

        try:
            stdout, stderr = await asyncio.wait_for(proc.communicate(), timeout=timeout)
        except asyncio.TimeoutError as exc:
            _kill(proc)
            await proc.wait()
            raise ProcessFailure(
                args,
                f"timed out after {timeout:.1f}s",
                timed_out=True,
            ) from exc
        except asyncio.CancelledError:
            LOGGER.debug("cancelled while waiting on %s, killing pid %s", args[0], proc.pid)
            _kill(proc)
            await asyncio.shield(proc.wait())
            raise

        return ProcessResult(
            returncode=proc.returncode if proc.returncode is not None else -1,
            stdout=stdout.decode("utf-8", errors="replace"),
            stderr=stderr.decode("utf-8", errors="replace"),
        )


def _kill(proc: asyncio.subprocess.Process) -> None:
    if proc.returncode is not None:
        return
    try:
        proc.kill()
    except ProcessLookupError:
        return
