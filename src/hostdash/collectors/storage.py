from __future__ import annotations

import logging

from hostdash.errors import ProcessFailure, TelemetryError
from hostdash.models import StorageStats
from hostdash.parsers import parse_df_usage
from hostdash.ports import AsyncProcessRunner, ProcessRunner

LOGGER = logging.getLogger(__name__)

DEFAULT_MOUNT_POINT = "/"
DEFAULT_TIMEOUT_S = 5.0


class StorageProbe:
    """Reads filesystem usage for a mount point from ``df`` in byte units."""

    def __init__(
        self,
        runner: ProcessRunner | None = None,
        *,
        timeout_s: float = DEFAULT_TIMEOUT_S,
        df_command: str = "df",
    ) -> None:
        if timeout_s <= 0:
            raise ValueError("timeout_s must be positive")
        self.runner = runner or AsyncProcessRunner()
        self.timeout_s = timeout_s
        self.df_command = df_command

    def command(self, mount_point: str) -> list[str]:
        # -P keeps long device names on the data line instead of wrapping it
        return [self.df_command, "-B1", "-P", mount_point]

    async def probe(self, mount_point: str = DEFAULT_MOUNT_POINT) -> StorageStats:
        argv = self.command(mount_point)
        try:
            result = await self.runner.run(argv, timeout=self.timeout_s)
            if result.returncode != 0:
                raise ProcessFailure(
                    argv,
                    f"exited with {result.returncode}: {result.stderr.strip()}",
                    returncode=result.returncode,
                )
            total, used = parse_df_usage(result.stdout)
        except TelemetryError as exc:
            LOGGER.warning("storage stats for %s unavailable, using neutral default: %s", mount_point, exc)
            return StorageStats.neutral()
        return StorageStats.from_bytes(total, used)
