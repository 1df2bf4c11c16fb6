from __future__ import annotations


class TelemetryError(Exception):
    """Base class for failures a collector absorbs into its neutral default."""


class SourceUnavailable(TelemetryError):
    def __init__(self, path: str, reason: str = "unreadable") -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


class ParseMalformed(TelemetryError):
    pass


class ProcessFailure(TelemetryError):
    def __init__(
        self,
        argv: list[str],
        reason: str,
        *,
        returncode: int | None = None,
        timed_out: bool = False,
    ) -> None:
        super().__init__(f"{' '.join(argv)}: {reason}")
        self.argv = list(argv)
        self.reason = reason
        self.returncode = returncode
        self.timed_out = timed_out
