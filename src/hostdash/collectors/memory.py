from __future__ import annotations

import logging

from hostdash.errors import ParseMalformed, TelemetryError
from hostdash.models import MemoryStats
from hostdash.parsers import parse_colon_fields
from hostdash.ports import FileReader, LocalFileReader

LOGGER = logging.getLogger(__name__)

DEFAULT_MEMINFO_PATH = "/proc/meminfo"


class MemInfoReader:
    def __init__(self, reader: FileReader | None = None, path: str = DEFAULT_MEMINFO_PATH) -> None:
        self.reader = reader or LocalFileReader()
        self.path = path

    def read(self) -> MemoryStats:
        try:
            fields = parse_colon_fields(self.reader.read_text(self.path))
            total_kb = _require(fields, "MemTotal")
            available_kb = _require(fields, "MemAvailable")
        except TelemetryError as exc:
            LOGGER.warning("memory stats unavailable, using neutral default: %s", exc)
            return MemoryStats.neutral()
        total = total_kb * 1024
        used = max(total - available_kb * 1024, 0)
        return MemoryStats.from_bytes(total, used)


def _require(fields: dict[str, int], key: str) -> int:
    value = fields.get(key)
    if value is None:
        raise ParseMalformed(f"meminfo is missing {key}")
    return value
