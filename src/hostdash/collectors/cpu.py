from __future__ import annotations

import asyncio
import logging

from hostdash.errors import TelemetryError
from hostdash.models import CpuLoad, CpuSample
from hostdash.parsers import parse_cpu_ticks
from hostdash.ports import FileReader, LocalFileReader

LOGGER = logging.getLogger(__name__)

DEFAULT_STAT_PATH = "/proc/stat"
DEFAULT_SAMPLE_MS = 100

# user nice system [idle iowait] irq softirq steal
_IDLE_INDEXES = (3, 4)


class ProcStatReader:
    def __init__(self, reader: FileReader | None = None, path: str = DEFAULT_STAT_PATH) -> None:
        self.reader = reader or LocalFileReader()
        self.path = path

    def read(self) -> CpuSample:
        try:
            ticks = parse_cpu_ticks(self.reader.read_text(self.path))
        except TelemetryError as exc:
            LOGGER.warning("cpu counters unavailable, using zero sample: %s", exc)
            return CpuSample(idle_ticks=0, total_ticks=0)
        idle = sum(ticks[index] for index in _IDLE_INDEXES)
        return CpuSample(idle_ticks=idle, total_ticks=sum(ticks))


def compute_cpu_percent(start: CpuSample, end: CpuSample) -> int:
    delta_idle = end.idle_ticks - start.idle_ticks
    delta_total = end.total_ticks - start.total_ticks
    if delta_total <= 0:
        return 0
    busy = 100 - (100 * delta_idle) // delta_total
    return min(max(busy, 0), 100)


class CpuLoadSampler:
    """Derives utilization from two counter readings taken ``interval_ms`` apart."""

    def __init__(self, stat_reader: ProcStatReader | None = None) -> None:
        self.stat_reader = stat_reader or ProcStatReader()

    async def sample(self, interval_ms: int = DEFAULT_SAMPLE_MS) -> CpuLoad:
        if not isinstance(interval_ms, int) or interval_ms <= 0:
            raise ValueError("interval_ms must be a positive integer")
        start = self.stat_reader.read()
        await asyncio.sleep(interval_ms / 1000)
        end = self.stat_reader.read()
        percent = compute_cpu_percent(start, end)
        LOGGER.debug("cpu sample over %sms: %s -> %s = %s%%", interval_ms, start, end, percent)
        return CpuLoad(percent=percent)
