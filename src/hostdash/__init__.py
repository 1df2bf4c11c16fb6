"""Host telemetry snapshot collector for the self-hosted dashboard."""

from .models import (
    CpuLoad,
    CpuSample,
    DeviceInfo,
    DistroInfo,
    MemoryStats,
    StorageStats,
    TelemetrySnapshot,
)
from .snapshot import SnapshotAssembler, build_assembler

__all__ = [
    "CpuLoad",
    "CpuSample",
    "DeviceInfo",
    "DistroInfo",
    "MemoryStats",
    "SnapshotAssembler",
    "StorageStats",
    "TelemetrySnapshot",
    "build_assembler",
]
