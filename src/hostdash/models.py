from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

GIB = 1024**3


@dataclass(frozen=True, slots=True)
class CpuSample:
    idle_ticks: int
    total_ticks: int


@dataclass(frozen=True, slots=True)
class CpuLoad:
    percent: int

    def to_dict(self) -> dict[str, Any]:
        return {"percent": self.percent, "load": self.percent}


@dataclass(frozen=True, slots=True)
class MemoryStats:
    total_bytes: int
    used_bytes: int
    percent: int
    used_gb: str
    total_gb: str

    @classmethod
    def from_bytes(cls, total_bytes: int, used_bytes: int) -> "MemoryStats":
        total_bytes = max(total_bytes, 0)
        used_bytes = max(used_bytes, 0)
        return cls(
            total_bytes=total_bytes,
            used_bytes=used_bytes,
            percent=percent_of(used_bytes, total_bytes),
            used_gb=format_tenths(used_bytes / GIB),
            total_gb=format_tenths(total_bytes / GIB),
        )

    @classmethod
    def neutral(cls) -> "MemoryStats":
        return cls(total_bytes=0, used_bytes=0, percent=0, used_gb="0.0", total_gb="0.0")

    def to_dict(self) -> dict[str, Any]:
        return {
            "percent": self.percent,
            "usedGB": self.used_gb,
            "totalGB": self.total_gb,
            "usedBytes": self.used_bytes,
            "totalBytes": self.total_bytes,
        }


@dataclass(frozen=True, slots=True)
class StorageStats:
    total_bytes: int
    used_bytes: int
    percent: int
    used_gb: str
    total_gb: str

    @classmethod
    def from_bytes(cls, total_bytes: int, used_bytes: int) -> "StorageStats":
        total_bytes = max(total_bytes, 0)
        used_bytes = max(used_bytes, 0)
        return cls(
            total_bytes=total_bytes,
            used_bytes=used_bytes,
            percent=percent_of(used_bytes, total_bytes),
            used_gb=str(round_half_up(used_bytes / GIB)),
            total_gb=str(round_half_up(total_bytes / GIB)),
        )

    @classmethod
    def neutral(cls) -> "StorageStats":
        return cls(total_bytes=0, used_bytes=0, percent=0, used_gb="0", total_gb="0")

    def to_dict(self) -> dict[str, Any]:
        return {
            "percent": self.percent,
            "usedGB": self.used_gb,
            "totalGB": self.total_gb,
            "usedBytes": self.used_bytes,
            "totalBytes": self.total_bytes,
        }


@dataclass(frozen=True, slots=True)
class DistroInfo:
    name: str
    icon_url: str | None = None


@dataclass(frozen=True, slots=True)
class DeviceInfo:
    platform: str
    distro: str
    icon: str | None
    kernel_version: str
    hostname: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "platform": self.platform,
            "distro": self.distro,
            "icon": self.icon,
            "kernelVersion": self.kernel_version,
            "hostname": self.hostname,
        }


@dataclass(frozen=True, slots=True)
class TelemetrySnapshot:
    device: DeviceInfo
    cpu: CpuLoad
    memory: MemoryStats
    storage: StorageStats

    def to_dict(self) -> dict[str, Any]:
        return {
            "device": self.device.to_dict(),
            "cpu": self.cpu.to_dict(),
            "memory": self.memory.to_dict(),
            "storage": self.storage.to_dict(),
        }


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def percent_of(part: int, whole: int) -> int:
    if whole <= 0:
        return 0
    return min(max(round_half_up(part / whole * 100), 0), 100)


def format_tenths(value: float) -> str:
    return f"{round_half_up(value * 10) / 10:.1f}"
