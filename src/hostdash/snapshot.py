from __future__ import annotations

import asyncio
import logging
import platform
import socket
from collections.abc import Callable
from dataclasses import dataclass

from hostdash.collectors.cpu import DEFAULT_SAMPLE_MS, CpuLoadSampler, ProcStatReader
from hostdash.collectors.distro import DistroIdentifier
from hostdash.collectors.memory import MemInfoReader
from hostdash.collectors.storage import DEFAULT_MOUNT_POINT, StorageProbe
from hostdash.config import HostdashConfig
from hostdash.models import DeviceInfo, TelemetrySnapshot
from hostdash.ports import FileReader, ProcessRunner

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class HostFacts:
    platform: str
    kernel_version: str
    hostname: str


def read_host_facts() -> HostFacts:
    return HostFacts(
        platform=platform.system() or "Linux",
        kernel_version=platform.release(),
        hostname=socket.gethostname(),
    )


class SnapshotAssembler:
    """Runs the four collectors and composes one :class:`TelemetrySnapshot`.

    Collectors absorb their own source failures and return neutral values, so
    any exception reaching this class is an internal fault and is re-raised
    after the sibling collector task has been cancelled.
    """

    def __init__(
        self,
        *,
        cpu: CpuLoadSampler,
        memory: MemInfoReader,
        storage: StorageProbe,
        distro: DistroIdentifier,
        host_facts: Callable[[], HostFacts] = read_host_facts,
        cpu_sample_ms: int = DEFAULT_SAMPLE_MS,
        storage_mount: str = DEFAULT_MOUNT_POINT,
    ) -> None:
        self.cpu = cpu
        self.memory = memory
        self.storage = storage
        self.distro = distro
        self.host_facts = host_facts
        self.cpu_sample_ms = cpu_sample_ms
        self.storage_mount = storage_mount

    async def collect(self) -> TelemetrySnapshot:
        cpu_task = asyncio.ensure_future(self.cpu.sample(self.cpu_sample_ms))
        storage_task = asyncio.ensure_future(self.storage.probe(self.storage_mount))
        try:
            memory = self.memory.read()
            distro = self.distro.identify()
            facts = self.host_facts()
            cpu, storage = await asyncio.gather(cpu_task, storage_task)
        except BaseException:
            for task in (cpu_task, storage_task):
                if not task.done():
                    task.cancel()
            raise

        device = DeviceInfo(
            platform=facts.platform,
            distro=distro.name,
            icon=distro.icon_url,
            kernel_version=facts.kernel_version,
            hostname=facts.hostname,
        )
        snapshot = TelemetrySnapshot(device=device, cpu=cpu, memory=memory, storage=storage)
        LOGGER.debug(
            "snapshot collected: cpu=%s%% mem=%s%% storage=%s%%",
            cpu.percent,
            memory.percent,
            storage.percent,
        )
        return snapshot


def build_assembler(
    config: HostdashConfig,
    *,
    reader: FileReader | None = None,
    runner: ProcessRunner | None = None,
    host_facts: Callable[[], HostFacts] = read_host_facts,
) -> SnapshotAssembler:
    return SnapshotAssembler(
        cpu=CpuLoadSampler(ProcStatReader(reader, path=str(config.stat_path))),
        memory=MemInfoReader(reader, path=str(config.meminfo_path)),
        storage=StorageProbe(runner, timeout_s=config.df_timeout_s),
        distro=DistroIdentifier(
            reader,
            path=str(config.os_release_path),
            icon_base_url=config.icon_base_url,
        ),
        host_facts=host_facts,
        cpu_sample_ms=config.cpu_sample_ms,
        storage_mount=config.storage_mount,
    )
