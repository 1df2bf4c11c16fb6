from __future__ import annotations

import asyncio

import pytest

import hostdash.collectors.cpu as cpu_mod
from hostdash.collectors.cpu import CpuLoadSampler, ProcStatReader, compute_cpu_percent
from hostdash.errors import SourceUnavailable
from hostdash.models import CpuSample


class SequenceReader:
    """Returns successive texts for each read; ``None`` simulates an unreadable file."""

    def __init__(self, texts: list[str | None]) -> None:
        self.texts = list(texts)
        self.paths: list[str] = []

    def read_text(self, path: str) -> str:
        self.paths.append(path)
        text = self.texts.pop(0)
        if text is None:
            raise SourceUnavailable(path, "missing")
        return text


def _stat_line(*ticks: int) -> str:
    return "cpu  " + " ".join(str(tick) for tick in ticks) + "\ncpu0 1 2 3 4\n"


def test_reader_sums_idle_iowait_and_all_ticks() -> None:
    reader = SequenceReader([_stat_line(100, 0, 50, 700, 10, 0, 0, 0, 99, 99)])

    sample = ProcStatReader(reader, path="/fake/stat").read()

    assert sample == CpuSample(idle_ticks=710, total_ticks=860)
    assert reader.paths == ["/fake/stat"]


def test_reader_counts_steal_in_total() -> None:
    sample = ProcStatReader(SequenceReader([_stat_line(1, 1, 1, 1, 1, 1, 1, 5)])).read()

    assert sample.total_ticks == 12
    assert sample.idle_ticks == 2


def test_reader_returns_zero_sample_when_unreadable() -> None:
    sample = ProcStatReader(SequenceReader([None])).read()

    assert sample == CpuSample(idle_ticks=0, total_ticks=0)


def test_reader_returns_zero_sample_for_garbage() -> None:
    sample = ProcStatReader(SequenceReader(["nonsense\n"])).read()

    assert sample == CpuSample(idle_ticks=0, total_ticks=0)


def test_compute_percent_matches_reference_window() -> None:
    start = CpuSample(idle_ticks=710, total_ticks=860)
    end = CpuSample(idle_ticks=862, total_ticks=1042)

    assert compute_cpu_percent(start, end) == 17


@pytest.mark.parametrize(
    ("start", "end"),
    [
        (CpuSample(10, 100), CpuSample(10, 100)),
        (CpuSample(500, 1000), CpuSample(0, 0)),
        (CpuSample(0, 50), CpuSample(10, 40)),
    ],
)
def test_compute_percent_is_zero_without_forward_progress(start: CpuSample, end: CpuSample) -> None:
    assert compute_cpu_percent(start, end) == 0


@pytest.mark.parametrize(
    ("start", "end", "expected"),
    [
        (CpuSample(0, 0), CpuSample(100, 100), 0),
        (CpuSample(0, 0), CpuSample(0, 100), 100),
        (CpuSample(100, 100), CpuSample(50, 200), 100),
        (CpuSample(0, 0), CpuSample(300, 100), 0),
    ],
)
def test_compute_percent_is_clamped(start: CpuSample, end: CpuSample, expected: int) -> None:
    assert compute_cpu_percent(start, end) == expected


def test_sampler_sleeps_cooperatively_between_reads(monkeypatch) -> None:
    reader = SequenceReader(
        [
            _stat_line(100, 0, 50, 700, 10, 0, 0, 0),
            _stat_line(120, 0, 60, 850, 12, 0, 0, 0),
        ]
    )
    sleeps: list[float] = []

    async def fake_sleep(delay: float) -> None:
        sleeps.append(delay)

    monkeypatch.setattr(cpu_mod.asyncio, "sleep", fake_sleep)

    load = asyncio.run(CpuLoadSampler(ProcStatReader(reader)).sample(100))

    assert load.percent == 17
    assert sleeps == [0.1]
    assert reader.texts == []


def test_sampler_recovers_when_second_read_fails() -> None:
    reader = SequenceReader([_stat_line(100, 0, 50, 700, 10, 0, 0, 0), None])

    load = asyncio.run(CpuLoadSampler(ProcStatReader(reader)).sample(1))

    assert load.percent == 0


@pytest.mark.parametrize("interval", [0, -5])
def test_sampler_rejects_non_positive_interval(interval: int) -> None:
    sampler = CpuLoadSampler(ProcStatReader(SequenceReader([])))

    with pytest.raises(ValueError):
        asyncio.run(sampler.sample(interval))


def test_sampler_propagates_cancellation() -> None:
    reader = SequenceReader([_stat_line(1, 0, 1, 1, 0, 0, 0, 0), _stat_line(2, 0, 2, 2, 0, 0, 0, 0)])
    sampler = CpuLoadSampler(ProcStatReader(reader))

    async def scenario() -> None:
        task = asyncio.ensure_future(sampler.sample(10_000))
        await asyncio.sleep(0)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

    asyncio.run(scenario())
    assert len(reader.texts) == 1
