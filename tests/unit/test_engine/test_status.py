"""
Unit tests for the status reporter and the MemorySnapshot model.
"""

import threading
from types import SimpleNamespace
from unittest.mock import Mock, patch

import pytest

from leaklab.engine.scheduler import LeakScheduler
from leaklab.engine.status import (
    StatusReporter,
    get_collection_counts,
    get_total_available_memory,
    read_cgroup_memory_limit,
)
from leaklab.models.snapshot import BYTES_PER_MB, MemorySnapshot, bytes_to_mb

GB = 1024 * BYTES_PER_MB


@pytest.fixture
def scheduler(engine):
    scheduler = LeakScheduler(engine, chunk_bytes=1024, interval_seconds=0.1)
    yield scheduler
    scheduler.stop()


@pytest.fixture
def process():
    process = Mock()
    process.memory_info.return_value = SimpleNamespace(rss=300 * BYTES_PER_MB)
    return process


@pytest.mark.unit
class TestCgroupLimit:
    """Test cases for read_cgroup_memory_limit."""

    def test_numeric_limit(self, temp_dir):
        limit_file = temp_dir / "memory.max"
        limit_file.write_text("1073741824\n")

        assert read_cgroup_memory_limit([limit_file]) == GB

    def test_unlimited(self, temp_dir):
        limit_file = temp_dir / "memory.max"
        limit_file.write_text("max\n")

        assert read_cgroup_memory_limit([limit_file]) is None

    def test_missing_files(self, temp_dir):
        assert read_cgroup_memory_limit([temp_dir / "nope", temp_dir / "also-nope"]) is None

    def test_first_readable_file_wins(self, temp_dir):
        v1_file = temp_dir / "memory.limit_in_bytes"
        v1_file.write_text("2147483648")

        assert read_cgroup_memory_limit([temp_dir / "missing", v1_file]) == 2 * GB

    def test_garbage(self, temp_dir):
        limit_file = temp_dir / "memory.max"
        limit_file.write_text("lots")

        assert read_cgroup_memory_limit([limit_file]) is None


@pytest.mark.unit
class TestAvailableMemory:
    """Test cases for get_total_available_memory."""

    @patch("leaklab.engine.status.psutil.virtual_memory")
    def test_physical_memory_without_limit(self, mock_vm):
        mock_vm.return_value = SimpleNamespace(total=8 * GB)

        assert get_total_available_memory(None) == 8 * GB

    @patch("leaklab.engine.status.psutil.virtual_memory")
    def test_cgroup_limit_caps_physical(self, mock_vm):
        mock_vm.return_value = SimpleNamespace(total=8 * GB)

        assert get_total_available_memory(2 * GB) == 2 * GB

    @patch("leaklab.engine.status.psutil.virtual_memory")
    def test_huge_cgroup_v1_limit_ignored(self, mock_vm):
        mock_vm.return_value = SimpleNamespace(total=8 * GB)

        assert get_total_available_memory(2**63 - 4096) == 8 * GB

    def test_collection_counts(self):
        counts = get_collection_counts()

        assert len(counts) == 3
        assert all(isinstance(c, int) and c >= 0 for c in counts)


@pytest.mark.unit
class TestStatusReporter:
    """Test cases for StatusReporter.get_snapshot."""

    @patch("leaklab.engine.status.read_cgroup_memory_limit", return_value=None)
    @patch("leaklab.engine.status.psutil.virtual_memory")
    def test_snapshot_fields(self, mock_vm, _mock_cgroup, engine, scheduler, process):
        mock_vm.return_value = SimpleNamespace(total=4 * GB)
        engine.add_buffer(2 * BYTES_PER_MB)
        engine.add_buffer(BYTES_PER_MB)

        reporter = StatusReporter(engine, scheduler, high_memory_load_percent=90, process=process)
        with patch("leaklab.engine.status.gc.get_stats") as mock_stats:
            mock_stats.return_value = [{"collections": 7}, {"collections": 3}, {"collections": 1}]
            snapshot = reporter.get_snapshot()

        assert snapshot.retained_bytes == 3 * BYTES_PER_MB
        assert snapshot.buffer_count == 2
        assert snapshot.is_leaking is False
        assert snapshot.heap_size_bytes == 300 * BYTES_PER_MB
        assert (snapshot.gen0_collections, snapshot.gen1_collections, snapshot.gen2_collections) == (7, 3, 1)
        assert snapshot.total_available_memory_bytes == 4 * GB
        assert snapshot.high_memory_load_threshold_bytes == 4 * GB * 90 // 100

    def test_snapshot_tracks_scheduler(self, engine, scheduler, process):
        reporter = StatusReporter(engine, scheduler, process=process)

        scheduler.start()
        assert reporter.get_snapshot().is_leaking is True

        scheduler.stop()
        assert reporter.get_snapshot().is_leaking is False

    def test_snapshot_is_fresh_each_call(self, engine, scheduler, process):
        reporter = StatusReporter(engine, scheduler, process=process)

        first = reporter.get_snapshot()
        engine.add_buffer(BYTES_PER_MB)
        second = reporter.get_snapshot()

        assert first.buffer_count == 0
        assert second.buffer_count == 1

    def test_default_process_is_current(self, engine, scheduler):
        snapshot = StatusReporter(engine, scheduler).get_snapshot()

        assert snapshot.heap_size_bytes > 0
        assert snapshot.total_available_memory_bytes > 0


@pytest.fixture
def blocked_fill(engine):
    """Make the engine's filler hang until released; yields (entered, release) events."""
    entered = threading.Event()
    release = threading.Event()
    real_fill = engine._fill

    def fill(size_bytes):
        entered.set()
        release.wait(5.0)
        return real_fill(size_bytes)

    with patch.object(engine, "_fill", side_effect=fill):
        yield entered, release
        release.set()


def _snapshot_in_thread(reporter):
    snapshots = []
    thread = threading.Thread(target=lambda: snapshots.append(reporter.get_snapshot()))
    thread.start()
    thread.join(1.0)
    return thread, snapshots


@pytest.mark.unit
class TestSnapshotDuringAllocation:
    """get_snapshot must answer while an allocation is still being filled."""

    def test_one_shot_allocation_in_flight(self, engine, scheduler, process, blocked_fill):
        entered, release = blocked_fill
        reporter = StatusReporter(engine, scheduler, process=process)

        writer = threading.Thread(target=engine.add_buffer, args=(BYTES_PER_MB,))
        writer.start()
        assert entered.wait(2.0)

        thread, snapshots = _snapshot_in_thread(reporter)

        assert not thread.is_alive()
        assert snapshots[0].buffer_count == 0
        assert snapshots[0].retained_bytes == 0

        release.set()
        writer.join(2.0)
        assert engine.totals() == (BYTES_PER_MB, 1)

    def test_scheduler_iteration_in_flight(self, engine, process, blocked_fill):
        entered, release = blocked_fill
        scheduler = LeakScheduler(engine, chunk_bytes=1024, interval_seconds=0.1, stop_join_timeout=2.0)
        reporter = StatusReporter(engine, scheduler, process=process)

        scheduler.start()
        try:
            assert entered.wait(2.0)

            thread, snapshots = _snapshot_in_thread(reporter)

            assert not thread.is_alive()
            assert snapshots[0].is_leaking is True
            assert snapshots[0].buffer_count == 0
        finally:
            release.set()
            scheduler.stop()


@pytest.mark.unit
class TestMemorySnapshot:
    """Test cases for the JSON rendering of a snapshot."""

    def test_to_dict_field_names_and_rounding(self):
        snapshot = MemorySnapshot(
            retained_bytes=50 * BYTES_PER_MB,
            buffer_count=1,
            is_leaking=True,
            heap_size_bytes=123_456_789,
            gen0_collections=10,
            gen1_collections=2,
            gen2_collections=1,
            high_memory_load_threshold_bytes=900 * BYTES_PER_MB,
            total_available_memory_bytes=1000 * BYTES_PER_MB,
        )

        assert snapshot.to_dict() == {
            "leakedMemoryMB": 50.0,
            "objectCount": 1,
            "isLeaking": True,
            "gcHeapSizeMB": 117.74,
            "gen0Collections": 10,
            "gen1Collections": 2,
            "gen2Collections": 1,
            "highMemoryLoadThresholdMB": 900.0,
            "totalAvailableMemoryMB": 1000.0,
        }

    def test_bytes_to_mb(self):
        assert bytes_to_mb(0) == 0.0
        assert bytes_to_mb(BYTES_PER_MB + BYTES_PER_MB // 2) == 1.5
