"""
Tests for PerformanceMonitor run telemetry.
"""

import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import threading
import time


class TestPerformanceMonitor:
    """Unit tests for PerformanceMonitor."""

    def test_start_and_elapsed(self):
        from Utilities.core.performance_monitor import PerformanceMonitor
        monitor = PerformanceMonitor()
        monitor.start()
        time.sleep(0.05)
        summary = monitor.get_summary()
        assert summary["total_elapsed"] >= 0.04

    def test_elapsed_zero_before_start(self):
        from Utilities.core.performance_monitor import PerformanceMonitor
        summary = PerformanceMonitor().get_summary()
        assert summary["total_elapsed"] == 0.0
        assert summary["throughput_bps"] == 0.0

    def test_record_sequence(self):
        from Utilities.core.performance_monitor import PerformanceMonitor
        monitor = PerformanceMonitor()
        monitor.start()
        monitor.record_sequence("chr1", elapsed=1.0, bp_count=50_000,
                                value_count=49_958, segment_count=3)
        summary = monitor.get_summary()
        assert summary["sequence_count"] == 1
        assert summary["sequence_records"][0]["segment_count"] == 3
        assert summary["total_bp_processed"] == 50_000
        assert summary["total_values"] == 49_958

    def test_record_stage(self):
        from Utilities.core.performance_monitor import PerformanceMonitor
        monitor = PerformanceMonitor()
        monitor.start()
        monitor.record_stage("curvature", 3.5)
        summary = monitor.get_summary()
        assert summary["stage_times"]["curvature"] == 3.5

    def test_slowest_sequence(self):
        from Utilities.core.performance_monitor import PerformanceMonitor
        monitor = PerformanceMonitor()
        monitor.start()
        monitor.record_sequence("fast", 0.1, 100, 60)
        monitor.record_sequence("slow", 5.0, 100, 60)
        assert monitor.get_summary()["slowest_sequence"] == "slow"

    def test_slowest_none_without_records(self):
        from Utilities.core.performance_monitor import PerformanceMonitor
        monitor = PerformanceMonitor()
        monitor.start()
        assert monitor.get_summary()["slowest_sequence"] is None

    def test_throughput_positive_after_sequence(self):
        from Utilities.core.performance_monitor import PerformanceMonitor
        monitor = PerformanceMonitor()
        monitor.start()
        time.sleep(0.01)
        monitor.record_sequence("chr1", 0.01, 10_000, 9_958)
        assert monitor.get_summary()["throughput_bps"] > 0

    def test_summary_is_snapshot(self):
        from Utilities.core.performance_monitor import PerformanceMonitor
        monitor = PerformanceMonitor()
        monitor.start()
        summary = monitor.get_summary()
        monitor.record_sequence("late", 1.0, 10, 1)
        assert summary["sequence_records"] == []

    def test_thread_safety(self):
        from Utilities.core.performance_monitor import PerformanceMonitor
        monitor = PerformanceMonitor()
        monitor.start()

        def worker(n):
            for i in range(100):
                monitor.record_sequence(f"t{n}_{i}", 0.001, 10, 1)

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert monitor.get_summary()["sequence_count"] == 400

    def test_format_summary(self):
        from Utilities.core.performance_monitor import PerformanceMonitor
        monitor = PerformanceMonitor()
        monitor.start()
        monitor.record_stage("write", 0.2)
        monitor.record_sequence("chrM", 0.3, 16_569, 16_527)
        text = monitor.format_summary()
        assert "Performance Summary" in text
        assert "write" in text
        assert "chrM" in text
        assert "16,569" in text
