"""
┌──────────────────────────────────────────────────────────────────────────────┐
│ PerformanceMonitor - Curvature Run Telemetry                                 │
├──────────────────────────────────────────────────────────────────────────────┤
│ Author: SymCurve Team | License: MIT | Version: 2025.1                       │
└──────────────────────────────────────────────────────────────────────────────┘

DESCRIPTION:
    Thread-safe performance monitor that tracks per-record and per-stage
    timings across an entire curvature run.

    Tracks:
        - Per-record runtime, base pairs, segments and emitted values
        - Named stage durations (reading, curvature, writing)
        - Overall throughput

    Usage::

        from Utilities.core.performance_monitor import PerformanceMonitor

        monitor = PerformanceMonitor()
        monitor.start()

        # After a record worker returns
        monitor.record_sequence("chr1", elapsed=1.2, bp_count=50_000,
                                value_count=49_937, segment_count=1)

        monitor.record_stage("write", elapsed=0.4)

        summary = monitor.get_summary()
        print(summary["throughput_bps"])
"""

from __future__ import annotations

import logging
import threading
from time import perf_counter
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)


class PerformanceMonitor:
    """
    Thread-safe performance monitor for curvature runs.

    All ``record_*`` methods are safe to call from multiple threads
    (e.g., when collecting results from a ``ProcessPoolExecutor``).
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._start_time: Optional[float] = None
        self._stage_records: Dict[str, float] = {}
        self._sequence_records: List[Dict[str, Any]] = []

    # ------------------------------------------------------------------
    # LIFECYCLE
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Start the global timer.  Must be called before ``record_*`` methods."""
        self._start_time = perf_counter()

    # ------------------------------------------------------------------
    # RECORDING
    # ------------------------------------------------------------------

    def record_stage(self, stage_name: str, elapsed: float) -> None:
        """
        Record the wall-clock duration of a named stage.

        Args:
            stage_name: Human-readable stage name (e.g. ``"curvature"``,
                        ``"write"``).
            elapsed:    Duration in seconds.
        """
        with self._lock:
            self._stage_records[stage_name] = elapsed

    def record_sequence(
        self,
        name: str,
        elapsed: float,
        bp_count: int,
        value_count: int,
        segment_count: int = 1,
    ) -> None:
        """
        Record the processing of one FASTA record.

        Args:
            name:          Record name.
            elapsed:       Wall-clock time to process the record (seconds).
            bp_count:      Record length in base pairs (including N's).
            value_count:   Number of curvature values produced.
            segment_count: Number of N-free segments the record was split into.
        """
        with self._lock:
            self._sequence_records.append(
                {
                    "name": name,
                    "elapsed": elapsed,
                    "bp_count": bp_count,
                    "value_count": value_count,
                    "segment_count": segment_count,
                }
            )

    # ------------------------------------------------------------------
    # SUMMARY
    # ------------------------------------------------------------------

    def get_summary(self) -> Dict[str, Any]:
        """
        Return a snapshot of all collected performance metrics.

        Returns:
            Dict with keys::

                {
                    "total_elapsed":      float,   # seconds since start()
                    "total_bp_processed": int,
                    "total_values":       int,
                    "throughput_bps":     float,   # bp / second
                    "sequence_count":     int,
                    "sequence_records":   list,    # per-record dicts
                    "stage_times":        dict,    # stage_name → elapsed
                    "slowest_sequence":   str | None,
                }
        """
        with self._lock:
            elapsed_since_start = (
                perf_counter() - self._start_time if self._start_time else 0.0
            )
            total_bp = sum(r["bp_count"] for r in self._sequence_records)
            total_values = sum(r["value_count"] for r in self._sequence_records)

            slowest = (
                max(self._sequence_records, key=lambda r: r["elapsed"])["name"]
                if self._sequence_records
                else None
            )

            return {
                "total_elapsed": elapsed_since_start,
                "total_bp_processed": total_bp,
                "total_values": total_values,
                "throughput_bps": (
                    total_bp / elapsed_since_start if elapsed_since_start > 0 else 0.0
                ),
                "sequence_count": len(self._sequence_records),
                "sequence_records": list(self._sequence_records),
                "stage_times": dict(self._stage_records),
                "slowest_sequence": slowest,
            }

    def format_summary(self) -> str:
        """
        Return a human-readable performance summary table.
        """
        s = self.get_summary()

        lines: List[str] = [
            "══════════════════════════════════════════════════",
            "  Performance Summary",
            "══════════════════════════════════════════════════",
            f"  Total runtime      : {s['total_elapsed']:.3f} s",
            f"  Base pairs         : {s['total_bp_processed']:,}",
            f"  Curvature values   : {s['total_values']:,}",
            f"  Throughput         : {s['throughput_bps']:,.0f} bp/s",
            f"  Sequences          : {s['sequence_count']}",
        ]

        if s.get("stage_times"):
            lines.append("")
            lines.append("  Stage Times:")
            for stage, t in sorted(s["stage_times"].items()):
                lines.append(f"    {stage:<20} {t:.3f} s")

        if s.get("sequence_records"):
            lines.append("")
            lines.append(f"    {'Sequence':<22} {'Time (s)':>9}  {'bp':>12}  {'Segments':>8}")
            lines.append("    " + "-" * 56)
            for rec in s["sequence_records"]:
                lines.append(
                    f"    {rec['name'][:22]:<22} {rec['elapsed']:>9.3f}  "
                    f"{rec['bp_count']:>12,}  {rec['segment_count']:>8}"
                )
            if s.get("slowest_sequence"):
                lines.append(f"\n  Slowest sequence: {s['slowest_sequence']}")

        lines.append("══════════════════════════════════════════════════")
        return "\n".join(lines)
