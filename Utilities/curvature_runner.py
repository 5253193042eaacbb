"""
┌──────────────────────────────────────────────────────────────────────────────┐
│ Curvature Runner – FASTA → curvature track                                   │
├──────────────────────────────────────────────────────────────────────────────┤
│ Author: SymCurve Team | License: MIT | Version: 2025.1                       │
└──────────────────────────────────────────────────────────────────────────────┘

Each record:
  • Is split into N-free segments (N's never reach the curvature core).
  • Gets a fresh CurvaturePipeline per segment (no state shared across
    segments, records or processes).
  • Produces a small DataFrame of genome-coordinate rows.

Records are processed sequentially, or with a ``ProcessPoolExecutor`` when
``max_workers > 1``; parallel runs submit records in bounded batches so only
a few records per worker are held in memory.  Results are written in input
order.

``process_record`` must remain a top-level function of a plain module so that
``spawn``-based multiprocessing can pickle it on all platforms.
"""
from __future__ import annotations

import logging
from concurrent.futures import ProcessPoolExecutor
from itertools import islice
from time import perf_counter
from typing import Any, Dict, Iterable, Iterator, Optional, Tuple

import pandas as pd

from Curvature.matrices import DEFAULT_PARAMETERS, ParameterSet
from Curvature.pipeline import CurvaturePipeline
from Utilities.config.curvature import (
    build_curvature_config,
    roll_step_from_config,
    validate_curvature_config,
)
from Utilities.core.performance_monitor import PerformanceMonitor
from Utilities.sequence_io import read_fasta_records
from Utilities.sequence_splitter import split_n_runs, validate_segment
from Utilities.track_writer import concat_tracks, segment_track, write_bedgraph

logger = logging.getLogger(__name__)

# (name, track, bp_count, segment_count, elapsed_seconds)
RecordResult = Tuple[str, pd.DataFrame, int, int, float]

# Records in flight per worker process when running in parallel
BATCH_FACTOR = 2


def pipeline_from_config(config: Dict[str, Any],
                         parameters: ParameterSet = DEFAULT_PARAMETERS) -> CurvaturePipeline:
    """Build a CurvaturePipeline from a validated curvature config dict."""
    return CurvaturePipeline(
        roll_type=config['roll_type'],
        roll_step=roll_step_from_config(config),
        curve_step=config['curve_step'],
        scale=config['curve_scale'],
        parameters=parameters,
    )


def process_record(args: Tuple) -> RecordResult:
    """Top-level worker executed inline or by ``ProcessPoolExecutor``.

    Args:
        args: Tuple of ``(name, sequence, config, parameters)``

    Returns:
        (name, track, bp_count, segment_count, elapsed_seconds); *track* has
        columns chrom, start, end, value and may be empty
    """
    name, sequence, config, parameters = args

    t0 = perf_counter()
    pipeline = pipeline_from_config(config, parameters)

    frames = []
    segment_count = 0
    for segment in split_n_runs(sequence):
        segment_count += 1
        validate_segment(segment, name)
        if pipeline.expected_length(segment.length) == 0:
            logger.debug(
                f"{name}: segment {segment.start:,}–{segment.end:,} "
                f"({segment.length} bp) is shorter than the curvature window"
            )
            continue
        values = pipeline.compute(segment.sequence)
        frames.append(segment_track(name, segment, values, pipeline.offset))

    track = concat_tracks(frames)
    elapsed = perf_counter() - t0
    return name, track, len(sequence), segment_count, elapsed


def _record_args(records: Iterable[Tuple[str, str]], config: Dict[str, Any],
                 parameters: ParameterSet) -> Iterator[Tuple]:
    for name, sequence in records:
        if not sequence:
            logger.warning(f"Skipping empty record '{name}'")
            continue
        yield name, sequence, config, parameters


def _run_in_batches(jobs: Iterator[Tuple], max_workers: int,
                    batch_factor: int = BATCH_FACTOR) -> Iterator[RecordResult]:
    """
    Run ``process_record`` in a process pool, yielding results in input order.

    At most ``max_workers * batch_factor`` records are submitted at a time,
    so the reader never runs further ahead of the workers than one batch.
    """
    batch_size = max_workers * batch_factor
    with ProcessPoolExecutor(max_workers=max_workers) as executor:
        while True:
            batch = list(islice(jobs, batch_size))
            if not batch:
                break
            futures = [executor.submit(process_record, job) for job in batch]
            for future in futures:
                yield future.result()   # raises on worker error


def compute_tracks(records: Iterable[Tuple[str, str]],
                   config: Optional[Dict[str, Any]] = None,
                   parameters: ParameterSet = DEFAULT_PARAMETERS,
                   max_workers: Optional[int] = None,
                   monitor: Optional[PerformanceMonitor] = None) -> pd.DataFrame:
    """
    Compute the curvature track for ``(name, sequence)`` records.

    Args:
        records: Iterable of (name, sequence) tuples
        config: Curvature config (defaults to CURVATURE_CONFIG)
        parameters: Parameter tables
        max_workers: Process count; None or 1 runs inline
        monitor: Optional PerformanceMonitor receiving per-record timings

    Returns:
        Concatenated track DataFrame in input order
    """
    if config is None:
        config = build_curvature_config()
    else:
        validate_curvature_config(config)

    jobs = _record_args(records, config, parameters)

    if max_workers is not None and max_workers > 1:
        logger.info(f"Computing curvature with {max_workers} worker processes")
        results = _run_in_batches(jobs, max_workers)
    else:
        results = (process_record(job) for job in jobs)

    frames = []
    for name, track, bp_count, segment_count, elapsed in results:
        logger.info(
            f"{name}: {bp_count:,} bp, {segment_count} segment(s), "
            f"{len(track):,} value(s) in {elapsed:.2f}s"
        )
        if monitor is not None:
            monitor.record_sequence(name, elapsed, bp_count, len(track), segment_count)
        frames.append(track)

    return concat_tracks(frames)


def run_curvature(input_path: str, output_path: str,
                  config: Optional[Dict[str, Any]] = None,
                  parameters: ParameterSet = DEFAULT_PARAMETERS,
                  max_workers: Optional[int] = None) -> Dict[str, Any]:
    """
    Read a FASTA file, compute curvature for every record and write a bedGraph.

    Returns:
        PerformanceMonitor summary dict
    """
    monitor = PerformanceMonitor()
    monitor.start()

    t0 = perf_counter()
    track = compute_tracks(read_fasta_records(input_path), config, parameters,
                           max_workers=max_workers, monitor=monitor)
    monitor.record_stage("curvature", perf_counter() - t0)

    t0 = perf_counter()
    write_bedgraph(track, output_path, track_name="curvature")
    monitor.record_stage("write", perf_counter() - t0)

    summary = monitor.get_summary()
    logger.info(
        f"Curvature run complete: {summary['sequence_count']} sequence(s), "
        f"{summary['total_values']:,} value(s) in {summary['total_elapsed']:.2f}s"
    )
    logger.debug("\n" + monitor.format_summary())
    return summary
