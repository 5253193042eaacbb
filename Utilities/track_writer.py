"""
┌──────────────────────────────────────────────────────────────────────────────┐
│ Track Writer - Genome Browser Curvature Tracks                               │
├──────────────────────────────────────────────────────────────────────────────┤
│ Author: SymCurve Team | License: MIT | Version: 2025.1                       │
└──────────────────────────────────────────────────────────────────────────────┘

DESCRIPTION:
    Turns per-segment curvature arrays into genome-coordinate tables and
    writes them as UCSC bedGraph.

    Coordinates follow the BED convention (0-based start, exclusive end).
    Curvature value ``i`` of a segment starting at 1-based record position
    ``S`` covers the single base at 1-based position ``S + offset + i``,
    i.e. BED interval ``[S - 1 + offset + i, S + offset + i)``.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

import numpy as np
import pandas as pd

from Utilities.sequence_splitter import SequenceSegment

logger = logging.getLogger(__name__)

TRACK_COLUMNS = ['chrom', 'start', 'end', 'value']


def empty_track() -> pd.DataFrame:
    return pd.DataFrame({
        'chrom': pd.Series(dtype=str),
        'start': pd.Series(dtype=np.int64),
        'end': pd.Series(dtype=np.int64),
        'value': pd.Series(dtype=np.float64),
    })


def segment_track(chrom: str, segment: SequenceSegment, values: np.ndarray,
                  offset: int) -> pd.DataFrame:
    """
    Build the track rows for one segment.

    Args:
        chrom: Record (chromosome) name
        segment: Segment the values were computed from
        values: Curvature values in segment order
        offset: 0-based offset of the first value inside the segment
                (``CurvaturePipeline.offset``)

    Returns:
        DataFrame with columns chrom, start, end, value
    """
    values = np.asarray(values, dtype=np.float64)
    if values.size == 0:
        return empty_track()

    starts = np.arange(values.size, dtype=np.int64) + (segment.start - 1 + offset)
    return pd.DataFrame({
        'chrom': chrom,
        'start': starts,
        'end': starts + 1,
        'value': values,
    }, columns=TRACK_COLUMNS)


def concat_tracks(frames: Iterable[pd.DataFrame]) -> pd.DataFrame:
    frames = [frame for frame in frames if not frame.empty]
    if not frames:
        return empty_track()
    return pd.concat(frames, ignore_index=True)


def write_bedgraph(track: pd.DataFrame, path: str,
                   track_name: Optional[str] = None,
                   float_format: Optional[str] = None) -> int:
    """
    Write a curvature track as bedGraph.

    Args:
        track: DataFrame with columns chrom, start, end, value
        path: Output path
        track_name: When given, a ``track type=bedGraph`` header line is written
        float_format: printf-style format for the value column; None writes
            the shortest repr that round-trips the float64 value

    Returns:
        Number of data rows written
    """
    with open(path, 'w', encoding='utf-8', newline='\n') as f:
        if track_name:
            f.write(f'track type=bedGraph name="{track_name}"\n')
        track.to_csv(f, sep='\t', header=False, index=False,
                     columns=TRACK_COLUMNS, float_format=float_format)

    logger.info(f"Wrote {len(track):,} bedGraph row(s) to {path}")
    return len(track)
