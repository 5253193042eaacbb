"""
┌──────────────────────────────────────────────────────────────────────────────┐
│ Sequence Splitter - N-free Segment Iterator                                  │
├──────────────────────────────────────────────────────────────────────────────┤
│ Author: SymCurve Team | License: MIT | Version: 2025.1                       │
└──────────────────────────────────────────────────────────────────────────────┘

DESCRIPTION:
    Splits a record on runs of N so that unknown bases never reach the
    curvature core.  N is the only separator: any other symbol stays inside
    its segment and is rejected by ``validate_segment`` (or by the triplet
    lookup) with ``NucleotideLookupError``.

    Example:

        ACGTNNNNGGTACNA
        └─┬┘    └─┬─┘
          1–4     9–13      (1-based, inclusive)

USAGE::

    for segment in split_n_runs(record_sequence):
        validate_segment(segment, record_name)
        values = pipeline.compute(segment.sequence)
        # segment.start is the 1-based record position of segment.sequence[0]
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Iterator

from Curvature.matrices import NucleotideLookupError

logger = logging.getLogger(__name__)

_N_FREE_RUN_RE = re.compile(r'[^N]+')
_INVALID_SYMBOL_RE = re.compile(r'[^ACGT]')


@dataclass(frozen=True)
class SequenceSegment:
    """
    Contiguous N-free stretch of a record.

    Attributes:
        start: 1-based position of the first base in the record (inclusive)
        end: 1-based position of the last base in the record (inclusive)
        sequence: The bases themselves
    """
    start: int
    end: int
    sequence: str

    @property
    def length(self) -> int:
        return self.end - self.start + 1


def split_n_runs(sequence: str, min_length: int = 1) -> Iterator[SequenceSegment]:
    """
    Yield the maximal N-free runs of ``sequence`` in order.

    Args:
        sequence: Uppercase record sequence
        min_length: Runs shorter than this are skipped

    Yields:
        SequenceSegment for each run of at least ``min_length`` bases
    """
    skipped = 0
    for match in _N_FREE_RUN_RE.finditer(sequence):
        start, end = match.span()
        if end - start < min_length:
            skipped += 1
            continue
        yield SequenceSegment(start=start + 1, end=end, sequence=match.group())

    if skipped:
        logger.debug(f"split_n_runs: skipped {skipped} run(s) shorter than {min_length} bp")


def validate_segment(segment: SequenceSegment, name: str = "sequence") -> None:
    """
    Reject a segment holding anything other than A/C/G/T.

    Segments too short to form a curvature value never reach the triplet
    lookup, so this check is what makes such symbols fatal everywhere.

    Raises:
        NucleotideLookupError: Naming the first offending symbol and its
            1-based record position
    """
    match = _INVALID_SYMBOL_RE.search(segment.sequence)
    if match is not None:
        symbol = match.group()
        raise NucleotideLookupError(
            f"{name}: invalid nucleotide symbol {symbol!r} "
            f"at position {segment.start + match.start():,}"
        )
