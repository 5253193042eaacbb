"""
┌──────────────────────────────────────────────────────────────────────────────┐
│ Curvature Pipeline - End-to-End Composition of the Streaming Stages          │
├──────────────────────────────────────────────────────────────────────────────┤
│ Author: SymCurve Team | License: MIT | Version: 2025.1                       │
└──────────────────────────────────────────────────────────────────────────────┘

DESCRIPTION:
    Chains TripletWindowsIter → CoordsIter → RollMeanIter → EucDistIter
    behind one interface.  For a sequence of length L the pipeline yields

        max(0, L - 2 - 2*roll_step - 2*curve_step)

    values.  Value ``i`` belongs to the base at 0-based offset
    ``1 + roll_step + curve_step + i`` of the input sequence.

USAGE::

    pipeline = CurvaturePipeline(roll_type="simple", roll_step=5, curve_step=15)
    values = pipeline.compute(b"ACGT...")     # numpy array
    for value in pipeline.iter("ACGT..."):    # lazy
        ...
"""

# ═══════════════════════════════════════════════════════════════════════════════
# IMPORTS
# ═══════════════════════════════════════════════════════════════════════════════
from typing import Iterable, Iterator, Union

import numpy as np

from .matrices import DEFAULT_PARAMETERS, TRIPLET_SIZE, ParameterSet, RollType
from .stages import CoordsIter, EucDistIter, RollMeanIter, TripletWindowsIter


def curvature_iter(nucleotides: Iterable,
                   roll_type: Union[RollType, str] = RollType.SIMPLE,
                   roll_step: int = 5,
                   curve_step: int = 15,
                   scale: float = 1.0,
                   parameters: ParameterSet = DEFAULT_PARAMETERS) -> Iterator[float]:
    """
    Lazily yield curvature values for a nucleotide stream.

    Args:
        nucleotides: Iterable of A/C/G/T symbols
        roll_type: Roll table selection ('simple' or 'active')
        roll_step: Rolling-mean half window (window = 2*roll_step + 1)
        curve_step: Curvature half window (window = 2*curve_step + 1)
        scale: Multiplier applied to every distance
        parameters: Parameter tables

    Raises:
        NucleotideLookupError: When a triplet containing a non-ACGT symbol is pulled
    """
    triplets = TripletWindowsIter(nucleotides, RollType.from_name(roll_type), parameters)
    means = RollMeanIter(CoordsIter(triplets), roll_step)
    distances = EucDistIter(means, curve_step)
    if scale == 1.0:
        return distances
    return (distance * scale for distance in distances)


def expected_length(sequence_length: int, roll_step: int, curve_step: int) -> int:
    """Number of values the pipeline yields for a sequence of the given length."""
    return max(0, sequence_length - (TRIPLET_SIZE - 1) - 2 * roll_step - 2 * curve_step)


class CurvaturePipeline:
    """
    Reusable pipeline configuration.

    Each call to ``iter`` or ``compute`` builds fresh stages, so one
    ``CurvaturePipeline`` can serve any number of sequences (and threads)
    without sharing accumulator state.
    """

    def __init__(self, roll_type: Union[RollType, str] = RollType.SIMPLE,
                 roll_step: int = 5, curve_step: int = 15, scale: float = 1.0,
                 parameters: ParameterSet = DEFAULT_PARAMETERS):
        if roll_step < 0 or curve_step < 0:
            raise ValueError(
                f"window steps must be >= 0 (roll_step={roll_step}, curve_step={curve_step})"
            )
        self.roll_type = RollType.from_name(roll_type)
        self.roll_step = roll_step
        self.curve_step = curve_step
        self.scale = scale
        self.parameters = parameters

    @property
    def offset(self) -> int:
        """0-based offset of the first value relative to the start of the input."""
        return 1 + self.roll_step + self.curve_step

    def expected_length(self, sequence_length: int) -> int:
        return expected_length(sequence_length, self.roll_step, self.curve_step)

    def iter(self, nucleotides: Iterable) -> Iterator[float]:
        return curvature_iter(nucleotides, self.roll_type, self.roll_step,
                              self.curve_step, self.scale, self.parameters)

    def compute(self, sequence) -> np.ndarray:
        """Materialize the curvature track of a whole in-memory sequence."""
        count = self.expected_length(len(sequence))
        return np.fromiter(self.iter(sequence), dtype=np.float64, count=count)

    def __repr__(self) -> str:
        return (f"CurvaturePipeline(roll_type={self.roll_type.value!r}, "
                f"roll_step={self.roll_step}, curve_step={self.curve_step}, "
                f"scale={self.scale})")
