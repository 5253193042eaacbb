"""
┌──────────────────────────────────────────────────────────────────────────────┐
│ Curvature Stages - Lazy Streaming Transforms for DNA Curvature               │
├──────────────────────────────────────────────────────────────────────────────┤
│ Author: SymCurve Team | License: MIT | Version: 2025.1                       │
└──────────────────────────────────────────────────────────────────────────────┘

DESCRIPTION:
    Four pull-based iterators chained into the curvature pipeline:

        nucleotides ─► TripletWindowsIter ─► CoordsIter ─► RollMeanIter ─► EucDistIter
                       (TripletData)         (CoordsData)  (RollMeanData)  (float)

    Each stage owns a fixed-capacity buffer and its accumulators, and pulls
    from its upstream only when its own ``__next__`` is called.  Nothing is
    shared between stages or between pipeline instances.

    Output counts for an input of length L:

        TripletWindowsIter   max(0, L - 2)
        CoordsIter           same as its input
        RollMeanIter         max(0, L - (2*step_size + 1) + 1)
        EucDistIter          max(0, L - (2*curve_step_size + 1) + 1)

USAGE::

    triplets = TripletWindowsIter(b"ACGTAGGT", RollType.SIMPLE)
    means = RollMeanIter(CoordsIter(triplets), step_size=5)
    for value in EucDistIter(means, curve_step_size=15):
        ...
"""

# ═══════════════════════════════════════════════════════════════════════════════
# IMPORTS
# ═══════════════════════════════════════════════════════════════════════════════
import math
from collections import deque
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional

from .matrices import (
    DEFAULT_PARAMETERS,
    TRIPLET_SIZE,
    ParameterSet,
    RollType,
    triplet_indices,
)

HALF_PI = math.pi / 2.0


# ═══════════════════════════════════════════════════════════════════════════════
# DATA CLASSES
# ═══════════════════════════════════════════════════════════════════════════════

@dataclass
class TripletData:
    """
    Geometry sample for one nucleotide triplet.

    Attributes:
        twist: Twist angle of the triplet
        roll: Roll angle (from the simple or active roll table)
        tilt: Tilt angle
        dx: Displacement along x, projected with the cumulative twist
        dy: Displacement along y, projected with the cumulative twist
        roll_type: Roll table the ``roll`` value was taken from
    """
    twist: float
    roll: float
    tilt: float
    dx: float
    dy: float
    roll_type: RollType


@dataclass
class CoordsData:
    """Absolute trajectory position; ``triplet_data`` is None only for the trailing sample."""
    x: float
    y: float
    triplet_data: Optional[TripletData] = None


@dataclass
class RollMeanData:
    x: float
    y: float


# ═══════════════════════════════════════════════════════════════════════════════
# LAYER 1: TRIPLET RESOLVER
# ═══════════════════════════════════════════════════════════════════════════════

class TripletWindowsIter:
    """
    Yield ``TripletData`` for every overlapping triplet of the input.

    The cumulative twist is carried across the whole stream and never reset.
    A symbol outside A/C/G/T raises ``NucleotideLookupError`` from the
    ``__next__`` call that forms the offending triplet.

    Args:
        nucleotides: Iterable of nucleotide symbols (``bytes``, ``str`` or any
            iterable of ASCII codes / one-character strings)
        roll_type: Which roll table to consult
        parameters: Parameter tables (defaults to the published tables)
    """

    def __init__(self, nucleotides: Iterable, roll_type: RollType = RollType.SIMPLE,
                 parameters: ParameterSet = DEFAULT_PARAMETERS):
        self.inner = iter(nucleotides)
        self.base_buffer: deque = deque(maxlen=TRIPLET_SIZE)
        self.twist_sum = 0.0
        self.roll_type = RollType.from_name(roll_type)
        self.parameters = parameters
        self._roll_table = parameters.roll_table(self.roll_type)

    def __iter__(self) -> Iterator[TripletData]:
        return self

    def __next__(self) -> TripletData:
        while len(self.base_buffer) < TRIPLET_SIZE:
            self.base_buffer.append(next(self.inner))

        i, j, k = triplet_indices(self.base_buffer)
        twist = float(self.parameters.twist[i, j, k])
        roll = float(self._roll_table[i, j, k])
        tilt = float(self.parameters.tilt[i, j, k])

        self.twist_sum += twist
        window = TripletData(
            twist=twist,
            roll=roll,
            tilt=tilt,
            dx=roll * math.sin(self.twist_sum) + tilt * math.sin(self.twist_sum + HALF_PI),
            dy=roll * math.cos(self.twist_sum) + tilt * math.cos(self.twist_sum + HALF_PI),
            roll_type=self.roll_type,
        )
        self.base_buffer.popleft()
        return window


# ═══════════════════════════════════════════════════════════════════════════════
# LAYER 2: TRAJECTORY INTEGRATOR
# ═══════════════════════════════════════════════════════════════════════════════

class CoordsIter:
    """
    Integrate ``TripletData`` displacements into absolute ``CoordsData``.

    The first triplet only primes the deltas (its origin coordinate is not
    emitted); each later triplet is paired with the position reached by the
    previous step.  Once the upstream is exhausted one trailing coordinate
    with no triplet data is emitted, so N triplets yield exactly N
    coordinates and an empty upstream yields none.
    """

    def __init__(self, triplets: Iterable[TripletData]):
        self.inner = iter(triplets)
        self.started = False
        self.tail = False
        self.prev_x_coord = 0.0
        self.prev_y_coord = 0.0
        self.prev_dx = 0.0
        self.prev_dy = 0.0

    def __iter__(self) -> Iterator[CoordsData]:
        return self

    def __next__(self) -> CoordsData:
        if self.tail:
            raise StopIteration

        triplet_data = next(self.inner, None)
        if triplet_data is not None and not self.started:
            # origin sample, discarded
            self.started = True
            self._advance()
            self._store_deltas(triplet_data)
            triplet_data = next(self.inner, None)

        if triplet_data is not None:
            coords = self._advance(triplet_data)
            self._store_deltas(triplet_data)
            return coords

        self.tail = True
        if not self.started:
            raise StopIteration
        return self._advance()

    def _store_deltas(self, triplet_data: TripletData) -> None:
        self.prev_dx = triplet_data.dx
        self.prev_dy = triplet_data.dy

    def _advance(self, triplet_data: Optional[TripletData] = None) -> CoordsData:
        x_coord = self.prev_x_coord + self.prev_dx
        y_coord = self.prev_y_coord + self.prev_dy
        self.prev_x_coord = x_coord
        self.prev_y_coord = y_coord
        return CoordsData(x=x_coord, y=y_coord, triplet_data=triplet_data)


# ═══════════════════════════════════════════════════════════════════════════════
# LAYER 3: ROLLING MEAN
# ═══════════════════════════════════════════════════════════════════════════════

class RollMeanIter:
    """
    Centered moving average over ``2*step_size + 1`` coordinates.

    The first and last samples of each window carry half weight and the
    edge-adjusted sum is divided by ``window - 1``:

        mean = (sum(window) - first/2 - last/2) / (window - 1)

    With ``step_size == 0`` the window holds a single sample and that sample
    is emitted unchanged.
    """

    def __init__(self, coords: Iterable[CoordsData], step_size: int):
        if step_size < 0:
            raise ValueError(f"step_size must be >= 0, got {step_size}")
        self.inner = iter(coords)
        self.step_size = step_size
        self.window = 2 * step_size + 1
        self.buffer: deque = deque()
        self.x_sum = 0.0
        self.y_sum = 0.0

    def __iter__(self) -> Iterator[RollMeanData]:
        return self

    def __next__(self) -> RollMeanData:
        while len(self.buffer) < self.window:
            coords = next(self.inner)
            self.buffer.append(coords)
            self.x_sum += coords.x
            self.y_sum += coords.y

        first = self.buffer[0]
        last = self.buffer[-1]
        if self.window == 1:
            mean = RollMeanData(x=first.x, y=first.y)
        else:
            divisor = self.window - 1
            mean = RollMeanData(
                x=(self.x_sum - first.x / 2.0 - last.x / 2.0) / divisor,
                y=(self.y_sum - first.y / 2.0 - last.y / 2.0) / divisor,
            )

        self.buffer.popleft()
        self.x_sum -= first.x
        self.y_sum -= first.y
        return mean


# ═══════════════════════════════════════════════════════════════════════════════
# LAYER 4: CURVATURE (EUCLIDEAN DISTANCE)
# ═══════════════════════════════════════════════════════════════════════════════

class EucDistIter:
    """Distance between the two ends of a ``2*curve_step_size + 1`` window of means."""

    def __init__(self, means: Iterable[RollMeanData], curve_step_size: int):
        if curve_step_size < 0:
            raise ValueError(f"curve_step_size must be >= 0, got {curve_step_size}")
        self.inner = iter(means)
        self.curve_step_size = curve_step_size
        self.window = 2 * curve_step_size + 1
        self.buffer: deque = deque()

    def __iter__(self) -> Iterator[float]:
        return self

    def __next__(self) -> float:
        while len(self.buffer) < self.window:
            self.buffer.append(next(self.inner))

        left = self.buffer[0]
        right = self.buffer[-1]
        distance = math.sqrt((right.x - left.x) ** 2 + (right.y - left.y) ** 2)
        self.buffer.popleft()
        return distance
