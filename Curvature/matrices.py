"""
┌──────────────────────────────────────────────────────────────────────────────┐
│ Nucleotide Parameter Tables - Triplet Twist/Tilt/Roll Lookup                 │
├──────────────────────────────────────────────────────────────────────────────┤
│ Author: SymCurve Team | License: MIT | Version: 2025.1                       │
└──────────────────────────────────────────────────────────────────────────────┘

DESCRIPTION:
    Static 4×4×4 tables addressed by a nucleotide triplet.  The first
    nucleotide selects the first dimension, the second nucleotide the second
    dimension and the third nucleotide the third dimension (A=0, C=1, G=2, T=3).

    TWIST and TILT are degenerate in the current parameterization (constant
    twist, zero tilt); only the roll component varies by triplet identity.

Scientific Basis:
    Roll angles as published by Munteanu et al., 1998.
    "Simple" values describe the stationary (nucleosome) state, "active"
    values the activated (DNase) state.
"""

# ═══════════════════════════════════════════════════════════════════════════════
# IMPORTS
# ═══════════════════════════════════════════════════════════════════════════════
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Sequence, Union

import numpy as np

# ═══════════════════════════════════════════════════════════════════════════════
# CONSTANTS
# ═══════════════════════════════════════════════════════════════════════════════

# Number of nucleotides in a triplet, also the number of table dimensions
TRIPLET_SIZE = 3

NUCLEOTIDES = 'ACGT'

# Accepts ASCII codes (iterating ``bytes``) and one-character strings
_NUC_INDEX: Dict[Union[int, str, bytes], int] = {}
for _i, _base in enumerate(NUCLEOTIDES):
    _NUC_INDEX[_base] = _i
    _NUC_INDEX[ord(_base)] = _i
    _NUC_INDEX[_base.encode('ascii')] = _i


def _frozen(values) -> np.ndarray:
    table = np.array(values, dtype=np.float64)
    table.setflags(write=False)
    return table


TWIST = _frozen(np.full((4, 4, 4), 0.598647428))

TILT = _frozen(np.zeros((4, 4, 4)))

ROLL_SIMPLE = _frozen([
    [
        [0.0633, 0.3500, 4.6709, 2.64115],
        [6.2734, 0.3500, 7.7171, 4.44325],
        [4.8884, 3.9232, 5.0523, 6.8829],
        [5.4903, 3.9232, 5.3055, 5.3055],
    ],
    [
        [4.6709, 6.2734, 5.00295, 5.0673],
        [4.6709, 0.0633, 4.7618, 4.0633],
        [7.7000, 5.4903, 3.05865, 6.75525],
        [7.7000, 4.8884, 7.07195, 4.9907],
    ],
    [
        [4.0633, 4.44325, 5.9806, 5.51645],
        [5.0673, 2.64115, 6.62555, 5.51645],
        [4.9907, 5.3055, 5.89135, 9.0823],
        [6.75525, 6.8829, 5.89135, 9.0823],
    ],
    [
        [4.7618, 7.7171, 6.8996, 6.62555],
        [5.00295, 4.6709, 6.8996, 5.9806],
        [7.07195, 5.3055, 3.869, 5.9000],
        [3.05865, 5.0523, 3.869, 5.827],
    ],
])

ROLL_ACTIVE = _frozen([
    [
        [0.1, 0.0, 4.2, 1.6],
        [9.7, 0.0, 8.7, 3.6],
        [6.5, 2.0, 4.7, 6.3],
        [5.8, 2.0, 5.2, 5.2],
    ],
    [
        [7.3, 9.7, 7.8, 6.4],
        [7.3, 0.1, 6.2, 5.1],
        [10.0, 5.8, 0.7, 7.5],
        [10.0, 6.5, 5.8, 6.2],
    ],
    [
        [5.1, 3.6, 6.6, 5.6],
        [6.4, 1.6, 6.8, 5.6],
        [6.2, 5.2, 5.7, 8.2],
        [7.5, 6.3, 4.3, 8.2],
    ],
    [
        [6.2, 8.7, 9.6, 6.8],
        [7.8, 4.2, 9.6, 6.6],
        [5.8, 5.2, 3.0, 4.3],
        [0.7, 4.7, 3.0, 5.7],
    ],
])

TABLE_SHAPE = (4, 4, 4)


# ═══════════════════════════════════════════════════════════════════════════════
# TYPES
# ═══════════════════════════════════════════════════════════════════════════════

class NucleotideLookupError(ValueError):
    """Raised when a triplet cannot be resolved to table indices"""
    pass


class RollType(Enum):
    """Roll table selection: stationary (simple) or activated state."""
    SIMPLE = 'simple'
    ACTIVE = 'active'

    @classmethod
    def from_name(cls, name: Union[str, 'RollType']) -> 'RollType':
        if isinstance(name, cls):
            return name
        try:
            return cls(str(name).strip().lower())
        except ValueError:
            valid = ', '.join(member.value for member in cls)
            raise ValueError(f"Unknown roll type '{name}' (expected one of: {valid})")


@dataclass(frozen=True, eq=False)
class ParameterSet:
    """
    The four tables consulted by the triplet resolver.

    The module-level tables are used unless a caller supplies overrides
    (see ``Utilities.config.curvature.load_matrices_json``).
    """
    twist: np.ndarray = field(default_factory=lambda: TWIST)
    tilt: np.ndarray = field(default_factory=lambda: TILT)
    roll_simple: np.ndarray = field(default_factory=lambda: ROLL_SIMPLE)
    roll_active: np.ndarray = field(default_factory=lambda: ROLL_ACTIVE)

    def roll_table(self, roll_type: RollType) -> np.ndarray:
        if roll_type is RollType.ACTIVE:
            return self.roll_active
        return self.roll_simple


DEFAULT_PARAMETERS = ParameterSet()


# ═══════════════════════════════════════════════════════════════════════════════
# LOOKUP FUNCTIONS
# ═══════════════════════════════════════════════════════════════════════════════

def nucleotide_index(symbol) -> int:
    """
    Convert one nucleotide symbol to its table index.

    Args:
        symbol: ASCII code (int), one-character str or one-byte bytes

    Returns:
        0, 1, 2 or 3 for A, C, G, T

    Raises:
        NucleotideLookupError: If the symbol is not A, C, G or T
    """
    try:
        return _NUC_INDEX[symbol]
    except (KeyError, TypeError):
        raise NucleotideLookupError(f"Invalid nucleotide symbol {_describe(symbol)}")


def triplet_indices(triplet: Sequence) -> tuple:
    """
    Convert a triplet of symbols to a tuple of three table indices.

    Raises:
        NucleotideLookupError: If the triplet is not exactly three valid symbols
    """
    if len(triplet) != TRIPLET_SIZE:
        raise NucleotideLookupError(
            f"triplet must be of length {TRIPLET_SIZE}, got {len(triplet)}"
        )
    return tuple(nucleotide_index(symbol) for symbol in triplet)


def matrix_lookup(triplet: Sequence, matrix: np.ndarray) -> float:
    """
    Look up the table value for a triplet of nucleotides.

    Args:
        triplet: Three nucleotide symbols (e.g. ``b"ACG"``, ``"ACG"``)
        matrix: 4×4×4 parameter table

    Returns:
        Table entry as a Python float

    Raises:
        NucleotideLookupError: If the triplet is not exactly three valid symbols

    Example:
        >>> matrix_lookup(b"ACG", ROLL_SIMPLE)
        7.7171
    """
    i, j, k = triplet_indices(triplet)
    return float(matrix[i, j, k])


def _describe(symbol) -> str:
    if isinstance(symbol, int) and 0 <= symbol < 256:
        return f"{chr(symbol)!r} (byte {symbol})"
    return repr(symbol)
