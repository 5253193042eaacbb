"""
DNA Curvature Module
SymCurve Team | 2025.1 | MIT License

Streaming computation of a per-position DNA curvature track from
triplet roll/tilt/twist parameters.
"""

from .matrices import (
    NucleotideLookupError,
    ParameterSet,
    RollType,
    DEFAULT_PARAMETERS,
    ROLL_ACTIVE,
    ROLL_SIMPLE,
    TILT,
    TWIST,
    matrix_lookup,
)
from .stages import (
    CoordsData,
    CoordsIter,
    EucDistIter,
    RollMeanData,
    RollMeanIter,
    TripletData,
    TripletWindowsIter,
)
from .pipeline import CurvaturePipeline, curvature_iter, expected_length

__all__ = [
    "NucleotideLookupError",
    "ParameterSet",
    "RollType",
    "DEFAULT_PARAMETERS",
    "ROLL_ACTIVE",
    "ROLL_SIMPLE",
    "TILT",
    "TWIST",
    "matrix_lookup",
    "CoordsData",
    "CoordsIter",
    "EucDistIter",
    "RollMeanData",
    "RollMeanIter",
    "TripletData",
    "TripletWindowsIter",
    "CurvaturePipeline",
    "curvature_iter",
    "expected_length",
]

__version__ = "2025.1"
