"""
Configuration modules for SymCurve.

This package contains the configuration constants:
- curvature: Curvature window, scale and roll-table parameters, and the
  optional parameter-table override loader
"""

from .curvature import (
    CURVATURE_CONFIG,
    MATRIX_KEYS,
    TRACK_FORMATS,
    CurvatureConfigError,
    build_curvature_config,
    load_matrices_json,
    roll_step_from_config,
    validate_curvature_config,
)

__all__ = [
    'CURVATURE_CONFIG',
    'MATRIX_KEYS',
    'TRACK_FORMATS',
    'CurvatureConfigError',
    'build_curvature_config',
    'load_matrices_json',
    'roll_step_from_config',
    'validate_curvature_config',
]
