"""
Curvature configuration for SymCurve.

This module contains the curvature parameters:
- Roll table selection
- Rolling-mean and curvature window steps
- Curvature scaling
- Symmetry parameters (reserved, not used by the curvature core)
- Optional parameter-table overrides from a JSON file

WINDOW STEPS
------------
The rolling mean averages 2*(curve_step_one - 1) + 1 coordinates, with the
two edge coordinates at half weight.  With the default curve_step_one = 6
this is an 11-coordinate window (curve_step_two = 4 inner coordinates on
each side of the center at full weight, the 5th at half weight).

The curvature is the distance between two averaged coordinates
2*curve_step bases apart (default 30).
"""

import copy
import json
import logging
from typing import Any, Dict, Optional

import numpy as np

from Curvature.matrices import (
    DEFAULT_PARAMETERS,
    TABLE_SHAPE,
    ParameterSet,
    RollType,
)

logger = logging.getLogger(__name__)


class CurvatureConfigError(ValueError):
    """Raised when curvature configuration values are out of range"""
    pass


# ==================== CURVATURE PARAMETERS ====================
CURVATURE_CONFIG = {
    'roll_type': 'simple',        # 'simple' (stationary) or 'active' (activated)
    'curve_step': 15,             # Curvature half window (bp)
    'curve_scale': 0.33335,       # Multiplier applied to every curvature value
    'curve_step_one': 6,          # Rolling-mean outer step; half window = curve_step_one - 1
    'curve_step_two': 4,          # Rolling-mean inner (full weight) step

    # Symmetry of curvature (reserved, not computed by the curvature core)
    'symcurv_win': 101,
    'symcurv_step': 1,
    'min_linker_size': 30,

    'track_format': 'bedgraph',
}

# Keys that must be integers >= 1
_POSITIVE_INT_KEYS = (
    'curve_step', 'curve_step_one', 'curve_step_two',
    'symcurv_win', 'symcurv_step', 'min_linker_size',
)

TRACK_FORMATS = ('bedgraph',)

# JSON keys accepted by load_matrices_json
MATRIX_KEYS = ('twist', 'tilt', 'roll_simple', 'roll_active')


def build_curvature_config(**overrides) -> Dict[str, Any]:
    """
    Return a copy of CURVATURE_CONFIG with overrides applied and validated.

    Overrides whose value is None are ignored so argparse namespaces can be
    passed through directly.

    Raises:
        CurvatureConfigError: If a key is unknown or a value is out of range
    """
    config = copy.deepcopy(CURVATURE_CONFIG)
    for key, value in overrides.items():
        if value is None:
            continue
        if key not in CURVATURE_CONFIG:
            raise CurvatureConfigError(f"Unknown curvature parameter '{key}'")
        config[key] = value
    validate_curvature_config(config)
    return config


def validate_curvature_config(config: Dict[str, Any]) -> None:
    """
    Validate a curvature configuration dict.

    Rules:
        - integer window parameters must be >= 1
        - curve_scale must lie in [0, 1]
        - roll_type must be 'simple' or 'active'
        - track_format must be a supported format

    Raises:
        CurvatureConfigError: On the first invalid value
    """
    unknown = set(config) - set(CURVATURE_CONFIG)
    if unknown:
        raise CurvatureConfigError(
            f"Unknown curvature parameter(s): {', '.join(sorted(unknown))}"
        )

    for key in _POSITIVE_INT_KEYS:
        value = config.get(key)
        if isinstance(value, bool) or not isinstance(value, int) or value < 1:
            raise CurvatureConfigError(f"{key} must be an integer >= 1, got {value!r}")

    scale = config.get('curve_scale')
    if isinstance(scale, bool) or not isinstance(scale, (int, float)) or not 0.0 <= scale <= 1.0:
        raise CurvatureConfigError(f"curve_scale must be between 0 and 1, got {scale!r}")

    try:
        RollType.from_name(config.get('roll_type'))
    except ValueError as e:
        raise CurvatureConfigError(str(e)) from e

    if config.get('track_format') not in TRACK_FORMATS:
        raise CurvatureConfigError(
            f"Unsupported track format {config.get('track_format')!r} "
            f"(supported: {', '.join(TRACK_FORMATS)})"
        )


def roll_step_from_config(config: Dict[str, Any]) -> int:
    """Rolling-mean half window derived from curve_step_one."""
    return config['curve_step_one'] - 1


def load_matrices_json(path: Optional[str]) -> ParameterSet:
    """
    Load parameter-table overrides from a JSON file.

    The file holds an object with any of the keys ``twist``, ``tilt``,
    ``roll_simple`` and ``roll_active``, each a 4×4×4 nested list of numbers.
    Missing keys keep the published tables.

    Args:
        path: JSON file path, or None for the default tables

    Returns:
        ParameterSet with read-only numpy tables

    Raises:
        CurvatureConfigError: If the file is not a JSON object, has unknown
            keys, or a table has the wrong shape
    """
    if path is None:
        return DEFAULT_PARAMETERS

    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise CurvatureConfigError(f"Invalid matrices file {path}: {e}") from e

    if not isinstance(data, dict):
        raise CurvatureConfigError(f"Matrices file {path} must contain a JSON object")

    unknown = set(data) - set(MATRIX_KEYS)
    if unknown:
        raise CurvatureConfigError(
            f"Unknown matrix name(s) in {path}: {', '.join(sorted(unknown))}"
        )

    tables = {}
    for key in MATRIX_KEYS:
        if key not in data:
            continue
        try:
            table = np.array(data[key], dtype=np.float64)
        except (TypeError, ValueError) as e:
            raise CurvatureConfigError(f"Matrix '{key}' in {path} is not numeric: {e}") from e
        if table.shape != TABLE_SHAPE:
            raise CurvatureConfigError(
                f"Matrix '{key}' in {path} has shape {table.shape}, expected {TABLE_SHAPE}"
            )
        table.setflags(write=False)
        tables[key] = table

    logger.info(f"Loaded {len(tables)} parameter table override(s) from {path}")
    return ParameterSet(**{**_default_tables(), **tables})


def _default_tables() -> Dict[str, np.ndarray]:
    return {key: getattr(DEFAULT_PARAMETERS, key) for key in MATRIX_KEYS}
