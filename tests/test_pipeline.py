"""
Tests for the end-to-end curvature pipeline:

  - curvature_iter / expected_length
  - CurvaturePipeline (offset, compute, scale, parameter overrides)
  - Agreement with a vectorized numpy reference computation
"""

import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import math

import numpy as np
import pytest


def _reference_curvature(sequence, roll_table, roll_step, curve_step,
                         twist_table=None, tilt_table=None):
    """Whole-array computation of the same quantities, for comparison."""
    from Curvature.matrices import TILT, TWIST
    twist_table = TWIST if twist_table is None else twist_table
    tilt_table = TILT if tilt_table is None else tilt_table

    idx = np.array(["ACGT".index(base) for base in sequence])
    i, j, k = idx[:-2], idx[1:-1], idx[2:]
    twist_sum = np.cumsum(twist_table[i, j, k])
    roll = roll_table[i, j, k]
    tilt = tilt_table[i, j, k]
    dx = roll * np.sin(twist_sum) + tilt * np.sin(twist_sum + math.pi / 2)
    dy = roll * np.cos(twist_sum) + tilt * np.cos(twist_sum + math.pi / 2)
    x, y = np.cumsum(dx), np.cumsum(dy)

    window = 2 * roll_step + 1
    n_means = len(x) - window + 1
    if n_means <= 0:
        return np.array([])
    if window == 1:
        mx, my = x, y
    else:
        mx = np.array([(x[s:s + window].sum() - x[s] / 2 - x[s + window - 1] / 2) / (window - 1)
                       for s in range(n_means)])
        my = np.array([(y[s:s + window].sum() - y[s] / 2 - y[s + window - 1] / 2) / (window - 1)
                       for s in range(n_means)])

    span = 2 * curve_step
    if len(mx) <= span:
        return np.array([])
    return np.hypot(mx[span:] - mx[:-span or None], my[span:] - my[:-span or None])


def _random_dna(length, seed=7):
    rng = np.random.default_rng(seed)
    return "".join(rng.choice(list("ACGT"), size=length))


# ──────────────────────────────────────────────────────────────────────────────
# Output length
# ──────────────────────────────────────────────────────────────────────────────

class TestExpectedLength:
    """Output count is max(0, L - 2 - 2*roll_step - 2*curve_step)."""

    def test_formula(self):
        from Curvature.pipeline import expected_length
        assert expected_length(1000, 5, 15) == 1000 - 2 - 10 - 30
        assert expected_length(3, 0, 0) == 1
        assert expected_length(2, 0, 0) == 0
        assert expected_length(0, 5, 15) == 0

    @pytest.mark.parametrize("length", [0, 1, 2, 3, 10, 41, 42, 43, 100])
    def test_iterator_matches_formula(self, length):
        from Curvature.pipeline import curvature_iter, expected_length
        dna = _random_dna(length) if length else ""
        values = list(curvature_iter(dna, roll_step=5, curve_step=15))
        assert len(values) == expected_length(length, 5, 15)

    def test_short_sequence_yields_nothing(self):
        from Curvature.pipeline import CurvaturePipeline
        pipeline = CurvaturePipeline(roll_step=5, curve_step=15)
        assert list(pipeline.iter("ACGT" * 10)) == []
        assert pipeline.compute("ACGT" * 10).size == 0


# ──────────────────────────────────────────────────────────────────────────────
# Values
# ──────────────────────────────────────────────────────────────────────────────

class TestCurvatureValues:
    """Values agree with a vectorized reference and are non-negative."""

    @pytest.mark.parametrize("roll_type", ["simple", "active"])
    @pytest.mark.parametrize("roll_step,curve_step", [(5, 15), (2, 3), (0, 1), (1, 0)])
    def test_matches_reference(self, roll_type, roll_step, curve_step):
        from Curvature.matrices import ROLL_ACTIVE, ROLL_SIMPLE
        from Curvature.pipeline import CurvaturePipeline
        dna = _random_dna(300)
        table = ROLL_SIMPLE if roll_type == "simple" else ROLL_ACTIVE
        expected = _reference_curvature(dna, table, roll_step, curve_step)
        values = CurvaturePipeline(roll_type, roll_step, curve_step).compute(dna)
        assert values.shape == expected.shape
        np.testing.assert_allclose(values, expected, rtol=1e-9, atol=1e-9)

    def test_non_negative(self):
        from Curvature.pipeline import CurvaturePipeline
        values = CurvaturePipeline().compute(_random_dna(500, seed=11))
        assert (values >= 0).all()

    def test_bytes_and_str_agree(self):
        from Curvature.pipeline import CurvaturePipeline
        dna = _random_dna(120)
        pipeline = CurvaturePipeline(roll_step=2, curve_step=4)
        np.testing.assert_array_equal(pipeline.compute(dna), pipeline.compute(dna.encode()))

    def test_roll_type_changes_values(self):
        from Curvature.pipeline import CurvaturePipeline
        dna = _random_dna(200)
        simple = CurvaturePipeline("simple", 2, 4).compute(dna)
        active = CurvaturePipeline("active", 2, 4).compute(dna)
        assert not np.allclose(simple, active)

    def test_scale_multiplies_values(self):
        from Curvature.pipeline import curvature_iter
        dna = _random_dna(150)
        raw = list(curvature_iter(dna, roll_step=2, curve_step=5))
        scaled = list(curvature_iter(dna, roll_step=2, curve_step=5, scale=0.33335))
        assert scaled == pytest.approx([value * 0.33335 for value in raw])

    def test_fresh_state_per_call(self):
        from Curvature.pipeline import CurvaturePipeline
        pipeline = CurvaturePipeline(roll_step=2, curve_step=3)
        dna = _random_dna(80)
        first = pipeline.compute(dna)
        second = pipeline.compute(dna)
        np.testing.assert_array_equal(first, second)

    def test_parameter_override(self):
        from Curvature.matrices import ParameterSet
        from Curvature.pipeline import CurvaturePipeline
        flat = np.full((4, 4, 4), 5.0)
        flat.setflags(write=False)
        parameters = ParameterSet(roll_simple=flat)
        dna = _random_dna(100)
        values = CurvaturePipeline("simple", 1, 2, parameters=parameters).compute(dna)
        expected = _reference_curvature(dna, flat, 1, 2)
        np.testing.assert_allclose(values, expected, rtol=1e-9, atol=1e-9)


# ──────────────────────────────────────────────────────────────────────────────
# CurvaturePipeline API
# ──────────────────────────────────────────────────────────────────────────────

class TestCurvaturePipeline:

    def test_offset(self):
        from Curvature.pipeline import CurvaturePipeline
        assert CurvaturePipeline(roll_step=5, curve_step=15).offset == 21
        assert CurvaturePipeline(roll_step=0, curve_step=0).offset == 1

    def test_compute_returns_float_array(self):
        from Curvature.pipeline import CurvaturePipeline
        pipeline = CurvaturePipeline(roll_step=5, curve_step=15)
        values = pipeline.compute(_random_dna(200))
        assert isinstance(values, np.ndarray)
        assert values.dtype == np.float64
        assert len(values) == pipeline.expected_length(200)

    def test_string_roll_type(self):
        from Curvature.matrices import RollType
        from Curvature.pipeline import CurvaturePipeline
        assert CurvaturePipeline("ACTIVE").roll_type is RollType.ACTIVE

    def test_unknown_roll_type(self):
        from Curvature.pipeline import CurvaturePipeline
        with pytest.raises(ValueError):
            CurvaturePipeline("relaxed")

    def test_negative_steps_rejected(self):
        from Curvature.pipeline import CurvaturePipeline
        with pytest.raises(ValueError):
            CurvaturePipeline(roll_step=-1)
        with pytest.raises(ValueError):
            CurvaturePipeline(curve_step=-1)

    def test_invalid_symbol_raises(self):
        from Curvature.matrices import NucleotideLookupError
        from Curvature.pipeline import CurvaturePipeline
        dna = _random_dna(100)
        dna = dna[:50] + "N" + dna[51:]
        with pytest.raises(NucleotideLookupError):
            CurvaturePipeline(roll_step=2, curve_step=3).compute(dna)

    def test_lazy_iteration(self):
        from Curvature.pipeline import CurvaturePipeline
        pipeline = CurvaturePipeline(roll_step=1, curve_step=1)
        values = pipeline.iter(iter(_random_dna(1000)))
        first = next(values)
        assert first >= 0.0

    def test_repr(self):
        from Curvature.pipeline import CurvaturePipeline
        text = repr(CurvaturePipeline("active", 3, 7, 0.5))
        assert "active" in text
        assert "roll_step=3" in text
        assert "curve_step=7" in text
