# cityrun/tests/test_difficulty.py
"""
Land-gap policy checks.

Usage (from repo root):
  python -m cityrun.tests.test_difficulty
  pytest cityrun/tests/test_difficulty.py
"""
from __future__ import annotations
import random

import pytest

from cityrun.game.difficulty import land_gap, land_gap_range
from cityrun.tests.helpers import ScriptedRandom


def test_base_range_up_to_baseline_speed():
    for speed in (0, 5, 10, 13.5, 14):
        assert land_gap_range(speed) == (220, 520)


def test_range_tightens_above_baseline():
    lo, hi = land_gap_range(24)
    assert lo == pytest.approx(220 - 10 * 1.2)
    assert hi == pytest.approx(520 - 10 * 3.0)


def test_speed_cap_and_clamps():
    lo, hi = land_gap_range(60)
    assert lo == pytest.approx(164.8)
    assert hi == pytest.approx(382.0)
    assert land_gap_range(200) == land_gap_range(60)


def test_clamps_never_invert():
    for tenth in range(0, 2001):
        lo, hi = land_gap_range(tenth / 10.0)
        assert lo >= 160
        assert hi >= lo + 120


def test_sample_uses_computed_range_without_override():
    # 0.5 -> no short-gap override; then the bounds of [220, 520]
    assert land_gap(10, ScriptedRandom([0.5, 0.0])) == pytest.approx(220)
    assert land_gap(10, ScriptedRandom([0.5, 1.0])) == pytest.approx(520)


def test_short_gap_override():
    rng = ScriptedRandom([0.1, 0.5])
    assert land_gap(10, rng) == pytest.approx(195)
    assert rng.calls == 2


def test_samples_stay_in_bounds():
    rng = random.Random(7)
    for _ in range(2000):
        assert 160 <= land_gap(10, rng) <= 520
        assert 160 <= land_gap(60, rng) <= 382


def main():
    test_base_range_up_to_baseline_speed()
    test_range_tightens_above_baseline()
    test_speed_cap_and_clamps()
    test_clamps_never_invert()
    test_sample_uses_computed_range_without_override()
    test_short_gap_override()
    test_samples_stay_in_bounds()
    print("✓ difficulty checks passed")


if __name__ == "__main__":
    main()
