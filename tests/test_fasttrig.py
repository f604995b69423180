import math
import pytest
from ndgeom.fasttrig import *
## unit tests for ndgeom fasttrig.py

EXACT = [0.0, math.pi / 2, -math.pi / 2, math.pi, -math.pi]


def grid(lo, hi, n=721):
    step = (hi - lo) / (n - 1)
    return [lo + k * step for k in range(n)]


class TestFastTrig:
    """parabolic sin/cos approximation"""

    def test_exact_points(self):
        for x in EXACT:
            assert abs(fast_sin(x) - math.sin(x)) < 1e-12
            assert abs(fast_cos(x) - math.cos(x)) < 1e-12

    def test_error_bound(self):
        worst = 0.0
        for x in grid(-3 * math.pi, 3 * math.pi):
            worst = max(worst, abs(fast_sin(x) - math.sin(x)))
            worst = max(worst, abs(fast_cos(x) - math.cos(x)))
        assert worst < 0.06

    def test_range(self):
        for x in grid(-10.0, 10.0):
            assert -1.0 - 1e-12 <= fast_sin(x) <= 1.0 + 1e-12
            assert -1.0 - 1e-12 <= fast_cos(x) <= 1.0 + 1e-12

    def test_symmetry(self):
        for x in grid(-math.pi, math.pi, 101):
            assert abs(fast_sin(-x) + fast_sin(x)) < 1e-12
            assert abs(fast_cos(x) - math.cos(x)) < 0.06

    def test_periodic(self):
        for x in (0.3, 1.2, -2.5):
            assert abs(fast_sin(x + 4 * math.pi) - fast_sin(x)) < 1e-9
            assert abs(fast_cos(x - 6 * math.pi) - fast_cos(x)) < 1e-9

    def test_unchecked_matches_checked(self):
        for x in grid(-math.pi, math.pi - 1e-9, 181):
            assert abs(fast_sin_unchecked(x) - fast_sin(x)) < 1e-9
            assert abs(fast_cos_unchecked(x) - fast_cos(x)) < 1e-9

    def test_normalize_angle(self):
        assert abs(normalize_angle(3 * math.pi / 2) - -math.pi / 2) < 1e-12
        assert abs(normalize_angle(-5.0) - (2 * math.pi - 5.0)) < 1e-12
        for x in grid(-20.0, 20.0, 97):
            y = normalize_angle(x)
            assert -math.pi <= y < math.pi
            assert abs(math.sin(y) - math.sin(x)) < 1e-9
