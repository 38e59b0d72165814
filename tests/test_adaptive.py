"""Unit tests for adaptive supersampling."""

import numpy as np
import pytest

from core.color import Color
from core.errors import InvalidConfigurationError, InvalidSampleCountError
from core.vector import Point, Vector
from renderer.adaptive import (AdaptiveSampler, colors_converged, is_power_of_four,
                               is_power_of_two, validate_adaptive_counts)

RIGHT = Vector(1, 0, 0)
UP = Vector(0, 1, 0)


class CountingTrace:
    def __init__(self, color_of):
        self.color_of = color_of
        self.calls = 0

    def __call__(self, point):
        self.calls += 1
        return self.color_of(self.calls, point)


class TestPowers:
    @pytest.mark.parametrize("n", [1, 4, 16, 64, 1024])
    def test_powers_of_four(self, n):
        assert is_power_of_two(n)
        assert is_power_of_four(n)

    @pytest.mark.parametrize("n", [2, 8, 32, 512])
    def test_powers_of_two_only(self, n):
        assert is_power_of_two(n)
        assert not is_power_of_four(n)

    @pytest.mark.parametrize("n", [0, 3, 12, -4])
    def test_neither(self, n):
        assert not is_power_of_two(n)
        assert not is_power_of_four(n)


class TestValidateCounts:
    @pytest.mark.parametrize("base,max_samples", [(4, 4), (4, 16), (4, 64), (9, 144)])
    def test_valid(self, base, max_samples):
        validate_adaptive_counts(base, max_samples)

    @pytest.mark.parametrize("base,max_samples", [(4, 32), (4, 30), (4, 2), (9, 18)])
    def test_invalid_ratio(self, base, max_samples):
        with pytest.raises(InvalidConfigurationError):
            validate_adaptive_counts(base, max_samples)

    def test_non_square_base(self):
        with pytest.raises(InvalidSampleCountError):
            validate_adaptive_counts(5, 20)


class TestConvergence:
    def test_identical_colors_converge(self):
        rgb = np.array([[10.0, 20.0, 30.0]] * 4)
        assert colors_converged(rgb, 0.0)

    def test_distant_pair_does_not_converge(self):
        rgb = np.array([[0.0, 0.0, 0.0], [0.0, 0.0, 0.0], [3.0, 4.0, 0.0]])
        assert colors_converged(rgb, 5.0)
        assert not colors_converged(rgb, 4.9)


class TestAdaptiveSampler:
    def test_constant_color_does_not_subdivide(self):
        sampler = AdaptiveSampler(RIGHT, UP, 4, 64, 1.0)
        trace = CountingTrace(lambda n, p: Color(100, 50, 25))
        result = sampler.sample(Point(0, 0, 0), 1.0, trace)
        assert result == Color(100, 50, 25)
        assert trace.calls == 4

    def test_max_samples_stops_recursion(self):
        sampler = AdaptiveSampler(RIGHT, UP, 4, 64, 1.0)
        trace = CountingTrace(lambda n, p: Color.WHITE if n % 2 else Color.BLACK)
        result = sampler.sample(Point(0, 0, 0), 1.0, trace)
        # 4 samples at the top level, 4 x 4 at depth 1, 16 x 4 at depth 2
        assert trace.calls == 4 + 16 + 64
        assert result == Color.gray(127.5)

    def test_equal_base_and_max_never_subdivides(self):
        sampler = AdaptiveSampler(RIGHT, UP, 9, 9, 0.0)
        trace = CountingTrace(lambda n, p: Color.WHITE if n % 2 else Color.BLACK)
        sampler.sample(Point(0, 0, 0), 1.0, trace)
        assert trace.calls == 9

    def test_subdivides_only_where_colors_differ(self):
        sampler = AdaptiveSampler(RIGHT, UP, 4, 64, 1.0)
        trace = CountingTrace(lambda n, p: Color.WHITE if p.x > 0 else Color.BLACK)
        result = sampler.sample(Point(0, 0, 0), 1.0, trace)
        assert trace.calls == 4 + 16
        assert result == Color.gray(127.5)

    def test_invalid_counts_rejected_at_construction(self):
        with pytest.raises(InvalidConfigurationError):
            AdaptiveSampler(RIGHT, UP, 4, 8, 1.0)

    def test_error_message_carries_label_once(self):
        with pytest.raises(InvalidConfigurationError) as excinfo:
            AdaptiveSampler(RIGHT, UP, 4, 8, 1.0, label="adaptive anti-aliasing")
        message = str(excinfo.value)
        assert message.startswith("adaptive anti-aliasing: max samples")
        assert "adaptive:" not in message
