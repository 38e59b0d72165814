# renderer/adaptive.py
from typing import Callable, List, Optional

import numpy as np
from numba import njit

from core.color import Color
from core.errors import InvalidConfigurationError, InvalidSampleCountError
from core.utils import is_perfect_square
from core.vector import Point, Vector
from renderer.board import BoardShape, generate_jittered_samples

# Maps a sample point to the color seen through it
TraceFn = Callable[[Point], Color]


@njit(cache=True, nogil=True)
def colors_converged(rgb, threshold):
    """
    True when every pair of colors (rows of rgb) lies within threshold.
    """
    limit = threshold * threshold
    n = rgb.shape[0]
    for i in range(n):
        for j in range(i + 1, n):
            dr = rgb[i, 0] - rgb[j, 0]
            dg = rgb[i, 1] - rgb[j, 1]
            db = rgb[i, 2] - rgb[j, 2]
            if dr * dr + dg * dg + db * db > limit:
                return False
    return True


def is_power_of_two(n: int) -> bool:
    return n > 0 and (n & (n - 1)) == 0


def is_power_of_four(n: int) -> bool:
    # Powers of four keep their single bit on an even position
    return is_power_of_two(n) and (n & 0x5555555555555555) != 0


def validate_adaptive_counts(base_samples: int, max_samples: int, label: str = "adaptive"):
    """
    Checks that max_samples == base_samples * 4^d for some d >= 0, so the
    recursion stops exactly on a grid boundary.
    """
    if not is_perfect_square(base_samples):
        raise InvalidSampleCountError(
            f"{label}: sub-area sample count must be a perfect square, got {base_samples}")
    if max_samples < base_samples:
        raise InvalidConfigurationError(
            f"{label}: max samples ({max_samples}) must be at least the sub-area samples ({base_samples})")
    if max_samples % base_samples != 0:
        raise InvalidConfigurationError(
            f"{label}: max samples ({max_samples}) must be a multiple of the sub-area samples ({base_samples})")
    ratio = max_samples // base_samples
    if not is_power_of_two(ratio) or not is_power_of_four(ratio):
        raise InvalidConfigurationError(
            f"{label}: max samples / sub-area samples must be a power of 4, got {ratio}")


class AdaptiveSampler:
    """
    Recursive adaptive supersampling over a square or disk sample area.

    Each level draws `base_samples` jittered samples. It stops when the colors
    agree within `color_threshold` or when base_samples * 4^depth reaches
    `max_samples`; otherwise it splits the area into four quadrants of half
    the radius and averages their results.
    """
    def __init__(self, v_right: Vector, v_up: Vector, base_samples: int,
                 max_samples: int, color_threshold: float,
                 shape: BoardShape = BoardShape.SQUARE, label: str = "adaptive"):
        validate_adaptive_counts(base_samples, max_samples, label)
        self.v_right = v_right
        self.v_up = v_up
        self.base_samples = base_samples
        self.max_samples = max_samples
        self.color_threshold = color_threshold
        self.shape = shape

    def sample(self, center: Point, radius: float, trace: TraceFn,
               radius_up: Optional[float] = None) -> Color:
        if radius_up is None:
            radius_up = radius
        return self._sample(center, radius, radius_up, 0, trace)

    def converged(self, colors: List[Color]) -> bool:
        rgb = np.array([c.to_tuple() for c in colors], dtype=np.float64)
        return colors_converged(rgb, float(self.color_threshold))

    def _sample(self, center: Point, radius: float, radius_up: float,
                depth: int, trace: TraceFn) -> Color:
        points = generate_jittered_samples(center, self.v_right, self.v_up,
                                           radius, self.base_samples, self.shape, radius_up)
        colors = [trace(p) for p in points]
        if self.base_samples * 4 ** depth >= self.max_samples or self.converged(colors):
            return Color.average(colors)

        half = radius / 2
        half_up = radius_up / 2
        quadrants = []
        for sx in (-1, 1):
            for sy in (-1, 1):
                sub_center = center + self.v_right * (sx * half) + self.v_up * (sy * half_up)
                quadrants.append(self._sample(sub_center, half, half_up, depth + 1, trace))
        return Color.average(quadrants)
