# renderer/board.py
import math
from enum import Enum
from typing import List, Optional

import numpy as np
from numba import njit

from core.errors import InvalidSampleCountError
from core.utils import is_perfect_square, is_zero
from core.vector import Point, Vector


class BoardShape(Enum):
    """
    Shape of a sampling area: a square of half side `radius` or a disk.
    """
    SQUARE = "square"
    CIRCLE = "circle"


@njit(cache=True, nogil=True)
def jittered_offsets(grid_size, disk):
    """
    One jittered offset per cell of a grid_size x grid_size grid, in the unit
    square [-1, 1]^2 or the unit disk.
    """
    offsets = np.empty((grid_size * grid_size, 2), dtype=np.float64)
    k = 0
    for i in range(grid_size):
        for j in range(grid_size):
            u = (i + np.random.random()) / grid_size
            w = (j + np.random.random()) / grid_size
            if disk:
                # sqrt keeps the areal density uniform
                r = math.sqrt(u)
                theta = 2.0 * math.pi * w
                offsets[k, 0] = r * math.cos(theta)
                offsets[k, 1] = r * math.sin(theta)
            else:
                offsets[k, 0] = 2.0 * u - 1.0
                offsets[k, 1] = 2.0 * w - 1.0
            k += 1
    return offsets


@njit(cache=True, nogil=True)
def seed_sampler(seed):
    """
    Seeds the jitter generator of the calling thread.
    """
    np.random.seed(seed)


def pixel_seed(seed: int, col: int, row: int) -> int:
    return ((seed * 2654435761) ^ (col * 73856093) ^ (row * 19349663)) & 0xFFFFFFFF


def generate_jittered_samples(center: Point, v_right: Vector, v_up: Vector,
                              radius: float, count: int,
                              shape: BoardShape = BoardShape.SQUARE,
                              radius_up: Optional[float] = None) -> List[Point]:
    """
    Generates `count` stratified, jittered sample points around `center` on
    the plane spanned by the orthonormal axes v_right and v_up.

    Args:
        center (Point): Center of the sampling area.
        v_right (Vector): Unit axis of the horizontal offsets.
        v_up (Vector): Unit axis of the vertical offsets.
        radius (float): Half side of the square, or radius of the disk.
        count (int): Number of samples; must be a perfect square.
        shape (BoardShape): Square or disk.
        radius_up (float): Extent along v_up when it differs from `radius`.

    Returns:
        List[Point]: The sample points.
    """
    if not is_perfect_square(count):
        raise InvalidSampleCountError(
            f"Sample count must be a perfect square (e.g. 81, 100, 121), got {count}")
    if radius_up is None:
        radius_up = radius
    grid_size = int(round(math.sqrt(count)))
    offsets = jittered_offsets(grid_size, shape is BoardShape.CIRCLE)

    points = []
    for x, y in offsets:
        p = center
        dx = x * radius
        dy = y * radius_up
        if not is_zero(dx):
            p = p + v_right * dx
        if not is_zero(dy):
            p = p + v_up * dy
        points.append(p)
    return points
