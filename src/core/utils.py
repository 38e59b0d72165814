# core/utils.py
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from core.vector import Vector

# Tolerance for every near-zero decision in the engine
EPSILON = 1e-10


def is_zero(value: float) -> bool:
    """
    Returns True when the value is within EPSILON of zero.
    """
    return abs(value) < EPSILON


def align_zero(value: float) -> float:
    """
    Snaps values that are numerically zero to exactly 0.0.
    """
    return 0.0 if is_zero(value) else value


def is_perfect_square(count: int) -> bool:
    if count <= 0:
        return False
    root = int(round(count ** 0.5))
    return root * root == count


def reflect(v: "Vector", n: "Vector") -> "Vector":
    """
    Reflects vector v about the normal n.
    """
    vn = align_zero(v.dot(n))
    if vn == 0:
        return v
    return v - n * (2 * vn)
