# materials/material.py
from typing import Sequence, Tuple, Union

Factor = Union[float, Sequence[float]]


def _triple(value: Factor) -> Tuple[float, float, float]:
    if isinstance(value, (int, float)):
        return (float(value), float(value), float(value))
    r, g, b = value
    return (float(r), float(g), float(b))


class Material:
    """
    Phong material coefficients. Every attenuation factor is stored as a
    per-channel triple; a scalar applies to all three channels.

    kA: ambient, kD: diffuse, kS: specular, kT: transparency, kR: reflection.
    """
    def __init__(self, kA: Factor = 1.0, kD: Factor = 0.0, kS: Factor = 0.0,
                 kT: Factor = 0.0, kR: Factor = 0.0, shininess: int = 0):
        self.kA = _triple(kA)
        self.kD = _triple(kD)
        self.kS = _triple(kS)
        self.kT = _triple(kT)
        self.kR = _triple(kR)
        self.shininess = shininess

    def __repr__(self) -> str:
        return (f"Material(kA={self.kA}, kD={self.kD}, kS={self.kS}, "
                f"kT={self.kT}, kR={self.kR}, shininess={self.shininess})")
