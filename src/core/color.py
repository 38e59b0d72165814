# core/color.py
import math
from typing import Iterable, Sequence, Tuple, Union

Triple = Union["Color", Sequence[float]]


class Color:
    """
    An immutable RGB color. Channels are non-negative floats on a 0..255
    scale; values above 255 are allowed and clamped only on output.
    """
    __slots__ = ("r", "g", "b")

    def __init__(self, r: float, g: float, b: float):
        object.__setattr__(self, "r", float(r))
        object.__setattr__(self, "g", float(g))
        object.__setattr__(self, "b", float(b))

    def __setattr__(self, name, value):
        raise AttributeError("Color is immutable")

    @staticmethod
    def gray(value: float) -> "Color":
        return Color(value, value, value)

    def add(self, *others: "Color") -> "Color":
        r, g, b = self.r, self.g, self.b
        for c in others:
            r += c.r
            g += c.g
            b += c.b
        return Color(r, g, b)

    def scale(self, k: Union[float, Triple]) -> "Color":
        """
        Scales by a scalar or, channel by channel, by a triple of factors.
        """
        if isinstance(k, (int, float)):
            return Color(self.r * k, self.g * k, self.b * k)
        kr, kg, kb = _components(k)
        return Color(self.r * kr, self.g * kg, self.b * kb)

    def reduce(self, k: float) -> "Color":
        return Color(self.r / k, self.g / k, self.b / k)

    def distance(self, other: "Color") -> float:
        dr = self.r - other.r
        dg = self.g - other.g
        db = self.b - other.b
        return math.sqrt(dr * dr + dg * dg + db * db)

    def to_rgb8(self) -> Tuple[int, int, int]:
        return (_clamp8(self.r), _clamp8(self.g), _clamp8(self.b))

    def to_tuple(self) -> Tuple[float, float, float]:
        return (self.r, self.g, self.b)

    @staticmethod
    def average(colors: Iterable["Color"]) -> "Color":
        r = g = b = 0.0
        n = 0
        for c in colors:
            r += c.r
            g += c.g
            b += c.b
            n += 1
        if n == 0:
            return Color.BLACK
        return Color(r / n, g / n, b / n)

    def __add__(self, other: "Color") -> "Color":
        return self.add(other)

    def __mul__(self, k) -> "Color":
        return self.scale(k)

    def __rmul__(self, k) -> "Color":
        return self.scale(k)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Color):
            return NotImplemented
        return (abs(self.r - other.r) < 1e-9
                and abs(self.g - other.g) < 1e-9
                and abs(self.b - other.b) < 1e-9)

    __hash__ = None

    def __repr__(self) -> str:
        return f"Color({self.r}, {self.g}, {self.b})"


def _components(k: Triple) -> Tuple[float, float, float]:
    if isinstance(k, Color):
        return k.r, k.g, k.b
    kr, kg, kb = k
    return kr, kg, kb


def _clamp8(value: float) -> int:
    return int(min(255, max(0, round(value))))


Color.BLACK = Color(0, 0, 0)
Color.WHITE = Color(255, 255, 255)
Color.RED = Color(255, 0, 0)
Color.GREEN = Color(0, 255, 0)
Color.BLUE = Color(0, 0, 255)
