# lighting/light.py
import math

from core.color import Color
from core.errors import InvalidConfigurationError
from core.utils import align_zero, is_zero
from core.vector import Point, Vector


class Light:
    """
    Base class for lights: a constant intensity.
    """
    def __init__(self, intensity: Color):
        self.intensity = intensity


class AmbientLight(Light):
    """
    Uniform light reaching every surface, scaled by the material's kA.
    """


AmbientLight.NONE = AmbientLight(Color.BLACK)


class LightSource(Light):
    """
    Abstract light that illuminates points from a direction.
    """
    def get_intensity(self, point: Point) -> Color:
        raise NotImplementedError("get_intensity() must be implemented by subclasses.")

    def get_l(self, point: Point) -> Vector:
        """
        Returns the unit direction from the light towards the point.
        """
        raise NotImplementedError("get_l() must be implemented by subclasses.")

    def get_distance(self, point: Point) -> float:
        raise NotImplementedError("get_distance() must be implemented by subclasses.")


class DirectionalLight(LightSource):
    """
    A light infinitely far away, shining along a fixed direction.
    """
    def __init__(self, intensity: Color, direction: Vector):
        super().__init__(intensity)
        self.direction = direction.normalize()

    def get_intensity(self, point: Point) -> Color:
        return self.intensity

    def get_l(self, point: Point) -> Vector:
        return self.direction

    def get_distance(self, point: Point) -> float:
        return math.inf


class PointLight(LightSource):
    """
    An omnidirectional light with constant, linear and quadratic attenuation.
    """
    def __init__(self, intensity: Color, position: Point,
                 kC: float = 1.0, kL: float = 0.0, kQ: float = 0.0):
        super().__init__(intensity)
        self.position = position
        self.kC = kC
        self.kL = kL
        self.kQ = kQ

    def get_intensity(self, point: Point) -> Color:
        d = self.position.distance(point)
        attenuation = self.kC + self.kL * d + self.kQ * d * d
        # No contribution rather than a division by zero
        if is_zero(attenuation):
            return Color.BLACK
        return self.intensity.reduce(attenuation)

    def get_l(self, point: Point) -> Vector:
        return (point - self.position).normalize()

    def get_distance(self, point: Point) -> float:
        return self.position.distance(point)


class SpotLight(PointLight):
    """
    A point light emitting mostly along a direction. A narrow beam exponent
    above 1 tightens the cone.
    """
    def __init__(self, intensity: Color, position: Point, direction: Vector,
                 narrow_beam: float = 1.0, **kwargs):
        super().__init__(intensity, position, **kwargs)
        if narrow_beam < 1:
            raise InvalidConfigurationError("narrow_beam must be greater than or equal to 1")
        self.direction = direction.normalize()
        self.narrow_beam = narrow_beam

    def get_intensity(self, point: Point) -> Color:
        factor = align_zero(self.direction.dot(self.get_l(point)))
        if factor <= 0:
            return Color.BLACK
        return super().get_intensity(point).scale(factor ** self.narrow_beam)
