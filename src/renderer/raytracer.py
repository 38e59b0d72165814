# renderer/raytracer.py
from typing import Optional, Tuple

from core.color import Color
from core.ray import Ray
from core.utils import align_zero, reflect
from core.vector import Vector
from geometry.intersectable import Intersection
from lighting.light import LightSource
from scene.scene import Scene

Triple = Tuple[float, float, float]

MAX_CALC_COLOR_LEVEL = 10
MIN_CALC_COLOR_K = 0.001
INITIAL_K: Triple = (1.0, 1.0, 1.0)
ZERO_K: Triple = (0.0, 0.0, 0.0)


def _mul(a: Triple, b: Triple) -> Triple:
    return (a[0] * b[0], a[1] * b[1], a[2] * b[2])


def _scale(a: Triple, s: float) -> Triple:
    return (a[0] * s, a[1] * s, a[2] * s)


def _add(a: Triple, b: Triple) -> Triple:
    return (a[0] + b[0], a[1] + b[1], a[2] + b[2])


def _lower_than(a: Triple, limit: float) -> bool:
    return a[0] < limit and a[1] < limit and a[2] < limit


class RayTracerBase:
    """
    Turns a ray into a color using a read-only scene.
    """
    def __init__(self, scene: Scene):
        self.scene = scene

    def trace_ray(self, ray: Ray) -> Color:
        raise NotImplementedError("trace_ray() must be implemented by subclasses.")


class SimpleRayTracer(RayTracerBase):
    """
    Phong ray tracer: ambient and emitted light, diffuse and specular terms
    for every light source with transparent shadows, and recursive
    reflection/refraction.
    """
    def trace_ray(self, ray: Ray) -> Color:
        closest = self.find_closest_intersection(ray)
        if closest is None:
            return self.scene.background
        return self.calc_color(closest, ray)

    def find_closest_intersection(self, ray: Ray) -> Optional[Intersection]:
        return ray.find_closest_intersection(self.scene.geometries.calculate_intersections(ray))

    def calc_color(self, intersection: Intersection, ray: Ray) -> Color:
        ambient = self.scene.ambient_light.intensity.scale(intersection.material.kA)
        return self._calc_color(intersection, ray, MAX_CALC_COLOR_LEVEL, INITIAL_K).add(ambient)

    def _calc_color(self, intersection: Intersection, ray: Ray, level: int, k: Triple) -> Color:
        n = intersection.geometry.get_normal(intersection.point)
        v = ray.direction
        nv = align_zero(n.dot(v))
        # Grazing hit: the surface is seen edge-on
        if nv == 0:
            return Color.BLACK
        color = self._calc_local_effects(intersection, n, v, nv, k)
        if level == 1:
            return color
        return color.add(self._calc_global_effects(intersection, n, v, nv, level, k))

    def _calc_local_effects(self, intersection: Intersection, n: Vector, v: Vector,
                            nv: float, k: Triple) -> Color:
        material = intersection.material
        color = intersection.geometry.emission
        for light in self.scene.lights:
            l = light.get_l(intersection.point)
            nl = align_zero(n.dot(l))
            # Light and viewer must be on the same side of the surface
            if nl * nv <= 0:
                continue
            ktr = self._transparency(intersection, light, l, n)
            if _lower_than(_mul(ktr, k), MIN_CALC_COLOR_K):
                continue
            intensity = light.get_intensity(intersection.point).scale(ktr)
            factor = _add(self._calc_diffusive(material.kD, nl),
                          self._calc_specular(material.kS, material.shininess, n, l, nl, v))
            color = color.add(intensity.scale(factor))
        return color

    @staticmethod
    def _calc_diffusive(kD: Triple, nl: float) -> Triple:
        return _scale(kD, abs(nl))

    @staticmethod
    def _calc_specular(kS: Triple, shininess: int, n: Vector, l: Vector,
                       nl: float, v: Vector) -> Triple:
        r = l - n * (2 * nl)
        minus_vr = -align_zero(v.dot(r))
        if minus_vr <= 0:
            return ZERO_K
        return _scale(kS, minus_vr ** shininess)

    def _transparency(self, intersection: Intersection, light: LightSource,
                      l: Vector, n: Vector) -> Triple:
        """
        Product of the kT factors of everything between the point and the light.
        """
        shadow_ray = Ray.offset(intersection.point, -l, n)
        distance = light.get_distance(intersection.point)
        blockers = self.scene.geometries.calculate_intersections(shadow_ray, distance)
        if blockers is None:
            return INITIAL_K
        ktr = INITIAL_K
        for blocker in blockers:
            ktr = _mul(ktr, blocker.material.kT)
            if _lower_than(ktr, MIN_CALC_COLOR_K):
                return ZERO_K
        return ktr

    def _calc_global_effects(self, intersection: Intersection, n: Vector, v: Vector,
                             nv: float, level: int, k: Triple) -> Color:
        material = intersection.material
        color = Color.BLACK
        reflected = Ray.offset(intersection.point, reflect(v, n), n)
        refracted = Ray.offset(intersection.point, v, n)
        for secondary, kx in ((reflected, material.kR), (refracted, material.kT)):
            kkx = _mul(k, kx)
            if _lower_than(kkx, MIN_CALC_COLOR_K):
                continue
            color = color.add(self._calc_global_effect(secondary, level, kx, kkx))
        return color

    def _calc_global_effect(self, ray: Ray, level: int, kx: Triple, kkx: Triple) -> Color:
        closest = self.find_closest_intersection(ray)
        if closest is None:
            return self.scene.background.scale(kx)
        return self._calc_color(closest, ray, level - 1, kkx).scale(kx)
