# scene/scene.py
from typing import List, Optional

from core.color import Color
from geometry.geometries import Geometries
from lighting.light import AmbientLight, LightSource


class Scene:
    """
    Everything the ray tracer reads while rendering: the geometries, the
    lights, the background color and the ambient light.
    """
    def __init__(self, name: str, background: Color = Color.BLACK,
                 ambient_light: AmbientLight = AmbientLight.NONE,
                 geometries: Optional[Geometries] = None,
                 lights: Optional[List[LightSource]] = None):
        self.name = name
        self.background = background
        self.ambient_light = ambient_light
        self.geometries = geometries if geometries is not None else Geometries()
        self.lights: List[LightSource] = list(lights) if lights else []

    def __repr__(self) -> str:
        return f"Scene({self.name!r}, {len(self.geometries)} geometries, {len(self.lights)} lights)"
