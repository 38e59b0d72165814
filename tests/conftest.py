"""Shared fixtures for the ray caster tests."""

import threading

import pytest

from camera.camera import CameraConfig, build_camera
from core.color import Color
from core.vector import Point, Vector
from renderer.image_writer import ImageWriter
from renderer.raytracer import RayTracerBase


class RecordingTracer(RayTracerBase):
    """Returns a fixed color and records every traced ray."""

    def __init__(self, color: Color = Color(10, 20, 30)):
        super().__init__(scene=None)
        self.color = color
        self.rays = []
        self._lock = threading.Lock()

    def trace_ray(self, ray):
        with self._lock:
            self.rays.append(ray)
        return self.color


@pytest.fixture
def recording_tracer():
    return RecordingTracer()


@pytest.fixture
def make_camera(tmp_path):
    """Factory for cameras on a small view plane looking down -Z from the origin."""

    def _make(nx=3, ny=3, **overrides):
        params = dict(
            location=Point(0, 0, 0),
            direction=Vector(0, 0, -1),
            up=Vector(0, -1, 0),
            vp_width=3,
            vp_height=3,
            vp_distance=1,
            nx=nx,
            ny=ny,
        )
        params.update(overrides)
        if "image_writer" not in params:
            params["image_writer"] = ImageWriter("test", nx, ny, str(tmp_path))
        return build_camera(CameraConfig(**params))

    return _make
