# camera/camera.py
import logging
import os
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Optional

from core.color import Color
from core.errors import (DegenerateVectorError, InvalidConfigurationError,
                         InvalidSampleCountError)
from core.ray import Ray
from core.utils import is_perfect_square, is_zero
from core.vector import Point, Vector
from renderer.adaptive import AdaptiveSampler
from renderer.board import (BoardShape, generate_jittered_samples, pixel_seed,
                            seed_sampler)
from renderer.image_writer import ImageWriter
from renderer.pixel_manager import PixelManager
from renderer.raytracer import RayTracerBase

logger = logging.getLogger(__name__)

DEFAULT_AA_SAMPLES = 81
DEFAULT_DOF_SAMPLES = 81
DEFAULT_COLOR_THRESHOLD = 2.0
# Adaptive max samples when none is given: two levels of subdivision
DEFAULT_ADAPTIVE_DEPTH_FACTOR = 16


@dataclass(kw_only=True)
class CameraConfig:
    """
    Everything needed to build a Camera. None means "not supplied".

    Orientation is given either as `direction` + `up` (orthogonal) or as a
    look-at `target` with an optional `up` that is re-orthogonalized.

    threads:
        0   sequential sweep
        -1  thread pool map over pixel indices
        -2  worker pool of cpu_count - Camera.SPARE_THREADS workers
        n   worker pool of n workers pulling pixels from a shared counter
    """
    location: Optional[Point] = None
    direction: Optional[Vector] = None
    up: Optional[Vector] = None
    target: Optional[Point] = None

    vp_width: Optional[float] = None
    vp_height: Optional[float] = None
    vp_distance: Optional[float] = None
    nx: Optional[int] = None
    ny: Optional[int] = None

    ray_tracer: Optional[RayTracerBase] = None
    image_writer: Optional[ImageWriter] = None

    use_aa: bool = False
    aa_samples: Optional[int] = None
    adaptive_aa: bool = False
    aa_max_samples: Optional[int] = None
    aa_color_threshold: Optional[float] = None

    use_dof: bool = False
    focal_distance: Optional[float] = None
    aperture_radius: Optional[float] = None
    dof_samples: Optional[int] = None
    dof_shape: Optional[BoardShape] = None
    adaptive_dof: bool = False
    dof_max_samples: Optional[int] = None
    dof_color_threshold: Optional[float] = None

    threads: int = 0
    progress_interval: float = 0.0
    seed: Optional[int] = None


def _require(value, name: str):
    if value is None:
        raise InvalidConfigurationError(f"{name} is required")
    return value


def _require_positive(value, name: str):
    _require(value, name)
    if value <= 0:
        raise InvalidConfigurationError(f"{name} must be positive, got {value}")
    return value


def _require_resolution(value, name: str) -> int:
    _require(value, name)
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidConfigurationError(f"{name} must be an integer, got {value!r}")
    return _require_positive(value, name)


def _reject_supplied(feature: str, **params):
    supplied = [name for name, value in params.items() if value is not None and value is not False]
    if supplied:
        raise InvalidConfigurationError(
            f"{', '.join(supplied)} supplied while {feature} is disabled")


def _orientation(config: CameraConfig):
    """
    Resolves the orthonormal (to, up, right) basis of the camera.
    """
    location = config.location
    try:
        if config.target is not None:
            if config.direction is not None:
                raise InvalidConfigurationError("give either a direction or a target, not both")
            to = (config.target - location).normalize()
            up = config.up if config.up is not None else Vector.AXIS_Y
            right = to.cross(up).normalize()
            up = right.cross(to).normalize()
            return to, up, right

        direction = _require(config.direction, "direction")
        up = _require(config.up, "up")
        if not is_zero(direction.dot(up)):
            raise InvalidConfigurationError("direction and up vectors must be orthogonal")
        to = direction.normalize()
        up = up.normalize()
        return to, up, to.cross(up).normalize()
    except DegenerateVectorError as e:
        raise InvalidConfigurationError(f"degenerate camera orientation: {e}") from e


def _sample_count(count: Optional[int], default: int, name: str) -> int:
    count = default if count is None else count
    if not is_perfect_square(count):
        raise InvalidSampleCountError(f"{name} must be a perfect square, got {count}")
    return count


def _adaptive_sampler(right: Vector, up: Vector, base: int, max_samples: Optional[int],
                      threshold: Optional[float], shape: BoardShape,
                      label: str) -> AdaptiveSampler:
    max_samples = base * DEFAULT_ADAPTIVE_DEPTH_FACTOR if max_samples is None else max_samples
    threshold = DEFAULT_COLOR_THRESHOLD if threshold is None else threshold
    if threshold < 0:
        raise InvalidConfigurationError(f"{label}: color threshold must not be negative")
    return AdaptiveSampler(right, up, base, max_samples, threshold, shape, label)


class Camera:
    """
    Casts rays through an nx by ny view plane and writes the traced colors
    to an image writer. Build one with `build_camera(config)`.
    """
    SPARE_THREADS = 2

    def __init__(self, config: CameraConfig):
        self.location = _require(config.location, "location")
        self.v_to, self.v_up, self.v_right = _orientation(config)

        self.vp_width = _require_positive(config.vp_width, "vp_width")
        self.vp_height = _require_positive(config.vp_height, "vp_height")
        self.vp_distance = _require_positive(config.vp_distance, "vp_distance")
        self.nx = _require_resolution(config.nx, "nx")
        self.ny = _require_resolution(config.ny, "ny")

        self.image_writer = _require(config.image_writer, "image_writer")
        if (self.image_writer.nx, self.image_writer.ny) != (self.nx, self.ny):
            raise InvalidConfigurationError(
                f"image writer is {self.image_writer.nx}x{self.image_writer.ny}, "
                f"camera resolution is {self.nx}x{self.ny}")
        self.ray_tracer = config.ray_tracer
        self.vp_center = self.location + self.v_to * self.vp_distance
        self.pixel_width = self.vp_width / self.nx
        self.pixel_height = self.vp_height / self.ny

        self._configure_aa(config)
        self._configure_dof(config)

        if config.threads < -2:
            raise InvalidConfigurationError(f"invalid thread mode {config.threads}")
        if config.progress_interval < 0:
            raise InvalidConfigurationError("progress_interval must not be negative")
        self.threads = config.threads
        self.progress_interval = config.progress_interval
        self.seed = config.seed
        self._built = True

        logger.debug("Camera at %s looking %s, %dx%d pixels, aa=%s dof=%s threads=%d",
                     self.location, self.v_to, self.nx, self.ny,
                     self._describe(self.use_aa, self.aa_samples, self._aa_sampler),
                     self._describe(self.use_dof, self.dof_samples, self._dof_sampler),
                     self.threads)

    def __setattr__(self, name, value):
        if getattr(self, "_built", False):
            raise AttributeError("Camera is immutable once built")
        object.__setattr__(self, name, value)

    @classmethod
    def from_config(cls, config: CameraConfig) -> "Camera":
        return cls(config)

    def _configure_aa(self, config: CameraConfig):
        self.use_aa = config.use_aa
        self.aa_samples = None
        self._aa_sampler = None
        if not self.use_aa:
            _reject_supplied("anti-aliasing", aa_samples=config.aa_samples,
                             adaptive_aa=config.adaptive_aa,
                             aa_max_samples=config.aa_max_samples,
                             aa_color_threshold=config.aa_color_threshold)
            return
        self.aa_samples = _sample_count(config.aa_samples, DEFAULT_AA_SAMPLES, "aa_samples")
        if config.adaptive_aa:
            self._aa_sampler = _adaptive_sampler(
                self.v_right, self.v_up, self.aa_samples, config.aa_max_samples,
                config.aa_color_threshold, BoardShape.SQUARE, "adaptive anti-aliasing")
        else:
            _reject_supplied("adaptive anti-aliasing", aa_max_samples=config.aa_max_samples,
                             aa_color_threshold=config.aa_color_threshold)

    def _configure_dof(self, config: CameraConfig):
        self.use_dof = config.use_dof
        self.dof_samples = None
        self._dof_sampler = None
        self.focal_distance = None
        self.aperture_radius = None
        self.dof_shape = None
        if not self.use_dof:
            _reject_supplied("depth of field", focal_distance=config.focal_distance,
                             aperture_radius=config.aperture_radius,
                             dof_samples=config.dof_samples, dof_shape=config.dof_shape,
                             adaptive_dof=config.adaptive_dof,
                             dof_max_samples=config.dof_max_samples,
                             dof_color_threshold=config.dof_color_threshold)
            return
        self.focal_distance = _require_positive(config.focal_distance, "focal_distance")
        self.aperture_radius = _require_positive(config.aperture_radius, "aperture_radius")
        self.dof_shape = config.dof_shape if config.dof_shape is not None else BoardShape.CIRCLE
        self.dof_samples = _sample_count(config.dof_samples, DEFAULT_DOF_SAMPLES, "dof_samples")
        if config.adaptive_dof:
            self._dof_sampler = _adaptive_sampler(
                self.v_right, self.v_up, self.dof_samples, config.dof_max_samples,
                config.dof_color_threshold, self.dof_shape, "adaptive depth of field")
        else:
            _reject_supplied("adaptive depth of field", dof_max_samples=config.dof_max_samples,
                             dof_color_threshold=config.dof_color_threshold)

    @staticmethod
    def _describe(enabled: bool, samples: Optional[int], sampler: Optional[AdaptiveSampler]) -> str:
        if not enabled:
            return "off"
        if sampler is None:
            return f"{samples} samples"
        return f"adaptive {sampler.base_samples}..{sampler.max_samples} samples"

    # Ray construction

    def pixel_center(self, col: int, row: int) -> Point:
        """
        Center of pixel (col, row) on the view plane. Row 0 is the top.
        """
        x = (col - (self.nx - 1) / 2) * self.pixel_width
        y = -(row - (self.ny - 1) / 2) * self.pixel_height
        pc = self.vp_center
        if not is_zero(x):
            pc = pc + self.v_right * x
        if not is_zero(y):
            pc = pc + self.v_up * y
        return pc

    def construct_ray(self, col: int, row: int) -> Ray:
        return Ray(self.location, self.pixel_center(col, row) - self.location)

    # Rendering

    def render_pixel(self, col: int, row: int) -> Color:
        """
        Returns the color of one pixel, sampled according to the AA and DOF
        settings.
        """
        if not self.use_aa:
            return self._color_along(self.construct_ray(col, row).direction)

        center = self.pixel_center(col, row)
        radius = self.pixel_width / 2
        radius_up = self.pixel_height / 2

        def trace(point: Point) -> Color:
            return self._color_along(point - self.location)

        if self._aa_sampler is not None:
            return self._aa_sampler.sample(center, radius, trace, radius_up)
        points = generate_jittered_samples(center, self.v_right, self.v_up, radius,
                                           self.aa_samples, BoardShape.SQUARE, radius_up)
        return Color.average(trace(p) for p in points)

    def _color_along(self, direction: Vector) -> Color:
        """
        Color seen from the camera location along a direction, through the
        lens when depth of field is on.
        """
        if not self.use_dof:
            return self.ray_tracer.trace_ray(Ray(self.location, direction))

        focal_point = self.location + direction.normalize() * self.focal_distance

        def trace(point: Point) -> Color:
            return self.ray_tracer.trace_ray(Ray(point, focal_point - point))

        if self._dof_sampler is not None:
            return self._dof_sampler.sample(self.location, self.aperture_radius, trace)
        points = generate_jittered_samples(self.location, self.v_right, self.v_up,
                                           self.aperture_radius, self.dof_samples, self.dof_shape)
        return Color.average(trace(p) for p in points)

    def _cast_pixel(self, col: int, row: int, manager: PixelManager):
        if self.seed is not None:
            seed_sampler(pixel_seed(self.seed, col, row))
        self.image_writer.write_pixel(col, row, self.render_pixel(col, row))
        manager.pixel_done()

    def _worker(self, manager: PixelManager):
        while True:
            pixel = manager.next_pixel()
            if pixel is None:
                return
            self._cast_pixel(pixel[0], pixel[1], manager)

    def worker_count(self) -> int:
        if self.threads == -2:
            return max(1, (os.cpu_count() or 1) - self.SPARE_THREADS)
        return self.threads

    def render_image(self) -> "Camera":
        """
        Renders every pixel into the image writer using the configured
        thread mode. Worker exceptions propagate to the caller.
        """
        if self.ray_tracer is None:
            raise InvalidConfigurationError("a ray tracer is required to render")
        manager = PixelManager(self.nx, self.ny, self.progress_interval)
        logger.info("Rendering %dx%d pixels (threads=%d)", self.nx, self.ny, self.threads)

        if self.threads == 0:
            for row in range(self.ny):
                for col in range(self.nx):
                    self._cast_pixel(col, row, manager)
        elif self.threads == -1:
            nx = self.nx
            with ThreadPoolExecutor() as executor:
                # Consuming the iterator re-raises the first failure
                for _ in executor.map(lambda i: self._cast_pixel(i % nx, i // nx, manager),
                                      range(self.nx * self.ny)):
                    pass
        else:
            count = self.worker_count()
            with ThreadPoolExecutor(max_workers=count) as executor:
                futures = [executor.submit(self._worker, manager) for _ in range(count)]
                for future in futures:
                    future.result()

        logger.info("Finished rendering %d pixels", manager.done)
        return self

    def print_grid(self, interval: int, color: Color) -> "Camera":
        """
        Overwrites every `interval`-th row and column with `color`.
        """
        if interval <= 0:
            raise InvalidConfigurationError(f"grid interval must be positive, got {interval}")
        for row in range(self.ny):
            for col in range(self.nx):
                if col % interval == 0 or row % interval == 0:
                    self.image_writer.write_pixel(col, row, color)
        return self

    def write_to_image(self, image_name: Optional[str] = None) -> "Camera":
        self.image_writer.write_to_image(image_name)
        return self


def build_camera(config: CameraConfig) -> Camera:
    """
    Validates the configuration and returns a ready camera.

    Raises:
        InvalidConfigurationError: missing or inconsistent settings.
        InvalidSampleCountError: a sample count that is not a perfect square.
    """
    return Camera.from_config(config)
