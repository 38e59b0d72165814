# main.py
import argparse
import logging
import time

from camera.camera import CameraConfig, build_camera
from core.color import Color
from core.ray import Ray
from core.vector import Point, Vector
from geometry import Cylinder, Geometries, Plane, Polygon, Sphere, Triangle
from lighting.light import AmbientLight, DirectionalLight, PointLight, SpotLight
from materials.material import Material
from renderer.board import BoardShape
from renderer.image_writer import ImageWriter
from renderer.raytracer import SimpleRayTracer
from scene.scene import Scene

logger = logging.getLogger(__name__)

# Sampling settings applied on top of the base camera configuration
QUALITY_PRESETS = {
    "draft": {},
    "aa": {"use_aa": True, "aa_samples": 4, "adaptive_aa": True,
           "aa_max_samples": 64, "aa_color_threshold": 4.0},
    "dof": {"use_dof": True, "focal_distance": 1000.0, "aperture_radius": 12.0,
            "dof_samples": 16, "dof_shape": BoardShape.CIRCLE},
    "full": {"use_aa": True, "aa_samples": 4, "adaptive_aa": True,
             "aa_max_samples": 16, "aa_color_threshold": 4.0,
             "use_dof": True, "focal_distance": 1000.0, "aperture_radius": 12.0,
             "dof_samples": 9, "adaptive_dof": True, "dof_max_samples": 36,
             "dof_color_threshold": 4.0},
}


def create_scene() -> Scene:
    """
    A floor, a mirror wall, a glass sphere in front of a matte one, a
    cylinder and a pyramid, lit by a spot, a point and a directional light.
    """
    matte = Material(kD=0.5, kS=0.5, shininess=60)
    geometries = Geometries(
        Plane(Point(0, -60, 0), Vector(0, 1, 0),
              emission=Color(20, 20, 30), material=Material(kD=0.4, kS=0.2, shininess=20, kR=0.2)),
        Polygon(Point(-150, -60, -400), Point(150, -60, -400), Point(150, 140, -400), Point(-150, 140, -400),
                emission=Color(10, 10, 10), material=Material(kD=0.2, kS=0.3, shininess=80, kR=0.6)),
        Sphere(Point(-40, -10, -150), 50,
               emission=Color(30, 60, 120), material=Material(kD=0.2, kS=0.6, shininess=100, kT=0.6)),
        Sphere(Point(-60, -30, -280), 30, emission=Color(140, 40, 40), material=matte),
        Cylinder(80, Ray(Point(70, -60, -200), Vector(0, 1, 0)), 25,
                 emission=Color(40, 110, 50), material=matte),
        Triangle(Point(0, -60, -60), Point(40, -60, -60), Point(20, -20, -80),
                 emission=Color(120, 100, 20), material=matte),
    )
    lights = [
        SpotLight(Color(800, 500, 300), Point(-100, 100, 100), Vector(1, -1, -2),
                  narrow_beam=8, kL=0.0004, kQ=0.0000006),
        PointLight(Color(300, 300, 400), Point(100, 80, 0), kL=0.0005, kQ=0.0005),
        DirectionalLight(Color(60, 60, 60), Vector(0, -1, -1)),
    ]
    return Scene("demo", background=Color(5, 5, 15),
                 ambient_light=AmbientLight(Color(30, 30, 30)),
                 geometries=geometries, lights=lights)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Render the demo scene to a PNG file.")
    parser.add_argument("--quality", choices=sorted(QUALITY_PRESETS), default="draft")
    parser.add_argument("--width", type=int, default=400, help="image width in pixels")
    parser.add_argument("--height", type=int, default=300, help="image height in pixels")
    parser.add_argument("--threads", type=int, default=-2,
                        help="0 sequential, -1 pool map, -2 auto, n worker threads")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--output", default="demo", help="image name without extension")
    parser.add_argument("--output-dir", default="images")
    parser.add_argument("--grid", type=int, default=0, help="overlay a grid every N pixels")
    parser.add_argument("--verbose", action="store_true")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    scene = create_scene()
    config = CameraConfig(
        location=Point(0, 0, 1000),
        direction=Vector(0, 0, -1),
        up=Vector(0, 1, 0),
        vp_width=200,
        vp_height=200 * args.height / args.width,
        vp_distance=1000,
        nx=args.width,
        ny=args.height,
        ray_tracer=SimpleRayTracer(scene),
        image_writer=ImageWriter(args.output, args.width, args.height, args.output_dir),
        threads=args.threads,
        progress_interval=1.0,
        seed=args.seed,
        **QUALITY_PRESETS[args.quality],
    )
    camera = build_camera(config)

    start = time.perf_counter()
    camera.render_image()
    logger.info("Rendered %s with '%s' quality in %.2fs", scene.name, args.quality,
                time.perf_counter() - start)
    if args.grid > 0:
        camera.print_grid(args.grid, Color(255, 255, 255))
    camera.write_to_image()


if __name__ == "__main__":
    main()
