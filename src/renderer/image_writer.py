# renderer/image_writer.py
import logging
import os
from typing import Optional

import numpy as np
from PIL import Image

from core.color import Color

logger = logging.getLogger(__name__)


class ImageWriter:
    """
    An nx by ny pixel buffer that is saved as a PNG file.

    Each pixel is written independently, so workers rendering distinct pixels
    can share one writer without locking.
    """
    def __init__(self, image_name: str, nx: int, ny: int, output_dir: str = "images"):
        self.image_name = image_name
        self.nx = nx
        self.ny = ny
        self.output_dir = output_dir
        self.pixels = np.zeros((ny, nx, 3), dtype=np.uint8)

    def write_pixel(self, x: int, y: int, color: Color):
        self.pixels[y, x] = color.to_rgb8()

    def get_pixel(self, x: int, y: int) -> Color:
        r, g, b = self.pixels[y, x]
        return Color(int(r), int(g), int(b))

    def write_to_image(self, image_name: Optional[str] = None) -> str:
        """
        Saves the buffer as <output_dir>/<image_name>.png and returns the path.
        """
        name = image_name or self.image_name
        os.makedirs(self.output_dir, exist_ok=True)
        path = os.path.join(self.output_dir, f"{name}.png")
        Image.fromarray(self.pixels).save(path)
        logger.info("Wrote %dx%d image to %s", self.nx, self.ny, path)
        return path
