"""
Camera module: primary ray generation and the render loop.

Supports:
- Perspective projection with a configurable vertical field of view
- Arbitrary positioning via look-at
- Depth of field (defocus blur) from a thin-lens disk
- Box-filter anti-aliasing by jittering samples within each pixel
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Optional, Tuple
import logging
import math
import time

import numpy as np

from .vec3 import Vec3, Point3, Color, default_rng
from .ray import Ray
from .interval import Interval
from .shapes import Hittable
from .tonemapping import color_to_rgb8

logger = logging.getLogger(__name__)

# Lower bound skips self-intersections caused by floating point error
HIT_INTERVAL = Interval(0.001, float('inf'))

SKY_WHITE = Color(1.0, 1.0, 1.0)
SKY_BLUE = Color(0.5, 0.7, 1.0)


@dataclass
class CameraSettings:
    """Configuration for the camera and its render loop."""
    image_width: int = 400
    aspect_ratio: float = 16.0 / 9.0
    vfov: float = 20.0
    defocus_angle: float = 0.6
    focus_dist: float = 10.0
    look_from: Point3 = None
    look_at: Point3 = None
    vup: Vec3 = None
    samples_per_pixel: int = 500
    max_depth: int = 50
    seed: Optional[int] = None

    def __post_init__(self):
        if self.look_from is None:
            self.look_from = Point3(0, 0, 0)
        if self.look_at is None:
            self.look_at = Point3(0, 0, -1)
        if self.vup is None:
            self.vup = Vec3(0, 1, 0)

        if self.image_width < 1:
            raise ValueError(f"image_width must be at least 1, got {self.image_width}")
        if self.aspect_ratio <= 0:
            raise ValueError(f"aspect_ratio must be positive, got {self.aspect_ratio}")
        if self.samples_per_pixel < 1:
            raise ValueError(f"samples_per_pixel must be at least 1, got {self.samples_per_pixel}")
        if self.max_depth < 0:
            raise ValueError(f"max_depth must not be negative, got {self.max_depth}")
        if self.focus_dist <= 0:
            raise ValueError(f"focus_dist must be positive, got {self.focus_dist}")
        if self.defocus_angle < 0:
            raise ValueError(f"defocus_angle must not be negative, got {self.defocus_angle}")
        if (self.look_from - self.look_at).near_zero():
            raise ValueError("look_from and look_at must be distinct points")
        if self.vup.cross(self.look_from - self.look_at).near_zero():
            raise ValueError("vup must not be parallel to the view direction")

    @property
    def image_height(self) -> int:
        return max(1, int(self.image_width / self.aspect_ratio))


class Camera:
    """A thin-lens camera that renders a scene into an 8-bit RGB buffer.

    All geometry is derived once from the settings; rendering never
    mutates the camera, so one camera can render many times.
    """

    def __init__(self, settings: Optional[CameraSettings] = None):
        """Create a camera.

        Args:
            settings: Camera configuration (uses defaults if None)
        """
        self.settings = settings if settings else CameraSettings()
        s = self.settings

        self.image_width = s.image_width
        self.image_height = s.image_height
        self.samples_per_pixel = s.samples_per_pixel
        self.max_depth = s.max_depth
        self.defocus_angle = s.defocus_angle

        theta = math.radians(s.vfov)
        h = math.tan(theta / 2)
        viewport_height = 2.0 * h * s.focus_dist
        viewport_width = viewport_height * (self.image_width / self.image_height)

        # Compute orthonormal camera basis
        self.w = (s.look_from - s.look_at).unit_vector()  # Points backward from camera
        self.u = s.vup.cross(self.w).unit_vector()         # Points right
        self.v = self.w.cross(self.u)                      # Points up

        self.center = s.look_from

        # Image rows run top to bottom, so the vertical edge points down
        viewport_u = self.u * viewport_width
        viewport_v = -self.v * viewport_height

        self.pixel_delta_u = viewport_u / self.image_width
        self.pixel_delta_v = viewport_v / self.image_height

        viewport_upper_left = (
            self.center
            - self.w * s.focus_dist
            - viewport_u / 2
            - viewport_v / 2
        )
        self.pixel00_loc = viewport_upper_left + (self.pixel_delta_u + self.pixel_delta_v) * 0.5

        defocus_radius = s.focus_dist * math.tan(math.radians(s.defocus_angle / 2))
        self.defocus_disk_u = self.u * defocus_radius
        self.defocus_disk_v = self.v * defocus_radius

        self._progress_callback: Optional[Callable[[float], None]] = None

    def set_progress_callback(self, callback: Optional[Callable[[float], None]]) -> None:
        """Set a callback function for progress updates.

        Args:
            callback: Function that takes progress as float (0.0 to 1.0),
                called after every finished scanline
        """
        self._progress_callback = callback

    def make_rng(self) -> np.random.Generator:
        """Create the generator for one render, seeded from the settings."""
        return np.random.default_rng(self.settings.seed)

    def render(self, scene: Hittable, rng: Optional[np.random.Generator] = None) -> np.ndarray:
        """Render the scene and return the image as a numpy array.

        Args:
            scene: The scene to render (any Hittable)
            rng: Generator to draw samples from (seeded from settings if None)

        Returns:
            Image of shape (height, width, 3), dtype uint8, row 0 at the top
        """
        rng = rng or self.make_rng()
        width, height = self.image_width, self.image_height
        image = np.zeros((height, width, 3), dtype=np.uint8)

        logger.debug("Rendering %dx%d, %d samples/pixel, depth %d",
                     width, height, self.samples_per_pixel, self.max_depth)
        start = time.perf_counter()

        for y in range(height):
            for x in range(width):
                image[y, x] = self._sample_pixel(scene, x, y, rng)
            if self._progress_callback:
                self._progress_callback((y + 1) / height)

        logger.debug("Render finished in %.2fs", time.perf_counter() - start)
        return image

    def render_point(self, scene: Hittable, x: int, y: int,
                     rng: Optional[np.random.Generator] = None) -> Tuple[int, int, int]:
        """Render a single pixel to an 8-bit RGB triple."""
        return self._sample_pixel(scene, x, y, rng or self.make_rng())

    def _sample_pixel(self, scene: Hittable, x: int, y: int,
                      rng: np.random.Generator) -> Tuple[int, int, int]:
        pixel_color = Color(0, 0, 0)
        for _ in range(self.samples_per_pixel):
            ray = self.get_ray(x, y, rng)
            pixel_color += self.ray_color(ray, scene, self.max_depth, rng)
        return color_to_rgb8(pixel_color / self.samples_per_pixel)

    def get_ray(self, x: int, y: int, rng: Optional[np.random.Generator] = None) -> Ray:
        """Generate a jittered sample ray through pixel (x, y).

        The sample point is offset uniformly within [-0.5, 0.5] of a pixel
        along both axes. With a non-zero defocus angle the ray starts at a
        random point on the lens disk instead of the camera center.
        """
        rng = rng or default_rng()
        offset_u, offset_v = rng.random(2) - 0.5
        pixel_sample = (
            self.pixel00_loc
            + self.pixel_delta_u * (x + offset_u)
            + self.pixel_delta_v * (y + offset_v)
        )

        if self.defocus_angle <= 0:
            ray_origin = self.center
        else:
            ray_origin = self.defocus_disk_sample(rng)

        return Ray(ray_origin, pixel_sample - ray_origin)

    def defocus_disk_sample(self, rng: Optional[np.random.Generator] = None) -> Point3:
        """Return a random point on the camera's defocus disk."""
        p = Vec3.random_in_unit_disk(rng)
        return self.center + self.defocus_disk_u * p.x + self.defocus_disk_v * p.y

    def ray_color(self, ray: Ray, scene: Hittable, depth: int,
                  rng: Optional[np.random.Generator] = None) -> Color:
        """Compute the radiance carried back along a ray.

        Follows scattered rays for at most ``depth`` bounces, multiplying
        the attenuation of each surface. A path that runs out of bounces
        or is absorbed contributes black; a path that escapes picks up
        the sky color.

        Args:
            ray: The ray to trace
            scene: The scene to trace against
            depth: Maximum number of bounces
            rng: Random generator handed to the materials

        Returns:
            The computed color for this ray
        """
        attenuation = Color(1.0, 1.0, 1.0)

        for _ in range(depth):
            rec = scene.hit(ray, HIT_INTERVAL, rng)
            if rec is None:
                return attenuation * self.sky_color(ray)
            if rec.scattering is None:
                return Color(0, 0, 0)
            attenuation = attenuation * rec.scattering.attenuation
            ray = rec.scattering.scattered

        return Color(0, 0, 0)

    @staticmethod
    def sky_color(ray: Ray) -> Color:
        """Generate a sky gradient background.

        Args:
            ray: The ray direction to use for gradient

        Returns:
            Sky color at this direction
        """
        unit_direction = ray.direction.unit_vector()
        a = 0.5 * (unit_direction.y + 1.0)
        return SKY_WHITE * (1.0 - a) + SKY_BLUE * a

    def __repr__(self) -> str:
        return (f"Camera({self.image_width}x{self.image_height}, "
                f"center={self.center}, samples={self.samples_per_pixel})")
