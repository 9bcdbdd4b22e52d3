"""
raylite - A Monte-Carlo ray tracer in Python

Renders scenes of analytic spheres with:
- Diffuse, metal and glass materials
- Stochastic anti-aliasing
- Depth of field (defocus blur)
- Seedable, reproducible sampling
"""

__version__ = "0.1.0"

from .vec3 import Vec3, Point3, Color
from .interval import Interval, EMPTY, UNIVERSE
from .ray import Ray
from .shapes import HitRecord, Hittable, Sphere, HittableList
from .materials import Scattering, Material, Lambertian, Metal, Dielectric
from .camera import Camera, CameraSettings
from .tonemapping import linear_to_gamma, color_to_rgb8
from .scene_parser import SceneParser, SceneParseError, load_scene, parse_scene
from .scenes import SCENES, random_spheres_scene, three_spheres_scene
from .image import save_image
