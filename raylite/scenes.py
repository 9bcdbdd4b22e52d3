"""
Built-in demo scenes.

Each factory returns the scene together with the camera settings it
was composed for.
"""

from __future__ import annotations
from typing import Callable, Dict, Optional, Tuple

import numpy as np

from .vec3 import Vec3, Point3, Color
from .shapes import Sphere, HittableList
from .materials import Lambertian, Metal, Dielectric
from .camera import CameraSettings


def random_spheres_scene(rng: Optional[np.random.Generator] = None) -> Tuple[HittableList, CameraSettings]:
    """Create the field of small random spheres around three large ones."""
    rng = rng or np.random.default_rng()
    world = HittableList()

    # Ground
    world.add(Sphere(Point3(0, -1000, 0), 1000, Lambertian(Color(0.5, 0.5, 0.5))))

    world.add(Sphere(Point3(0, 1, 0), 1.0, Dielectric(1.5)))
    world.add(Sphere(Point3(-4, 1, 0), 1.0, Lambertian(Color(0.4, 0.2, 0.1))))
    world.add(Sphere(Point3(4, 1, 0), 1.0, Metal(Color(0.7, 0.6, 0.5), 0.0)))

    # Keep the small spheres clear of the metal sphere
    clearing = Point3(4, 0.2, 0)

    for a in range(-11, 11):
        for b in range(-11, 11):
            center = Point3(a + 0.9 * rng.random(), 0.2, b + 0.9 * rng.random())
            if (center - clearing).length() <= 0.9:
                continue

            choose_mat = rng.random()
            if choose_mat < 0.8:
                albedo = Color.random(rng) * Color.random(rng)
                material = Lambertian(albedo)
            elif choose_mat < 0.95:
                albedo = Color.random_in_range(0.5, 1.0, rng)
                material = Metal(albedo, float(rng.random()))
            else:
                material = Dielectric(1.5)
            world.add(Sphere(center, 0.2, material))

    settings = CameraSettings(look_from=Point3(13, 2, 3), look_at=Point3(0, 0, 0))
    return world, settings


def three_spheres_scene(rng: Optional[np.random.Generator] = None) -> Tuple[HittableList, CameraSettings]:
    """Create a diffuse, a hollow glass and a fuzzed metal sphere on a ground plane."""
    world = HittableList()

    ground = Lambertian(Color(0.8, 0.8, 0.0))
    center = Lambertian(Color(0.1, 0.2, 0.5))
    glass = Dielectric(1.5)
    gold = Metal(Color(0.8, 0.6, 0.2), 0.3)

    world.add(Sphere(Point3(0, -100.5, -1), 100, ground))
    world.add(Sphere(Point3(0, 0, -1), 0.5, center))
    # Outer shell plus an inward-facing inner wall makes a hollow bubble
    world.add(Sphere(Point3(-1, 0, -1), 0.5, glass))
    world.add(Sphere(Point3(-1, 0, -1), -0.4, glass))
    world.add(Sphere(Point3(1, 0, -1), 0.5, gold))

    settings = CameraSettings(
        look_from=Point3(-2, 2, 1),
        look_at=Point3(0, 0, -1),
        vup=Vec3(0, 1, 0),
        focus_dist=3.4,
        defocus_angle=10.0,
    )
    return world, settings


SCENES: Dict[str, Callable[..., Tuple[HittableList, CameraSettings]]] = {
    'spheres': random_spheres_scene,
    'three': three_spheres_scene,
}
