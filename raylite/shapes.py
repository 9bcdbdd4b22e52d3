"""
Geometric shapes for the ray tracer.

Each shape must implement the Hittable protocol with a `hit` method.
Materials are resolved at hit time, so a hit record already carries the
scattering result for the ray that produced it.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterator, Optional, TYPE_CHECKING
import math

import numpy as np

from .vec3 import Vec3, Point3
from .ray import Ray
from .interval import Interval

if TYPE_CHECKING:
    from .materials import Material, Scattering


@dataclass
class HitRecord:
    """Stores information about a ray-object intersection.

    Attributes:
        point: The intersection point in world space
        normal: The unit surface normal (always points against the ray)
        t: The ray parameter at intersection
        front_face: True if ray hit from outside the object
        scattering: The material's response, None if the ray is absorbed
    """
    point: Point3
    normal: Vec3
    t: float
    front_face: bool
    scattering: Optional[Scattering] = None

    @classmethod
    def from_outward_normal(cls, ray: Ray, point: Point3, outward_normal: Vec3, t: float) -> HitRecord:
        """Build a record whose normal is flipped to face the incoming ray."""
        rec = cls(point=point, normal=outward_normal, t=t, front_face=True)
        rec.set_face_normal(ray, outward_normal)
        return rec

    def set_face_normal(self, ray: Ray, outward_normal: Vec3) -> None:
        """Set the normal to always point against the ray direction.

        Args:
            ray: The incoming ray
            outward_normal: The geometric normal pointing outward from surface
        """
        self.front_face = ray.direction.dot(outward_normal) < 0
        self.normal = outward_normal if self.front_face else -outward_normal


class Hittable(ABC):
    """Abstract base class for all objects that can be hit by rays."""

    @abstractmethod
    def hit(self, ray: Ray, ray_t: Interval[float],
            rng: Optional[np.random.Generator] = None) -> Optional[HitRecord]:
        """Test if ray intersects this object.

        Args:
            ray: The ray to test
            ray_t: Open interval of acceptable t values
            rng: Random generator handed to the material

        Returns:
            HitRecord if intersection found, None otherwise
        """
        pass


class Sphere(Hittable):
    """A sphere defined by center and radius."""

    def __init__(self, center: Point3, radius: float, material: Optional[Material] = None):
        """Create a sphere.

        Args:
            center: Center point of the sphere
            radius: Radius of the sphere (negative flips the normals inward,
                which models the inner wall of a hollow glass shell)
            material: Material for shading; None absorbs every ray
        """
        self.center = center
        self.radius = radius
        self.material = material

    def hit(self, ray: Ray, ray_t: Interval[float],
            rng: Optional[np.random.Generator] = None) -> Optional[HitRecord]:
        """Test ray-sphere intersection using the quadratic formula.

        The equation (P-C)·(P-C) = r² where P = ray.at(t)
        expands to: t²(d·d) + 2t(d·(O-C)) + (O-C)·(O-C) - r² = 0
        which is the quadratic at² + bt + c = 0, solved here with
        half_b = b/2.
        """
        oc = ray.origin - self.center
        a = ray.direction.length_squared()
        half_b = oc.dot(ray.direction)
        c = oc.length_squared() - self.radius * self.radius

        discriminant = half_b * half_b - a * c
        if discriminant < 0:
            return None

        sqrtd = math.sqrt(discriminant)

        # Find the nearest root in the acceptable range
        root = (-half_b - sqrtd) / a
        if not ray_t.surrounds(root):
            root = (-half_b + sqrtd) / a
            if not ray_t.surrounds(root):
                return None

        point = ray.at(root)
        outward_normal = (point - self.center) / self.radius

        rec = HitRecord.from_outward_normal(ray, point, outward_normal, root)
        if self.material is not None:
            rec.scattering = self.material.scatter(ray, rec, rng)
        return rec

    def __repr__(self) -> str:
        return f"Sphere(center={self.center}, radius={self.radius})"


class HittableList(Hittable):
    """An ordered collection of hittable objects resolved to the closest hit."""

    def __init__(self, objects: Optional[list[Hittable]] = None):
        self.objects: list[Hittable] = objects if objects is not None else []

    def add(self, obj: Hittable) -> None:
        """Add an object to the list."""
        self.objects.append(obj)

    def clear(self) -> None:
        """Remove all objects."""
        self.objects.clear()

    def hit(self, ray: Ray, ray_t: Interval[float],
            rng: Optional[np.random.Generator] = None) -> Optional[HitRecord]:
        """Find the closest intersection among all objects.

        The upper bound shrinks to the nearest t found so far, so farther
        objects are rejected by their own interval test.
        """
        closest_hit: Optional[HitRecord] = None
        closest_so_far = ray_t.max

        for obj in self.objects:
            hit_record = obj.hit(ray, Interval(ray_t.min, closest_so_far), rng)
            if hit_record is not None:
                closest_hit = hit_record
                closest_so_far = hit_record.t

        return closest_hit

    def __len__(self) -> int:
        return len(self.objects)

    def __iter__(self) -> Iterator[Hittable]:
        return iter(self.objects)
