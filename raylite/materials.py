"""
Surface materials.

Implements:
- Lambertian diffuse
- Metal (specular reflection with fuzz)
- Dielectric (glass, water - with refraction)

A material turns an incoming ray and a hit record into a scattered ray
plus an attenuation color, or into nothing when the ray is absorbed.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, TYPE_CHECKING
import math

import numpy as np

from .vec3 import Vec3, Color, default_rng
from .ray import Ray

if TYPE_CHECKING:
    from .shapes import HitRecord


@dataclass
class Scattering:
    """Result of a material scatter operation."""
    scattered: Ray
    attenuation: Color


class Material(ABC):
    """Abstract base class for materials."""

    @abstractmethod
    def scatter(self, ray_in: Ray, rec: HitRecord,
                rng: Optional[np.random.Generator] = None) -> Optional[Scattering]:
        """Compute the scattered ray and attenuation.

        Args:
            ray_in: The incoming ray
            rec: The intersection (point, face-oriented normal, front_face)
            rng: Random generator for stochastic materials

        Returns:
            Scattering if ray scatters, None if absorbed
        """
        pass


class Lambertian(Material):
    """Diffuse material with Lambertian (ideal matte) scattering."""

    def __init__(self, albedo: Color):
        """Create a Lambertian material.

        Args:
            albedo: The base color (RGB, each component 0-1)
        """
        self.albedo = albedo

    def scatter(self, ray_in: Ray, rec: HitRecord,
                rng: Optional[np.random.Generator] = None) -> Optional[Scattering]:
        scatter_direction = rec.normal + Vec3.random_unit(rng)

        # Catch degenerate scatter direction
        if scatter_direction.near_zero():
            scatter_direction = rec.normal

        return Scattering(Ray(rec.point, scatter_direction), self.albedo)

    def __repr__(self) -> str:
        return f"Lambertian(albedo={self.albedo})"


class Metal(Material):
    """Metallic material with specular reflection."""

    def __init__(self, albedo: Color, fuzz: float = 0.0):
        """Create a metal material.

        Args:
            albedo: The reflection color
            fuzz: Radius of the reflection perturbation (0 = mirror)
        """
        self.albedo = albedo
        self.fuzz = fuzz

    def scatter(self, ray_in: Ray, rec: HitRecord,
                rng: Optional[np.random.Generator] = None) -> Optional[Scattering]:
        reflected = ray_in.direction.unit_vector().reflect(rec.normal)

        # A perfect mirror draws nothing from the generator
        if self.fuzz > 0:
            reflected = reflected + Vec3.random_unit(rng) * self.fuzz

        # Fuzz may push the reflection below the surface
        if reflected.dot(rec.normal) > 0:
            return Scattering(Ray(rec.point, reflected), self.albedo)
        return None

    def __repr__(self) -> str:
        return f"Metal(albedo={self.albedo}, fuzz={self.fuzz})"


class Dielectric(Material):
    """Dielectric (glass-like) material with refraction."""

    def __init__(self, refractive_index: float = 1.5):
        """Create a dielectric material.

        Args:
            refractive_index: Index of refraction (1.0 = air, 1.5 = glass, 2.4 = diamond)
        """
        self.refractive_index = refractive_index

    def scatter(self, ray_in: Ray, rec: HitRecord,
                rng: Optional[np.random.Generator] = None) -> Optional[Scattering]:
        rng = rng or default_rng()

        refraction_ratio = 1.0 / self.refractive_index if rec.front_face else self.refractive_index

        unit_direction = ray_in.direction.unit_vector()
        cos_theta = min(rec.normal.dot(-unit_direction), 1.0)
        sin_theta = math.sqrt(max(0.0, 1.0 - cos_theta * cos_theta))

        cannot_refract = refraction_ratio * sin_theta > 1.0

        # Fresnel reflection only on entry into a different medium;
        # exiting or index-matched rays refract unless TIR
        fresnel = rec.front_face and refraction_ratio != 1.0
        if cannot_refract or (
            fresnel and self.reflectance(cos_theta, refraction_ratio) > rng.random()
        ):
            direction = unit_direction.reflect(rec.normal)
        else:
            direction = unit_direction.refract(rec.normal, refraction_ratio)

        return Scattering(Ray(rec.point, direction), Color(1.0, 1.0, 1.0))

    @staticmethod
    def reflectance(cosine: float, ref_idx: float) -> float:
        """Schlick's approximation for reflectance."""
        r0 = (1 - ref_idx) / (1 + ref_idx)
        r0 = r0 * r0
        return r0 + (1 - r0) * pow(1 - cosine, 5)

    def __repr__(self) -> str:
        return f"Dielectric(refractive_index={self.refractive_index})"
