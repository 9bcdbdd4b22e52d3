"""Tests for Ray class."""

import pytest
from raylite.vec3 import Vec3, Point3
from raylite.ray import Ray


class TestRayCreation:
    """Test Ray construction."""

    def test_stores_origin(self):
        origin = Point3(1, 2, 3)
        ray = Ray(origin, Vec3(1, 0, 0))
        assert ray.origin == origin

    def test_direction_not_normalized(self):
        ray = Ray(Point3(0, 0, 0), Vec3(1, 2, 3))
        assert ray.direction == Vec3(1, 2, 3)


class TestRayAt:
    """Test Ray.at() method."""

    def test_at_zero(self):
        ray = Ray(Point3(1, 2, 3), Vec3(1, 0, 0))
        assert ray.at(0) == Point3(1, 2, 3)

    def test_at_positive(self):
        ray = Ray(Point3(0, 0, 0), Vec3(1, 0, 0))
        assert ray.at(5) == Point3(5, 0, 0)

    def test_at_scales_with_direction_length(self):
        ray = Ray(Point3(1, 1, 1), Vec3(0, 2, 0))
        assert ray.at(1.5) == Point3(1, 4, 1)

    def test_at_negative(self):
        ray = Ray(Point3(0, 0, 0), Vec3(0, 0, -1))
        assert ray.at(-2) == Point3(0, 0, 2)
