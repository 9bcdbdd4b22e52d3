"""Tests for Camera and the render loop."""

import logging
import math

import pytest
import numpy as np

from raylite.vec3 import Vec3, Point3, Color
from raylite.ray import Ray
from raylite.camera import Camera, CameraSettings
from raylite.shapes import Sphere, HittableList
from raylite.materials import Lambertian, Metal


class CenteredRng:
    """Generator stand-in whose pixel jitter always lands on the pixel center."""

    def random(self, size=None):
        return 0.5 if size is None else np.full(size, 0.5)

    def uniform(self, low=0.0, high=1.0, size=None):
        value = low + 0.75 * (high - low)
        return value if size is None else np.full(size, value)


def pinhole(**kwargs):
    """Square 90° pinhole camera at the origin looking down -Z."""
    params = dict(
        image_width=2,
        aspect_ratio=1.0,
        vfov=90,
        defocus_angle=0.0,
        focus_dist=1.0,
        samples_per_pixel=1,
        max_depth=1,
        seed=0,
    )
    params.update(kwargs)
    return Camera(CameraSettings(**params))


class TestCameraSettings:
    """Test CameraSettings defaults and validation."""

    def test_defaults(self):
        s = CameraSettings()
        assert s.vfov == 20.0
        assert s.defocus_angle == 0.6
        assert s.focus_dist == 10.0
        assert s.vup == Vec3(0, 1, 0)
        assert s.look_from == Point3(0, 0, 0)
        assert s.look_at == Point3(0, 0, -1)
        assert s.samples_per_pixel == 500
        assert s.max_depth == 50
        assert s.seed is None

    def test_image_height(self):
        assert CameraSettings(image_width=400, aspect_ratio=16 / 9).image_height == 225
        assert CameraSettings(image_width=2, aspect_ratio=1.0).image_height == 2

    def test_image_height_at_least_one(self):
        assert CameraSettings(image_width=1, aspect_ratio=16 / 9).image_height == 1

    @pytest.mark.parametrize("kwargs", [
        {'image_width': 0},
        {'aspect_ratio': 0.0},
        {'samples_per_pixel': 0},
        {'max_depth': -1},
        {'focus_dist': 0.0},
        {'defocus_angle': -1.0},
        {'look_from': Point3(1, 1, 1), 'look_at': Point3(1, 1, 1)},
        {'look_from': Point3(0, 5, 0), 'look_at': Point3(0, 0, 0)},
    ])
    def test_invalid_settings(self, kwargs):
        with pytest.raises(ValueError):
            CameraSettings(**kwargs)

    def test_looking_straight_down_with_tilted_vup(self):
        s = CameraSettings(look_from=Point3(0, 5, 0), look_at=Point3(0, 0, 0), vup=Vec3(0, 0, -1))
        cam = Camera(s)
        assert cam.u == Vec3(1, 0, 0)
        assert cam.w == Vec3(0, 1, 0)


class TestCameraGeometry:
    """Test derived viewport geometry."""

    def test_basis_vectors(self):
        cam = pinhole()
        assert cam.w == Vec3(0, 0, 1)
        assert cam.u == Vec3(1, 0, 0)
        assert cam.v == Vec3(0, 1, 0)

    def test_pixel_grid(self):
        cam = pinhole()
        assert cam.pixel_delta_u == Vec3(1, 0, 0)
        assert cam.pixel_delta_v == Vec3(0, -1, 0)
        assert cam.pixel00_loc == Point3(-0.5, 0.5, -1)

    def test_focus_dist_scales_viewport(self):
        cam = pinhole(focus_dist=2.0)
        assert cam.pixel00_loc == Point3(-1, 1, -2)

    def test_defocus_disk(self):
        cam = pinhole(defocus_angle=10.0, focus_dist=10.0)
        radius = 10.0 * math.tan(math.radians(5.0))
        assert abs(cam.defocus_disk_u.length() - radius) < 1e-9
        assert abs(cam.defocus_disk_v.length() - radius) < 1e-9

    def test_angled_camera_looks_at_target(self):
        cam = pinhole(look_from=Point3(5, 5, 5), look_at=Point3(0, 0, 0), image_width=3)
        ray = cam.get_ray(1, 1, CenteredRng())
        target = (Point3(0, 0, 0) - cam.center).unit_vector()
        assert ray.direction.unit_vector() == target


class TestCameraRays:
    """Test per-sample ray generation."""

    def test_centered_sample(self):
        cam = pinhole()
        ray = cam.get_ray(0, 0, CenteredRng())
        assert ray.origin == Point3(0, 0, 0)
        assert ray.direction == Vec3(-0.5, 0.5, -1)

    def test_jitter_stays_within_pixel(self):
        cam = pinhole()
        rng = np.random.default_rng(5)
        for _ in range(100):
            ray = cam.get_ray(1, 1, rng)
            target = ray.at(1.0)
            assert 0.0 <= target.x <= 1.0
            assert -1.0 <= target.y <= 0.0
            assert abs(target.z + 1.0) < 1e-9

    def test_jitter_varies(self):
        cam = pinhole()
        rng = np.random.default_rng(5)
        xs = {round(cam.get_ray(0, 0, rng).direction.x, 6) for _ in range(20)}
        assert len(xs) > 1

    def test_default_generator_ignores_seed(self):
        cam = pinhole(seed=7)
        xs = {round(cam.get_ray(0, 0).direction.x, 9) for _ in range(10)}
        assert len(xs) > 1

    def test_no_defocus_fixed_origin(self):
        cam = pinhole(look_from=Point3(1, 2, 3), look_at=Point3(0, 0, 0))
        rng = np.random.default_rng(1)
        for _ in range(10):
            assert cam.get_ray(0, 1, rng).origin == cam.center

    def test_defocus_varies_origin_within_disk(self):
        cam = pinhole(defocus_angle=10.0, focus_dist=10.0)
        radius = 10.0 * math.tan(math.radians(5.0))
        rng = np.random.default_rng(3)

        origins = [cam.get_ray(0, 0, rng).origin for _ in range(100)]
        xs = [o.x for o in origins]
        assert max(xs) - min(xs) > 0.1
        for o in origins:
            assert (o - cam.center).length() < radius
            assert abs(o.z) < 1e-9

    def test_defocus_rays_converge_on_focus_plane(self):
        cam = pinhole(defocus_angle=10.0, focus_dist=4.0)
        ray = cam.get_ray(0, 0, CenteredRng())
        assert ray.origin != cam.center
        # The sample point on the focus plane is unaffected by the lens offset
        assert ray.at(1.0) == cam.pixel00_loc


class TestRayColor:
    """Test radiance evaluation."""

    def test_sky_gradient(self):
        assert Camera.sky_color(Ray(Point3(0, 0, 0), Vec3(0, 1, 0))) == Color(0.5, 0.7, 1.0)
        assert Camera.sky_color(Ray(Point3(0, 0, 0), Vec3(0, -3, 0))) == Color(1, 1, 1)
        assert Camera.sky_color(Ray(Point3(0, 0, 0), Vec3(1, 0, 0))) == Color(0.75, 0.85, 1.0)

    def test_depth_zero_is_black(self):
        cam = pinhole()
        ray = Ray(Point3(0, 0, 0), Vec3(0, 1, 0))
        assert cam.ray_color(ray, HittableList(), 0) == Color(0, 0, 0)

    def test_miss_returns_sky(self):
        cam = pinhole()
        ray = Ray(Point3(0, 0, 0), Vec3(0, 1, 0))
        assert cam.ray_color(ray, HittableList(), 5) == Color(0.5, 0.7, 1.0)

    def test_hit_at_last_bounce_is_black(self):
        cam = pinhole()
        world = HittableList([Sphere(Point3(0, 0, -1), 0.5, Lambertian(Color(1, 1, 1)))])
        ray = Ray(Point3(0, 0, 0), Vec3(0, 0, -1))
        assert cam.ray_color(ray, world, 1, np.random.default_rng(0)) == Color(0, 0, 0)

    def test_attenuation_multiplies(self):
        cam = pinhole()
        # Mirror facing the camera bounces the ray straight back to the sky
        world = HittableList([Sphere(Point3(0, 0, -2), 0.5, Metal(Color(0.5, 0.25, 1.0)))])
        ray = Ray(Point3(0, 0, 0), Vec3(0, 0, -1))
        color = cam.ray_color(ray, world, 2)
        assert color == Color(0.5, 0.25, 1.0) * Color(0.75, 0.85, 1.0)

    def test_absorbed_ray_is_black(self):
        cam = pinhole()
        # Material-less sphere absorbs everything
        world = HittableList([Sphere(Point3(0, 0, -2), 0.5)])
        ray = Ray(Point3(0, 0, 0), Vec3(0, 0, -1))
        assert cam.ray_color(ray, world, 10) == Color(0, 0, 0)

    def test_trapped_ray_exhausts_depth(self):
        cam = pinhole()
        # Inside a mirror sphere every bounce stays inside
        world = HittableList([Sphere(Point3(0, 0, 0), 10.0, Metal(Color(1, 1, 1)))])
        ray = Ray(Point3(0, 0, 0), Vec3(0.3, 0.2, -1))
        assert cam.ray_color(ray, world, 8) == Color(0, 0, 0)


class TestRender:
    """Test full renders."""

    def test_shape_and_dtype(self):
        cam = pinhole(image_width=4, aspect_ratio=2.0)
        image = cam.render(HittableList())
        assert image.shape == (2, 4, 3)
        assert image.dtype == np.uint8

    def test_single_diffuse_sphere(self):
        world = HittableList([Sphere(Point3(0, 0, -1), 0.5, Lambertian(Color(0.5, 0.5, 0.5)))])
        # Offset so the upper-left pixel center looks straight at the sphere center
        cam = pinhole(look_from=Point3(0.5, -0.5, 0), look_at=Point3(0.5, -0.5, -1))
        image = cam.render(world, CenteredRng())

        assert image.shape == (2, 2, 3)
        assert image.min() >= 0
        assert image.max() <= 255
        # Depth 1: a surface hit has no bounces left
        assert tuple(image[0, 0]) == (0, 0, 0)
        for y, x in ((0, 1), (1, 0), (1, 1)):
            assert image[y, x].sum() > 0
            assert not np.array_equal(image[y, x], image[0, 0])

    def test_single_diffuse_sphere_random_sampling(self):
        world = HittableList([Sphere(Point3(0, 0, -1), 0.5, Lambertian(Color(0.5, 0.5, 0.5)))])
        image = pinhole(max_depth=1).render(world)
        assert image.shape == (2, 2, 3)
        assert image.dtype == np.uint8

    def test_sky_is_bluer_at_top(self):
        cam = pinhole(image_width=8, samples_per_pixel=2)
        image = cam.render(HittableList())
        # Red falls off toward the zenith while blue stays saturated
        assert image[0, 4, 0] < image[7, 4, 0]
        assert image[0, 4, 2] >= image[7, 4, 2]

    def test_seeded_render_is_reproducible(self):
        world = HittableList([
            Sphere(Point3(0, -100.5, -1), 100, Lambertian(Color(0.5, 0.5, 0.5))),
            Sphere(Point3(0, 0, -1), 0.5, Lambertian(Color(0.7, 0.3, 0.3))),
        ])
        cam = pinhole(image_width=6, samples_per_pixel=3, max_depth=4, seed=42)
        first = cam.render(world)
        second = cam.render(world)
        assert np.array_equal(first, second)

    @pytest.mark.parametrize("samples", [1, 2])
    def test_mirror_scene_golden_image(self, samples):
        world = HittableList([
            Sphere(Point3(0, 0, -1), 0.5, Metal(Color(0.8, 0.8, 0.8))),
            Sphere(Point3(0, -100.5, -1), 100, Metal(Color(0.6, 0.6, 0.6))),
        ])
        reference = pinhole(image_width=4, max_depth=10).render(world, CenteredRng())
        image = pinhole(image_width=4, samples_per_pixel=samples, max_depth=10).render(
            world, CenteredRng()
        )
        assert np.array_equal(image, reference)

    def test_render_point(self):
        cam = pinhole()
        pixel = cam.render_point(HittableList(), 0, 0)
        assert len(pixel) == 3
        assert all(isinstance(c, int) and 0 <= c <= 255 for c in pixel)

    def test_render_point_matches_render_for_centered_samples(self):
        world = HittableList([Sphere(Point3(0, 0, -1), 0.5, Metal(Color(0.9, 0.9, 0.9)))])
        cam = pinhole(image_width=3)
        image = cam.render(world, CenteredRng())
        assert tuple(image[1, 2]) == cam.render_point(world, 2, 1, CenteredRng())

    def test_progress_callback(self):
        cam = pinhole(image_width=3)
        progress = []
        cam.set_progress_callback(progress.append)
        cam.render(HittableList())
        assert len(progress) == 3
        assert progress[-1] == 1.0
        assert progress == sorted(progress)

    def test_logs_render_lifecycle(self, caplog):
        cam = pinhole()
        with caplog.at_level(logging.DEBUG, logger="raylite.camera"):
            cam.render(HittableList())
        assert "Rendering 2x2" in caplog.text
        assert "Render finished" in caplog.text
