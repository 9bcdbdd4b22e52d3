"""
Scene description language parser.

Supports a YAML-based scene description format (JSON works too) with:
- Camera configuration
- Materials library
- Objects (spheres with materials)

Example scene file:
```yaml
camera:
  image_width: 400
  look_from: [13, 2, 3]
  look_at: [0, 0, 0]
  vfov: 20
  defocus_angle: 0.6
  focus_dist: 10
  samples: 100
  depth: 50

materials:
  ground:
    type: lambertian
    albedo: [0.5, 0.5, 0.5]

  glass:
    type: dielectric
    ior: 1.5

objects:
  - type: sphere
    center: [0, -1000, 0]
    radius: 1000
    material: ground

  - type: sphere
    center: [0, 1, 0]
    radius: 1
    material: glass
```
"""

from __future__ import annotations
from pathlib import Path
from typing import Dict, Any, Tuple
import json

import yaml

from .vec3 import Vec3, Color
from .camera import CameraSettings
from .shapes import Sphere, HittableList
from .materials import Material, Lambertian, Metal, Dielectric


class SceneParseError(ValueError):
    """Error during scene parsing."""
    pass


# Keys accepted in the camera section, mapped to CameraSettings fields
_CAMERA_KEYS = {
    'image_width': ('image_width', int),
    'width': ('image_width', int),
    'aspect_ratio': ('aspect_ratio', float),
    'vfov': ('vfov', float),
    'defocus_angle': ('defocus_angle', float),
    'focus_dist': ('focus_dist', float),
    'samples': ('samples_per_pixel', int),
    'samples_per_pixel': ('samples_per_pixel', int),
    'depth': ('max_depth', int),
    'max_depth': ('max_depth', int),
    'seed': ('seed', int),
}

_CAMERA_VECTORS = ('look_from', 'look_at', 'vup')


class SceneParser:
    """Parser for scene description files."""

    def __init__(self):
        self.materials: Dict[str, Material] = {}
        self.objects: HittableList = HittableList()
        self.settings: CameraSettings = CameraSettings()

    def parse_file(self, filepath: str) -> Tuple[HittableList, CameraSettings]:
        """Parse a scene file.

        Args:
            filepath: Path to the scene file (YAML or JSON)

        Returns:
            Tuple of (scene, settings)
        """
        path = Path(filepath)
        if not path.exists():
            raise SceneParseError(f"Scene file not found: {filepath}")

        try:
            content = path.read_text(encoding='utf-8')
            if path.suffix == '.json':
                data = json.loads(content)
            else:
                # YAML is a superset of JSON
                data = yaml.safe_load(content)
        except (UnicodeDecodeError, json.JSONDecodeError, yaml.YAMLError) as e:
            raise SceneParseError(f"Cannot read scene file {filepath}: {e}") from e

        return self.parse_dict(data)

    def parse_dict(self, data: Dict[str, Any]) -> Tuple[HittableList, CameraSettings]:
        """Parse a scene from a dictionary.

        Args:
            data: Scene description dictionary

        Returns:
            Tuple of (scene, settings)
        """
        if not isinstance(data, dict):
            raise SceneParseError(f"Scene must be a mapping, got {type(data).__name__}")

        # Parse materials first (objects reference them)
        if 'materials' in data:
            self._parse_materials(data['materials'])

        if 'objects' in data:
            self._parse_objects(data['objects'])

        if 'camera' in data:
            self._parse_camera(data['camera'])

        return self.objects, self.settings

    def _parse_vec3(self, data: Any) -> Vec3:
        """Parse a Vec3 from various formats."""
        if isinstance(data, dict):
            data = [data.get('x', 0), data.get('y', 0), data.get('z', 0)]
        if not isinstance(data, (list, tuple)):
            raise SceneParseError(f"Cannot parse Vec3 from: {data}")
        if len(data) != 3:
            raise SceneParseError(f"Vec3 must have 3 components, got {len(data)}")
        try:
            return Vec3(float(data[0]), float(data[1]), float(data[2]))
        except (TypeError, ValueError) as e:
            raise SceneParseError(f"Cannot parse Vec3 from: {data}") from e

    def _parse_color(self, data: Any) -> Color:
        """Parse a Color from various formats."""
        if isinstance(data, dict):
            data = [data.get('r', 0), data.get('g', 0), data.get('b', 0)]
        elif isinstance(data, str):
            # Handle hex colors
            hex_color = data[1:] if data.startswith('#') else ''
            try:
                if len(hex_color) == 6:
                    return Color(
                        int(hex_color[0:2], 16) / 255.0,
                        int(hex_color[2:4], 16) / 255.0,
                        int(hex_color[4:6], 16) / 255.0
                    )
            except ValueError as e:
                raise SceneParseError(f"Cannot parse color from string: {data}") from e
            raise SceneParseError(f"Cannot parse color from string: {data}")
        return self._parse_vec3(data)

    def _parse_float(self, data: Dict[str, Any], key: str, default: float) -> float:
        try:
            return float(data.get(key, default))
        except (TypeError, ValueError) as e:
            raise SceneParseError(f"'{key}' must be a number, got {data.get(key)!r}") from e

    def _parse_material(self, name: str, mat_data: Any) -> Material:
        if not isinstance(mat_data, dict):
            raise SceneParseError(f"Material '{name}' must be a mapping")
        mat_type = str(mat_data.get('type', 'lambertian')).lower()

        if mat_type == 'lambertian':
            return Lambertian(self._parse_color(mat_data.get('albedo', [0.5, 0.5, 0.5])))

        elif mat_type == 'metal':
            albedo = self._parse_color(mat_data.get('albedo', [0.8, 0.8, 0.8]))
            return Metal(albedo, self._parse_float(mat_data, 'fuzz', 0.0))

        elif mat_type == 'dielectric':
            return Dielectric(self._parse_float(mat_data, 'ior', 1.5))

        raise SceneParseError(f"Unknown material type: {mat_type}")

    def _parse_materials(self, materials_data: Dict[str, Any]) -> None:
        """Parse materials section."""
        if not isinstance(materials_data, dict):
            raise SceneParseError("'materials' must be a mapping of name to material")
        for name, mat_data in materials_data.items():
            self.materials[name] = self._parse_material(name, mat_data)

    def _get_material(self, mat_ref: Any) -> Material:
        """Get a material by name or inline definition."""
        if isinstance(mat_ref, str):
            if mat_ref not in self.materials:
                raise SceneParseError(f"Unknown material: {mat_ref}")
            return self.materials[mat_ref]
        elif isinstance(mat_ref, dict):
            return self._parse_material('<inline>', mat_ref)
        raise SceneParseError(f"Invalid material reference: {mat_ref}")

    def _parse_objects(self, objects_data: list) -> None:
        """Parse objects section."""
        if not isinstance(objects_data, list):
            raise SceneParseError("'objects' must be a list")
        for obj_data in objects_data:
            if not isinstance(obj_data, dict):
                raise SceneParseError(f"Object must be a mapping, got {obj_data!r}")
            obj_type = str(obj_data.get('type', 'sphere')).lower()
            if obj_type != 'sphere':
                raise SceneParseError(f"Unknown object type: {obj_type}")
            if 'material' not in obj_data:
                raise SceneParseError(f"Object is missing a material: {obj_data}")

            material = self._get_material(obj_data['material'])
            center = self._parse_vec3(obj_data.get('center', [0, 0, 0]))
            # Negative radii are kept: they model hollow shells
            radius = self._parse_float(obj_data, 'radius', 1.0)
            self.objects.add(Sphere(center, radius, material))

    def _parse_camera(self, camera_data: Dict[str, Any]) -> None:
        """Parse camera section."""
        if not isinstance(camera_data, dict):
            raise SceneParseError("'camera' must be a mapping")

        kwargs: Dict[str, Any] = {}
        for key, value in camera_data.items():
            if key in _CAMERA_VECTORS:
                kwargs[key] = self._parse_vec3(value)
            elif key in _CAMERA_KEYS:
                field, convert = _CAMERA_KEYS[key]
                try:
                    kwargs[field] = convert(value)
                except (TypeError, ValueError) as e:
                    raise SceneParseError(f"Invalid camera '{key}': {value!r}") from e
            else:
                raise SceneParseError(f"Unknown camera setting: {key}")

        try:
            self.settings = CameraSettings(**kwargs)
        except ValueError as e:
            raise SceneParseError(f"Invalid camera settings: {e}") from e


def load_scene(filepath: str) -> Tuple[HittableList, CameraSettings]:
    """Convenience function to load a scene file.

    Args:
        filepath: Path to the scene file

    Returns:
        Tuple of (scene, settings)
    """
    parser = SceneParser()
    return parser.parse_file(filepath)


def parse_scene(data: Dict[str, Any]) -> Tuple[HittableList, CameraSettings]:
    """Convenience function to parse a scene from a dictionary.

    Args:
        data: Scene description dictionary

    Returns:
        Tuple of (scene, settings)
    """
    parser = SceneParser()
    return parser.parse_dict(data)
