"""Tests for the command-line entry point."""

import pytest
from PIL import Image as PILImage

import main


class TestArguments:
    """Test argument parsing."""

    def test_defaults(self):
        args = main.build_parser().parse_args([])
        assert args.scene == 'spheres'
        assert args.file is None
        assert args.width is None
        assert args.output == 'output/render.png'

    def test_scene_and_file_are_exclusive(self):
        with pytest.raises(SystemExit):
            main.build_parser().parse_args(['--scene', 'three', '--file', 'x.yaml'])

    def test_unknown_scene(self):
        with pytest.raises(SystemExit):
            main.build_parser().parse_args(['--scene', 'cornell'])


class TestMain:
    """Test end-to-end runs."""

    def test_renders_builtin_scene(self, tmp_path, capsys):
        output = tmp_path / "three.png"
        status = main.main([
            '--scene', 'three', '--width', '8', '--samples', '1',
            '--depth', '2', '--seed', '4', '--output', str(output),
        ])
        assert status == 0
        with PILImage.open(output) as img:
            assert img.size == (8, 4)
        assert "Done!" in capsys.readouterr().out

    def test_renders_scene_file(self, tmp_path):
        scene = tmp_path / "scene.yaml"
        scene.write_text(
            "camera: {image_width: 4, aspect_ratio: 1.0, samples: 1, depth: 2}\n"
            "objects:\n"
            "  - {center: [0, 0, -1], radius: 0.5, material: {type: lambertian}}\n"
        )
        output = tmp_path / "scene.png"
        assert main.main(['--file', str(scene), '--output', str(output)]) == 0
        with PILImage.open(output) as img:
            assert img.size == (4, 4)

    def test_bad_scene_file(self, tmp_path, capsys):
        scene = tmp_path / "bad.yaml"
        scene.write_text("objects: [{type: cube}]\n")
        assert main.main(['--file', str(scene), '--output', str(tmp_path / "x.png")]) == 1
        assert "Unknown object type" in capsys.readouterr().err

    def test_invalid_override(self, tmp_path, capsys):
        status = main.main(['--scene', 'three', '--samples', '0',
                            '--output', str(tmp_path / "x.png")])
        assert status == 1
        assert "samples_per_pixel" in capsys.readouterr().err
