"""
Liquid Glass -- CLI & Image I/O Tests

Run with: pytest tests/test_cli.py -v
"""

import numpy as np
import pytest
from PIL import Image

from conftest import _make_test_frame
from core.image_io import load_surface, save_surface
from core.safety import InvalidParameterError
from effects import apply_effect
import liquidglass


@pytest.fixture
def png_path(tmp_path):
    path = tmp_path / "input.png"
    Image.fromarray(_make_test_frame(alpha=180)).save(str(path))
    return path


class TestImageIO:

    def test_roundtrip_rgba(self, tmp_path, random_frame):
        out = save_surface(random_frame, tmp_path / "nested" / "out.png")
        assert out.exists()
        np.testing.assert_array_equal(load_surface(out), random_frame)

    def test_rgb_file_loads_opaque(self, tmp_path):
        path = tmp_path / "rgb.png"
        Image.new("RGB", (5, 3), (10, 20, 30)).save(str(path))
        surf = load_surface(path)
        assert surf.shape == (3, 5, 4)
        assert np.all(surf[:, :, 3] == 255)
        assert surf[0, 0, :3].tolist() == [10, 20, 30]

    def test_jpeg_drops_alpha(self, tmp_path, frame):
        out = save_surface(frame, tmp_path / "out.jpg")
        with Image.open(out) as img:
            assert img.mode == "RGB"

    def test_save_rejects_bad_array(self, tmp_path):
        with pytest.raises(InvalidParameterError):
            save_surface(np.zeros((4, 4), dtype=np.float64), tmp_path / "x.png")


class TestParseParams:

    def test_values(self):
        parsed = liquidglass._parse_params([
            "intensity=0.05", "depth_effect=true", "strategy=radial_split",
            "falloff=edge_weighted", "power=2",
        ])
        assert parsed == {
            "intensity": 0.05, "depth_effect": True, "strategy": "radial_split",
            "falloff": "edge_weighted", "power": 2,
        }

    def test_nan_rejected(self):
        with pytest.raises(ValueError):
            liquidglass._parse_param_value("nan")

    def test_missing_equals(self):
        with pytest.raises(ValueError):
            liquidglass._parse_params(["intensity"])


class TestCommands:

    def test_apply(self, png_path, tmp_path):
        out = tmp_path / "out.png"
        liquidglass.main(["apply", str(png_path), str(out), "--effect", "dispersion",
                          "--params", "intensity=0.05", "strategy=radial_split"])
        src = load_surface(png_path)
        np.testing.assert_array_equal(
            load_surface(out),
            apply_effect(src, "dispersion", intensity=0.05, strategy="radial_split"),
        )

    def test_apply_gamma_identity(self, png_path, tmp_path):
        out = tmp_path / "same.png"
        liquidglass.main(["apply", str(png_path), str(out), "--effect", "gamma", "--params", "power=1.0"])
        np.testing.assert_array_equal(load_surface(out), load_surface(png_path))

    def test_apply_unknown_effect_exits(self, png_path, tmp_path, capsys):
        with pytest.raises(SystemExit) as exc:
            liquidglass.main(["apply", str(png_path), str(tmp_path / "o.png"), "--effect", "disp"])
        assert exc.value.code == 1
        captured = capsys.readouterr()
        assert "Did you mean: dispersion" in captured.err
        assert captured.out == ""
        assert not (tmp_path / "o.png").exists()

    def test_glass(self, png_path, tmp_path):
        out = tmp_path / "glass.png"
        liquidglass.main(["glass", str(png_path), str(out), "--refraction", "0.05",
                          "--dispersion", "0.02", "--depth-effect", "--gamma", "1.2"])
        result = load_surface(out)
        src = load_surface(png_path)
        assert result.shape == src.shape
        np.testing.assert_array_equal(result[:, :, 3], src[:, :, 3])

    def test_glass_color_flags(self, png_path, tmp_path):
        out = tmp_path / "gray.png"
        liquidglass.main(["glass", str(png_path), str(out), "--saturation", "0"])
        result = load_surface(out)
        np.testing.assert_array_equal(result[:, :, 0], result[:, :, 1])
        np.testing.assert_array_equal(result[:, :, 1], result[:, :, 2])

    def test_glass_preset(self, png_path, tmp_path, capsys):
        out = tmp_path / "preset.png"
        liquidglass.main(["glass", str(png_path), str(out), "--preset", "Smoked Glass"])
        assert out.exists()
        assert "Smoked Glass" in capsys.readouterr().out

    def test_glass_bad_gamma_exits(self, png_path, tmp_path, capsys):
        with pytest.raises(SystemExit) as exc:
            liquidglass.main(["glass", str(png_path), str(tmp_path / "o.png"), "--gamma", "-1"])
        assert exc.value.code == 1
        assert "Gamma power" in capsys.readouterr().err

    def test_missing_input_exits(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as exc:
            liquidglass.main(["apply", str(tmp_path / "missing.png"), str(tmp_path / "o.png"),
                              "--effect", "gamma"])
        assert exc.value.code == 1
        assert "not found" in capsys.readouterr().err

    def test_list_effects(self, capsys):
        liquidglass.main(["list-effects"])
        out = capsys.readouterr().out
        for name in ("refraction", "dispersion", "color", "gamma"):
            assert name in out
        assert "Total: 4 effects" in out

    def test_info(self, capsys):
        liquidglass.main(["info", "dispersion"])
        out = capsys.readouterr().out
        assert "axis_split | radial_split" in out
        assert "[0.0 .. 0.1]" in out

    def test_search(self, capsys):
        liquidglass.main(["search", "tone"])
        assert "gamma" in capsys.readouterr().out

    def test_list_presets(self, capsys):
        liquidglass.main(["list-presets"])
        assert "Liquid Glass" in capsys.readouterr().out

    def test_no_command_prints_help(self, capsys):
        liquidglass.main([])
        assert "usage" in capsys.readouterr().out.lower()
