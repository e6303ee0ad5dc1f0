import asyncio
import json

import pytest

from mgv_gui.io import ViewerSettings, load_settings, save_settings
from mgv_gui.model import RegionManager


def test_defaults_match_viewer_geometry():
    settings = ViewerSettings()
    assert settings.end_cap_width == 12
    assert settings.region_gap == 2
    assert settings.min_region_width == 25
    assert settings.default_window == 10_000_000
    assert settings.feature_alignment == "5-prime"


def test_from_dict_coerces_and_ignores_unknown_keys():
    settings = ViewerSettings.from_dict({"zoom_width": "800", "default_window": 5000.0, "colour": "red"})
    assert settings.zoom_width == pytest.approx(800.0)
    assert settings.default_window == 5000
    assert isinstance(settings.default_window, int)


@pytest.mark.parametrize(
    "values",
    [
        {"feature_alignment": "centre"},
        {"min_region_width": 0},
        {"default_window": 0},
        {"zoom_width": 10},
    ],
)
def test_invalid_settings_rejected(values):
    with pytest.raises(ValueError):
        ViewerSettings(**values)


def test_save_and_load_settings(tmp_path):
    path = tmp_path / "viewer.json"
    save_settings(path, ViewerSettings(zoom_width=1600.0, feature_alignment="midpoint"))

    assert json.loads(path.read_text(encoding="utf-8"))["feature_alignment"] == "midpoint"
    loaded = load_settings(path)
    assert loaded.zoom_width == pytest.approx(1600.0)
    assert loaded.feature_alignment == "midpoint"
    assert loaded.region_gap == pytest.approx(2.0)


def test_settings_drive_layout(features, translator, b6):
    manager = RegionManager(features, translator, settings=ViewerSettings(zoom_width=500.0))
    strip = asyncio.run(manager.add_strip(b6))
    assert strip.regions[0].width == pytest.approx(488)
