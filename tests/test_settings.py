"""TOML config loading, profile overlay, defaults."""

from pathlib import Path

import pytest

from blippmarket.config import get_settings, load_config
from blippmarket.curve.engine import BondingCurveEngine


@pytest.fixture
def config_dir(tmp_path: Path) -> Path:
    (tmp_path / "default.toml").write_text(
        '[curve]\nfee_rate = 0.02\ngraduation_threshold = 100\n\n[logging]\nlevel = "info"\n'
    )
    (tmp_path / "dev.toml").write_text('[curve]\nfee_rate = 0.005\n\n[logging]\nformat = "json"\n')
    return tmp_path


def test_defaults_without_files(tmp_path):
    settings = get_settings(config_dir=tmp_path)
    assert settings.fee_rate == 0.01
    assert settings.virtual_base_offset == 30.0
    assert settings.graduation_threshold == 69.0
    assert settings.total_issuance == 1_000_000_000
    assert settings.module_name == "bonding_curve"
    assert settings.logging_level == "INFO"


def test_profile_overlay_deep_merges(config_dir):
    raw = load_config("dev", config_dir)
    assert raw["curve"] == {"fee_rate": 0.005, "graduation_threshold": 100}
    settings = get_settings("dev", config_dir)
    assert settings.fee_rate == 0.005
    assert settings.graduation_threshold == 100.0
    assert settings.logging_level == "INFO"
    assert settings.logging_format == "json"


def test_missing_profile_is_ignored(config_dir):
    assert get_settings("nope", config_dir).fee_rate == 0.02


def test_engine_from_settings(config_dir):
    engine = BondingCurveEngine.from_settings(get_settings(config_dir=config_dir))
    assert engine.fee_rate == 0.02
    assert engine.graduation_threshold == 100.0
    assert engine.chart_points == 50
