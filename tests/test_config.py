# tests/test_config.py

from pathlib import Path

import pytest

from annomath.config import AnnomathConfig, load_configuration, numeric_options
from annomath.core.programs import NumericOptions

# --- Test Fixtures ---

@pytest.fixture
def clean_env(monkeypatch):
    """Removes ANNOMATH_* variables inherited from the environment."""
    import os
    for key in list(os.environ):
        if key.startswith("ANNOMATH_"):
            monkeypatch.delenv(key)
    return monkeypatch


def load(config_files=None):
    return load_configuration(config_files=config_files, disable_project_config=True, disable_user_config=True)

# --- Test Cases ---

def test_defaults(clean_env):
    config = load()
    assert config.evaluator.default_value == 0.0
    assert config.evaluator.advisory_message == "execution skipped: unsupported expression"
    assert config.special.euler_terms == 100
    assert config.special.weierstrass_terms == 100
    assert config.special.integral_upper == 20.0
    assert config.special.integral_step == 0.01
    assert config.catalog.disabled_rules == []
    assert config.logging.log_file_enabled is False

def test_numeric_options_from_defaults():
    assert numeric_options(AnnomathConfig()) == NumericOptions()

def test_toml_file_overrides_defaults(clean_env, tmp_path: Path):
    config_file = tmp_path / "custom.toml"
    config_file.write_text(
        "[special]\neuler_terms = 50\n\n[catalog]\ndisabled_rules = [\"min\"]\n",
        encoding="utf-8",
    )
    config = load([config_file])
    assert config.special.euler_terms == 50
    assert config.special.weierstrass_terms == 100
    assert config.catalog.disabled_rules == ["min"]

def test_earlier_files_take_precedence(clean_env, tmp_path: Path):
    first = tmp_path / "first.toml"
    second = tmp_path / "second.toml"
    first.write_text("[special]\nintegral_upper = 30.0\n", encoding="utf-8")
    second.write_text("[special]\nintegral_upper = 40.0\nintegral_step = 0.02\n", encoding="utf-8")
    config = load([first, second])
    assert config.special.integral_upper == 30.0
    assert config.special.integral_step == 0.02

def test_environment_overrides(clean_env, tmp_path: Path):
    config_file = tmp_path / "custom.toml"
    config_file.write_text("[special]\neuler_terms = 50\n", encoding="utf-8")
    clean_env.setenv("ANNOMATH_SPECIAL_EULER_TERMS", "60")
    clean_env.setenv("ANNOMATH_EVALUATOR_DEFAULT_VALUE", "-1.5")
    clean_env.setenv("ANNOMATH_CATALOG_DISABLED_RULES", "min, max")
    config = load([config_file])
    assert config.special.euler_terms == 60
    assert config.evaluator.default_value == -1.5
    assert config.catalog.disabled_rules == ["min", "max"]

def test_invalid_values_fall_back_to_defaults(clean_env, tmp_path: Path):
    config_file = tmp_path / "bad.toml"
    config_file.write_text("[special]\neuler_terms = 0\n", encoding="utf-8")
    config = load([config_file])
    assert config.special.euler_terms == 100

def test_euler_terms_upper_bound(clean_env):
    clean_env.setenv("ANNOMATH_SPECIAL_EULER_TERMS", "500")
    assert load().special.euler_terms == 100

def test_malformed_toml_is_skipped(clean_env, tmp_path: Path):
    config_file = tmp_path / "broken.toml"
    config_file.write_text("[special\neuler_terms = ", encoding="utf-8")
    assert load([config_file]) == AnnomathConfig()

def test_invalid_log_level_rejected():
    with pytest.raises(ValueError):
        AnnomathConfig(logging={"log_level_file": "LOUD"})
