# annomath/config/loaders.py

"""
Functions for loading and merging annomath configuration from various sources.
"""

import os
import logging
from pathlib import Path
from typing import Dict, Any, Optional, List

import toml
from pydantic import ValidationError

from .models import AnnomathConfig
from ..core.programs import NumericOptions

logger = logging.getLogger(__name__)

# --- Constants ---
ENV_PREFIX = "ANNOMATH_"
USER_CONFIG_DIR = Path("~/.config/annomath").expanduser()
USER_CONFIG_FILE = USER_CONFIG_DIR / "annomath.toml"
PROJECT_CONFIG_FILE = Path("./annomath.toml")

# --- Helper Functions ---

def _load_toml_file(filepath: Path) -> Dict[str, Any]:
    """Loads a TOML file if it exists, returns empty dict otherwise."""
    if filepath.is_file():
        try:
            with open(filepath, 'r', encoding='utf-8') as f:
                return toml.load(f)
        except toml.TomlDecodeError as e:
            logger.warning(f"Error decoding TOML file '{filepath}': {e}. Skipping.")
        except OSError as e:
            logger.warning(f"Could not read config file '{filepath}': {e}. Skipping.")
    return {}

def _deep_merge_dicts(base: Dict, update: Dict) -> Dict:
    """Recursively merges 'update' dict into 'base' dict."""
    merged = base.copy()
    for key, value in update.items():
        if isinstance(value, dict) and key in merged and isinstance(merged[key], dict):
            merged[key] = _deep_merge_dicts(merged[key], value)
        else:
            merged[key] = value
    return merged

def _parse_env_value(value: str) -> Any:
    if value.lower() in ['true', 'false']:
        return value.lower() == 'true'
    try:
        return int(value)
    except ValueError:
        pass
    try:
        return float(value)
    except ValueError:
        return value

def _get_config_from_env() -> Dict[str, Any]:
    """
    Reads configuration settings from environment variables.

    ANNOMATH_<SECTION>_<KEY> maps to [section] key; the section name is split
    off at the first underscore so keys may contain underscores
    (ANNOMATH_SPECIAL_EULER_TERMS -> special.euler_terms).
    """
    env_config: Dict[str, Any] = {}
    for env_var, value in os.environ.items():
        if not env_var.startswith(ENV_PREFIX):
            continue
        section, _, key = env_var[len(ENV_PREFIX):].lower().partition('_')
        if not section or not key:
            logger.debug(f"Ignoring environment variable without section and key: {env_var}")
            continue
        env_config.setdefault(section, {})[key] = _parse_env_value(value)
    return env_config

# --- Main Loading Function ---

def load_configuration(
    config_files: Optional[List[Path]] = None,
    disable_project_config: bool = False,
    disable_user_config: bool = False,
) -> AnnomathConfig:
    """
    Loads annomath configuration from defaults, files, and environment variables.

    Precedence (highest first):
    1. Environment Variables (ANNOMATH_*)
    2. User Config File (~/.config/annomath/annomath.toml)
    3. Project Config File (./annomath.toml)
    4. Explicitly passed config files (if any)
    5. Internal Defaults (from Pydantic models)

    Args:
        config_files: List of additional config file paths to load.
        disable_project_config: If True, ignores ./annomath.toml.
        disable_user_config: If True, ignores ~/.config/annomath/annomath.toml.

    Returns:
        A validated AnnomathConfig object. Invalid settings fall back to the
        defaults with the validation error logged.
    """
    merged_config_dict: Dict[str, Any] = {}

    if config_files:
        for file_path in reversed(config_files): # Earlier files take precedence
            merged_config_dict = _deep_merge_dicts(merged_config_dict, _load_toml_file(Path(file_path)))

    if not disable_project_config:
        logger.debug(f"Attempting to load project config: {PROJECT_CONFIG_FILE.resolve()}")
        project_cfg = _load_toml_file(PROJECT_CONFIG_FILE)
        if project_cfg:
            logger.info(f"Loaded project configuration from {PROJECT_CONFIG_FILE.resolve()}")
            merged_config_dict = _deep_merge_dicts(merged_config_dict, project_cfg)

    if not disable_user_config:
        logger.debug(f"Attempting to load user config: {USER_CONFIG_FILE}")
        user_cfg = _load_toml_file(USER_CONFIG_FILE)
        if user_cfg:
            logger.info(f"Loaded user configuration from {USER_CONFIG_FILE}")
            merged_config_dict = _deep_merge_dicts(merged_config_dict, user_cfg)

    env_cfg = _get_config_from_env()
    if env_cfg:
        logger.debug(f"Applying environment variable configuration: {env_cfg}")
        merged_config_dict = _deep_merge_dicts(merged_config_dict, env_cfg)

    try:
        final_config = AnnomathConfig(**merged_config_dict)
        logger.debug("Configuration loaded and validated successfully.")
        if final_config.logging.log_file_enabled:
            final_config.paths.log_directory.mkdir(parents=True, exist_ok=True)
        return final_config
    except ValidationError as e:
        logger.error(f"Configuration validation failed:\n{e}")
        logger.warning("Falling back to default configuration due to validation errors.")
        return AnnomathConfig()


def numeric_options(config: AnnomathConfig) -> NumericOptions:
    """Builds the handler options from the [special] and [evaluator] sections."""
    return NumericOptions(
        euler_terms=config.special.euler_terms,
        weierstrass_terms=config.special.weierstrass_terms,
        integral_upper=config.special.integral_upper,
        integral_step=config.special.integral_step,
        default_value=config.evaluator.default_value,
    )
