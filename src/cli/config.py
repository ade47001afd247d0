"""Configuration loading and management."""

import os
from pathlib import Path
from typing import Optional

import yaml

from .config_models import IntelConfig

ENV_CONFIG_PATH = "ROUTINE_INTEL_CONFIG"


def find_config() -> Optional[Path]:
    """Find config file: $ROUTINE_INTEL_CONFIG, then standard locations."""
    explicit = os.getenv(ENV_CONFIG_PATH)
    if explicit:
        return Path(explicit).expanduser()
    locations = [
        Path.cwd() / "config.yaml",
        Path.home() / ".routine-intel" / "config.yaml",
        Path.home() / "routine-intel" / "config.yaml",
    ]
    for loc in locations:
        if loc.exists():
            return loc
    return None


def load_config_model(config_path: Optional[Path] = None) -> IntelConfig:
    """Load configuration as Pydantic model with validation."""
    base_config = {}

    path = config_path or find_config()
    if path and path.exists():
        try:
            with open(path) as f:
                base_config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in config file: {e}")

    _apply_env_overrides(base_config)

    try:
        return IntelConfig.from_dict(base_config)
    except Exception as e:
        raise ValueError(f"Config validation failed: {e}")


def _apply_env_overrides(config: dict) -> None:
    """Env vars win over the file for deploy-time settings."""
    if os.getenv("ROUTINE_INTEL_DB"):
        config.setdefault("store", {})["db_path"] = os.environ["ROUTINE_INTEL_DB"]
    if os.getenv("ROUTINE_INTEL_TZ"):
        config["timezone"] = os.environ["ROUTINE_INTEL_TZ"]
    if os.getenv("LLM_PROVIDER"):
        config.setdefault("llm", {})["provider"] = os.environ["LLM_PROVIDER"]
    if os.getenv("FRONTEND_ORIGIN"):
        config.setdefault("cors", {})["frontend_origin"] = os.environ["FRONTEND_ORIGIN"]
