"""Configuration loader for sealedenv.

This module loads and validates the ``sealedenv`` section of a YAML
configuration file.
"""

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .models import SealedEnvConfigModel

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "SEALEDENV_CONFIG"


def _default_candidates() -> list[Path]:
    return [Path.home() / ".sealedenv" / "config.yaml", Path.cwd() / "sealedenv.yaml"]


def load_sealedenv_config(config_path: Path | None = None) -> SealedEnvConfigModel:
    """Load sealedenv configuration from a YAML file.

    Args:
        config_path: Optional path to the config file.
                    If not provided, looks for:
                    1. SEALEDENV_CONFIG environment variable
                    2. ~/.sealedenv/config.yaml
                    3. ./sealedenv.yaml

    Returns:
        SealedEnvConfigModel with loading settings

    Raises:
        FileNotFoundError: If an explicitly named config file doesn't exist
        ValueError: If config is invalid
    """
    if config_path is None:
        env_path = os.environ.get(CONFIG_ENV_VAR)
        if env_path:
            config_path = Path(env_path)
        else:
            for candidate in _default_candidates():
                if candidate.exists():
                    config_path = candidate
                    break

            if config_path is None:
                logger.info("No sealedenv config file found, using default configuration")
                return SealedEnvConfigModel()

    if not config_path.exists():
        raise FileNotFoundError(f"sealedenv config file not found at {config_path}")

    logger.debug(f"Loading sealedenv config from: {config_path}")

    try:
        with open(config_path) as f:
            raw_config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Failed to parse YAML config file {config_path}: {e}") from e

    if not raw_config:
        logger.info("Empty sealedenv config file, using default configuration")
        return SealedEnvConfigModel()

    if not isinstance(raw_config, dict):
        raise ValueError(f"Invalid sealedenv config in {config_path}: expected a mapping")

    section: Any = raw_config.get("sealedenv", {})
    try:
        config = SealedEnvConfigModel.model_validate(section or {})
    except ValidationError as e:
        raise ValueError(f"Invalid sealedenv config: {e}") from e

    # Relative search paths are relative to the config file
    config.paths = [str((config_path.parent / p) if not Path(p).is_absolute() else Path(p)) for p in config.paths]
    return config
