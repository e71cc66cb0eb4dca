"""Configuration models and loader for sealedenv."""

from .loader import CONFIG_ENV_VAR, load_sealedenv_config
from .models import KeysConfigModel, SealedEnvConfigModel

__all__ = ["CONFIG_ENV_VAR", "KeysConfigModel", "SealedEnvConfigModel", "load_sealedenv_config"]
