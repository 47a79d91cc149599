"""Store configuration schema and loader.

Configuration is loaded from the YAML file named by the APPLICANT_DATA_CONFIG
environment variable. When no file is configured or the file is absent,
defaults apply.
"""

import logging
import os
import re
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "APPLICANT_DATA_CONFIG"

# Language tag: "en", "en-US", "zh-Hant-TW"
_LOCALE_RE = re.compile(r"^[a-zA-Z]{2,3}(-[a-zA-Z0-9]{2,8})*$")


def validate_locale(value: str) -> str:
    """Check that value looks like a BCP 47 language tag."""
    if not _LOCALE_RE.match(value):
        raise ValueError(f"Invalid locale '{value}'")
    return value


class StoreConfig(BaseModel):
    """Settings for applicant data documents.

    Attributes:
        default_locale: Locale reported when an applicant has not chosen one.
        anonymous_applicant_name: Display name used when no first name is stored.
    """

    default_locale: str = Field(
        default="en-US",
        description="Locale used when the applicant has no preferred locale",
    )
    anonymous_applicant_name: str = Field(
        default="<Anonymous Applicant>",
        description="Display name for applicants without a stored name",
        min_length=1,
    )

    @field_validator("default_locale")
    @classmethod
    def validate_default_locale(cls, v: str) -> str:
        return validate_locale(v)


def load_store_config(config_path: Optional[Path] = None) -> StoreConfig:
    """Load store configuration from a YAML file.

    Args:
        config_path: Optional explicit path. If not provided, the
            APPLICANT_DATA_CONFIG environment variable is consulted.

    Returns:
        StoreConfig from the file, or defaults if no file is available.

    Raises:
        ValueError: If the file exists but contains invalid configuration.
    """
    if config_path is None:
        env_path = os.getenv(CONFIG_ENV_VAR)
        if not env_path:
            return StoreConfig()
        config_path = Path(env_path)

    config_path = Path(config_path)
    if not config_path.exists():
        logger.debug(f"No store config found at {config_path}, using defaults")
        return StoreConfig()

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in store config {config_path}: {e}") from e

    if data is None:
        logger.warning(f"Empty store config at {config_path}")
        return StoreConfig()

    try:
        config = StoreConfig.model_validate(data)
    except Exception as e:
        raise ValueError(f"Failed to load store config from {config_path}: {e}") from e

    logger.debug(f"Loaded store config from {config_path}")
    return config


# Cached config (loaded once per process)
_cached_config: Optional[StoreConfig] = None


def get_store_config(force_reload: bool = False) -> StoreConfig:
    """Get the current store configuration (cached).

    Args:
        force_reload: If True, reload from disk even if cached.
    """
    global _cached_config

    if force_reload or _cached_config is None:
        _cached_config = load_store_config()

    return _cached_config


def set_store_config(config: StoreConfig) -> None:
    """Install config as the cached store configuration."""
    global _cached_config
    _cached_config = config


def reset_store_config_cache() -> None:
    """Reset the config cache so the next lookup reloads from disk."""
    global _cached_config
    _cached_config = None
