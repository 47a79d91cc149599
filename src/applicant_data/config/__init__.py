"""Store configuration management."""

from applicant_data.config.store_config import (
    StoreConfig,
    load_store_config,
    get_store_config,
    set_store_config,
    reset_store_config_cache,
)

__all__ = [
    "StoreConfig",
    "load_store_config",
    "get_store_config",
    "set_store_config",
    "reset_store_config_cache",
]
