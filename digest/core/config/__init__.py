"""Config module — loading and managing configuration."""

from digest.core.config.loader import (
    get_config,
    get_sources_config,
    get_worker_config,
    reload_config,
)

__all__ = [
    "get_config",
    "get_sources_config",
    "get_worker_config",
    "reload_config",
]
