"""Configuration package exports."""

from .loader import load_config, resolve_config_path  # noqa: F401
from .model import ClientConfig, normalize_channels  # noqa: F401
from .repository import ConfigRepository  # noqa: F401

__all__ = [
    "ClientConfig",
    "ConfigRepository",
    "load_config",
    "normalize_channels",
    "resolve_config_path",
]
