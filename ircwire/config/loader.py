"""Configuration loading utilities."""

from __future__ import annotations

import logging
import os

from pydantic import ValidationError

from ..constants import CONFIG_FILE_ENV, DEFAULT_CONFIG_FILE
from ..errors import ConfigError
from ..logs.logger import logger
from .model import ClientConfig
from .repository import ConfigRepository


def resolve_config_path(path: str | None = None) -> str:
    return path or os.environ.get(CONFIG_FILE_ENV, DEFAULT_CONFIG_FILE)


def load_config(path: str | None = None) -> ClientConfig:
    """Load and validate the client configuration.

    Args:
        path: Configuration file; defaults to ``$IRCWIRE_CONF_FILE`` or
            ``ircwire.conf``.

    Returns:
        The validated ClientConfig.

    Raises:
        ConfigError: The file is missing, unreadable or invalid.
    """
    config_file = resolve_config_path(path)
    repo = ConfigRepository(config_file)
    try:
        raw = repo.load_raw()
    except (OSError, ValueError) as e:
        raise ConfigError(
            f"Cannot read configuration file {config_file}: {e}",
            data={"path": config_file},
        ) from e
    if not raw:
        raise ConfigError(
            f"No configuration found in {config_file}", data={"path": config_file}
        )
    try:
        config = ClientConfig.from_dict(raw)
    except ValidationError as e:
        logger.log_event(
            "config",
            "invalid",
            level=logging.ERROR,
            path=config_file,
            errors=e.error_count(),
        )
        raise ConfigError(
            f"Invalid configuration in {config_file}: {e}", data={"path": config_file}
        ) from e
    logger.log_event(
        "config",
        "loaded",
        nick=config.nick,
        path=config_file,
        server=config.host,
        port=config.port,
    )
    return config
