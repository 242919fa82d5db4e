"""
Logging configuration.

Handlers and formatters come from the packaged `carelocator/config/logging.yaml`;
the level comes from settings (`app.log_level`, overridable with
`CARELOCATOR_LOG_LEVEL`) and is applied to the root logger and every handler.
The CLI and the API app call `configure_logging()` once at startup.
"""

from __future__ import annotations

import logging.config

from carelocator.config.settings import get_logging_config, get_settings


def configure_logging() -> None:
    """Configure the Python logging system based on packaged YAML config + settings."""
    settings = get_settings()
    # Copy: dictConfig mutates its input and the loaded config is cached.
    config = dict(get_logging_config())
    config["root"] = dict(config.get("root", {}))
    config["handlers"] = {name: dict(h) for name, h in config.get("handlers", {}).items()}

    level = settings.app.log_level.upper()
    config["root"]["level"] = level
    for handler in config["handlers"].values():
        if "level" in handler:
            handler["level"] = level

    logging.config.dictConfig(config)
