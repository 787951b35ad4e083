"""WAR numbering configuration loading."""

from warnumbering.config.settings import ConfigError, WarNumberingConfig, load_config

__all__ = [
    "ConfigError",
    "WarNumberingConfig",
    "load_config",
]
