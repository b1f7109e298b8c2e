"""I/O utilities (configuration and the channel catalog)."""

from .channels import CHANNEL_CATALOG, ChannelSpec
from .settings import (
    DEFAULT_SETTINGS_PATH,
    ConsoleConfig,
    ConsoleConfigError,
    ConsoleOptions,
    find_project_root,
    load_console_config,
    load_settings,
    parse_console_config,
)

__all__ = [
    "CHANNEL_CATALOG",
    "DEFAULT_SETTINGS_PATH",
    "ChannelSpec",
    "ConsoleConfig",
    "ConsoleConfigError",
    "ConsoleOptions",
    "find_project_root",
    "load_console_config",
    "load_settings",
    "parse_console_config",
]
