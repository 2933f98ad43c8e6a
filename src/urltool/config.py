"""Configuration for urltool: the modifiers of one argument group, and logging."""

import logging
import os
import sys
from dataclasses import dataclass, field

_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


@dataclass(frozen=True)
class ModifierConfig:
    """Modifiers applied to every URL of one argument group.

    For the string options None means the flag was not given; an empty
    string is a real value (``-f ''`` clears the fragment).
    """
    disable_hacks: bool = False
    scheme: str | None = None
    opaque: str | None = None
    username: str | None = None
    password: str | None = None
    strip_user: bool = False
    host: str | None = None
    port: str | None = None
    path: str | None = None
    join_path: bool = False
    force_query: bool = False
    strip_query: bool = False
    query: dict[str, list[str]] = field(default_factory=dict)
    fragment: str | None = None
    relative: str | None = None


def split_query_arg(arg: str) -> tuple[str, str]:
    """Split a -q argument into key and value. "K" alone means an empty value."""
    key, _, value = arg.partition("=")
    return key, value


def collect_query_args(pairs: list[tuple[str, str]] | None) -> dict[str, list[str]]:
    """Group repeated -q pairs by key, keeping the order values were given in."""
    query: dict[str, list[str]] = {}
    for key, value in pairs or ():
        query.setdefault(key, []).append(value)
    return query


@dataclass(frozen=True)
class LoggingConfiguration:
    """Logging configuration settings."""
    level: str = "WARNING"
    format: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logging_config_from_env() -> LoggingConfiguration:
    """Load logging configuration from URLTOOL_LOG_LEVEL and URLTOOL_LOG_FORMAT."""
    default = LoggingConfiguration()
    level = os.getenv("URLTOOL_LOG_LEVEL", default.level).upper()
    if level not in _LEVELS:
        level = default.level
    return LoggingConfiguration(
        level=level,
        format=os.getenv("URLTOOL_LOG_FORMAT", default.format),
    )


def configure_logging(config: LoggingConfiguration) -> None:
    # Stdout is reserved for the resulting URLs.
    logging.basicConfig(level=config.level, format=config.format, stream=sys.stderr)
