"""Configuration loading for the command-line interface.

Example config file (stockalert.yaml):

    source:
      base_url: "http://www.boursorama.com"
      ticks_base_url: "https://www.boursorama.com"
      timeout: 10          # Optional, seconds
      max_workers: 4       # Optional, defaults to one worker per page
      headers:
        User-Agent: "Mozilla/5.0"
    logging:
      level: "INFO"
      file: "logs/stockalert.log"  # Optional, console only when absent
    quotes:
      duration: "3M"
      period: "1"
    ticks:
      days: "1"
      strict: false

Every section is optional.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from stockalert.exceptions import ConfigError
from stockalert.types import (
    DURATION_CHOICES,
    DURATIONS,
    PERIOD_CHOICES,
    PERIODS,
    AppConfig,
    QuotesDefaults,
    SourceConfig,
    TicksDefaults,
)

VALID_LOG_LEVELS = frozenset(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"])


def _section(raw_config: dict[str, Any], name: str) -> dict[str, Any]:
    section = raw_config.get(name) or {}
    if not isinstance(section, dict):
        raise ConfigError(f"'{name}' must be a mapping")
    return section


def _parse_source(raw_source: dict[str, Any]) -> SourceConfig:
    defaults = SourceConfig()

    base_url = raw_source.get("base_url", defaults.base_url)
    if not isinstance(base_url, str) or not base_url:
        raise ConfigError("'source.base_url' must be a non-empty string")

    ticks_base_url = raw_source.get("ticks_base_url", defaults.ticks_base_url)
    if not isinstance(ticks_base_url, str) or not ticks_base_url:
        raise ConfigError("'source.ticks_base_url' must be a non-empty string")

    timeout: float | None = raw_source.get("timeout")
    if timeout is not None:
        if isinstance(timeout, bool) or not isinstance(timeout, (int, float)):
            raise ConfigError("'source.timeout' must be a number")
        timeout = float(timeout)
        if timeout <= 0:
            raise ConfigError("'source.timeout' must be positive")

    max_workers: int | None = raw_source.get("max_workers")
    if max_workers is not None:
        if isinstance(max_workers, bool) or not isinstance(max_workers, int) or max_workers <= 0:
            raise ConfigError("'source.max_workers' must be a positive integer")

    headers = raw_source.get("headers") or {}
    if not isinstance(headers, dict):
        raise ConfigError("'source.headers' must be a mapping")

    return SourceConfig(
        base_url=base_url,
        ticks_base_url=ticks_base_url,
        timeout=timeout,
        max_workers=max_workers,
        headers={str(k): str(v) for k, v in headers.items()},
    )


def _parse_quotes(raw_quotes: dict[str, Any]) -> QuotesDefaults:
    duration = str(raw_quotes.get("duration", QuotesDefaults().duration))
    if duration not in DURATIONS:
        raise ConfigError(
            f"Invalid duration '{duration}'. Valid options: {list(DURATION_CHOICES)}"
        )

    period = str(raw_quotes.get("period", QuotesDefaults().period))
    if period not in PERIODS:
        raise ConfigError(
            f"Invalid period '{period}'. Valid options: {list(PERIOD_CHOICES)}"
        )

    return QuotesDefaults(duration=duration, period=period)


def _parse_ticks(raw_ticks: dict[str, Any]) -> TicksDefaults:
    days = str(raw_ticks.get("days", TicksDefaults().days)).strip()
    if not days:
        raise ConfigError("'ticks.days' must not be empty")

    strict = raw_ticks.get("strict", False)
    if not isinstance(strict, bool):
        raise ConfigError("'ticks.strict' must be a boolean")

    return TicksDefaults(days=days, strict=strict)


def load_config(config_path: str | Path | None = None) -> AppConfig:
    """Parse and validate a configuration file.

    :param config_path: Path to YAML configuration file, None for defaults.
    :returns: Validated AppConfig object.
    :raises ConfigError: If file cannot be read or config is invalid.
    """
    if config_path is None:
        return AppConfig()

    config_path = Path(config_path)

    # Read and parse YAML
    try:
        with open(config_path) as f:
            raw_config = yaml.safe_load(f)
    except FileNotFoundError as e:
        raise ConfigError(f"Configuration file not found: {config_path}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in configuration file: {e}") from e

    # An empty file means defaults
    if raw_config is None:
        return AppConfig()
    if not isinstance(raw_config, dict):
        raise ConfigError("Configuration must be a YAML mapping")

    raw_logging = _section(raw_config, "logging")
    log_level = str(raw_logging.get("level", "INFO")).upper()
    if log_level not in VALID_LOG_LEVELS:
        raise ConfigError(
            f"Invalid log level '{log_level}'. "
            f"Valid options: {sorted(VALID_LOG_LEVELS)}"
        )

    log_file = raw_logging.get("file")
    if log_file is not None and (not isinstance(log_file, str) or not log_file):
        raise ConfigError("'logging.file' must be a non-empty string")

    return AppConfig(
        source=_parse_source(_section(raw_config, "source")),
        log_level=log_level,
        log_file=log_file,
        quotes=_parse_quotes(_section(raw_config, "quotes")),
        ticks=_parse_ticks(_section(raw_config, "ticks")),
    )
