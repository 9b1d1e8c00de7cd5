"""Tests for command configuration loaders and parameter defaults."""

from datetime import date
from pathlib import Path

import pytest
import yaml

from stockalert.commands.config import load_config
from stockalert.commands.quotes import (build_quotes_request, one_month_before,
                                        parse_start_date)
from stockalert.exceptions import ConfigError, DataValidationError
from stockalert.types import AppConfig, QuotesDefaults


def write_config(tmp_path: Path, config: object) -> Path:
    config_file = tmp_path / "stockalert.yaml"
    config_file.write_text(yaml.dump(config))
    return config_file


class TestLoadConfig:
    """Tests for YAML configuration loading."""

    def test_no_path_gives_defaults(self) -> None:
        """Without a file every default applies."""
        assert load_config(None) == AppConfig()

    def test_empty_file_gives_defaults(self, tmp_path: Path) -> None:
        """An empty file is the same as no file."""
        config_file = tmp_path / "empty.yaml"
        config_file.write_text("")

        assert load_config(config_file) == AppConfig()

    def test_load_valid_config(self, tmp_path: Path) -> None:
        """Load a complete configuration file."""
        config_file = write_config(
            tmp_path,
            {
                "source": {
                    "base_url": "http://mirror.test",
                    "timeout": 10,
                    "max_workers": 4,
                    "headers": {"User-Agent": "stockalert"},
                },
                "logging": {"level": "debug", "file": "logs/stockalert.log"},
                "quotes": {"duration": "1Y", "period": 7},
                "ticks": {"days": 5, "strict": True},
            },
        )

        config = load_config(config_file)

        assert config.source.base_url == "http://mirror.test"
        assert config.source.ticks_base_url == "https://www.boursorama.com"
        assert config.source.timeout == 10.0
        assert config.source.max_workers == 4
        assert config.source.headers == {"User-Agent": "stockalert"}
        assert config.log_level == "DEBUG"
        assert config.log_file == "logs/stockalert.log"
        assert config.quotes.duration == "1Y"
        assert config.quotes.period == "7"
        assert config.ticks.days == "5"
        assert config.ticks.strict is True

    def test_file_not_found(self, tmp_path: Path) -> None:
        """Missing file raises ConfigError."""
        with pytest.raises(ConfigError, match="not found"):
            load_config(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        """Broken YAML raises ConfigError."""
        config_file = tmp_path / "broken.yaml"
        config_file.write_text("source: [unclosed")

        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_config(config_file)

    def test_non_mapping(self, tmp_path: Path) -> None:
        """Top-level list raises ConfigError."""
        with pytest.raises(ConfigError, match="must be a YAML mapping"):
            load_config(write_config(tmp_path, ["a", "b"]))

    def test_section_must_be_mapping(self, tmp_path: Path) -> None:
        """Sections must be mappings."""
        with pytest.raises(ConfigError, match="'source' must be a mapping"):
            load_config(write_config(tmp_path, {"source": "http://x"}))

    def test_invalid_duration(self, tmp_path: Path) -> None:
        """Unknown default duration is rejected."""
        with pytest.raises(ConfigError, match="Invalid duration"):
            load_config(write_config(tmp_path, {"quotes": {"duration": "5Y"}}))

    def test_invalid_period(self, tmp_path: Path) -> None:
        """Unknown default period is rejected."""
        with pytest.raises(ConfigError, match="Invalid period"):
            load_config(write_config(tmp_path, {"quotes": {"period": 2}}))

    def test_strict_must_be_boolean(self, tmp_path: Path) -> None:
        """Non-boolean strict flag is rejected."""
        with pytest.raises(ConfigError, match="must be a boolean"):
            load_config(write_config(tmp_path, {"ticks": {"strict": "yes please"}}))

    def test_invalid_log_level(self, tmp_path: Path) -> None:
        """Unknown log level is rejected."""
        with pytest.raises(ConfigError, match="Invalid log level"):
            load_config(write_config(tmp_path, {"logging": {"level": "LOUD"}}))

    @pytest.mark.parametrize("log_file", ["", 3, ["a.log"]])
    def test_invalid_log_file(self, tmp_path: Path, log_file: object) -> None:
        """Log file must be a non-empty path string."""
        with pytest.raises(ConfigError, match="logging.file"):
            load_config(write_config(tmp_path, {"logging": {"file": log_file}}))

    @pytest.mark.parametrize("timeout", [0, -1, "fast", True])
    def test_invalid_timeout(self, tmp_path: Path, timeout: object) -> None:
        """Timeout must be a positive number."""
        with pytest.raises(ConfigError, match="source.timeout"):
            load_config(write_config(tmp_path, {"source": {"timeout": timeout}}))

    @pytest.mark.parametrize("max_workers", [0, 2.5, "many"])
    def test_invalid_max_workers(self, tmp_path: Path, max_workers: object) -> None:
        """Worker count must be a positive integer."""
        with pytest.raises(ConfigError, match="source.max_workers"):
            load_config(write_config(tmp_path, {"source": {"max_workers": max_workers}}))


class TestStartDate:
    """Tests for start date parsing and defaulting."""

    def test_form_layout(self) -> None:
        """Day/month/year strings parse."""
        assert parse_start_date("05/03/2024") == date(2024, 3, 5)

    def test_iso_layout(self) -> None:
        """ISO dates parse too."""
        assert parse_start_date("2024-03-05") == date(2024, 3, 5)

    @pytest.mark.parametrize("value", ["31/02/2024", "2024/03/05", "yesterday", ""])
    def test_invalid(self, value: str) -> None:
        """Unparseable dates raise DataValidationError."""
        with pytest.raises(DataValidationError, match="Invalid start date"):
            parse_start_date(value)

    @pytest.mark.parametrize(
        ("day", "expected"),
        [
            (date(2024, 3, 15), date(2024, 2, 15)),
            (date(2024, 3, 31), date(2024, 2, 29)),
            (date(2024, 1, 10), date(2023, 12, 10)),
        ],
    )
    def test_one_month_before(self, day: date, expected: date) -> None:
        """Previous month, clamped to its last day."""
        assert one_month_before(day) == expected


class TestBuildQuotesRequest:
    """Tests for quotes request defaulting."""

    def test_all_defaults(self) -> None:
        """Missing parameters take the documented defaults."""
        request = build_quotes_request("XYZ", today=date(2024, 4, 20))

        assert request.start_date == date(2024, 3, 20)
        assert request.duration == "3M"
        assert request.period == "1"

    def test_configured_defaults(self) -> None:
        """Configured defaults replace built-in ones."""
        request = build_quotes_request(
            "XYZ", defaults=QuotesDefaults(duration="1Y", period="7")
        )

        assert (request.duration, request.period) == ("1Y", "7")

    def test_explicit_values_win(self) -> None:
        """Explicit parameters override defaults, unchecked."""
        request = build_quotes_request(
            "XYZ", start_date="01/01/2024", duration="9Y", period="2"
        )

        assert request.start_date == date(2024, 1, 1)
        assert (request.duration, request.period) == ("9Y", "2")

    def test_blank_symbol(self) -> None:
        """A blank symbol is rejected."""
        with pytest.raises(DataValidationError, match="Missing symbol"):
            build_quotes_request("  ")
