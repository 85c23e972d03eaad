"""Tests for prbody.logging (level/format from config, secret masking)."""

import logging

from prbody.config import LoggingConfig
from prbody.logging import (
    DEFAULT_FORMAT,
    DEFAULT_LEVEL,
    LEVELS,
    MaskingFormatter,
    PrBodyLogging,
    _resolve_level,
    mask_secrets,
)


def _record(msg: str, *args: object) -> logging.LogRecord:
    return logging.LogRecord("prbody.test", logging.INFO, __file__, 1, msg, args, None)


class TestResolveLevel:
    """_resolve_level maps level names to logging constants."""

    def test_known_levels(self) -> None:
        for name, value in LEVELS.items():
            assert _resolve_level(name) == value

    def test_case_and_whitespace_normalized(self) -> None:
        assert _resolve_level(" debug ") == logging.DEBUG
        assert _resolve_level("\tError") == logging.ERROR

    def test_unknown_level_returns_info(self) -> None:
        assert _resolve_level("TRACE") == logging.INFO
        assert _resolve_level("") == logging.INFO
        assert DEFAULT_LEVEL == "INFO"


class TestMasking:
    """Token values never reach formatted output."""

    def test_mask_secrets_replaces_all_occurrences(self) -> None:
        assert mask_secrets("a ghp_x b ghp_x", ["ghp_x"]) == "a *** b ***"

    def test_mask_secrets_ignores_empty_secret(self) -> None:
        assert mask_secrets("abc", [""]) == "abc"

    def test_formatter_masks_arguments(self) -> None:
        formatter = MaskingFormatter("%(message)s", {"ghp_secret"})
        assert formatter.format(_record("token is %s", "ghp_secret")) == "token is ***"

    def test_formatter_without_secrets_is_plain(self) -> None:
        formatter = MaskingFormatter("%(levelname)s %(message)s", [])
        assert formatter.format(_record("hello")) == "INFO hello"


class TestPrBodyLogging:
    """PrBodyLogging applies LoggingConfig to the root logger."""

    def test_setup_sets_root_level_from_config(self) -> None:
        for level_name, expected_num in LEVELS.items():
            PrBodyLogging(LoggingConfig(level=level_name, format="%(message)s")).setup()
            assert logging.root.level == expected_num

    def test_setup_applies_format(self) -> None:
        custom = "%(levelname)s || %(message)s"
        PrBodyLogging(LoggingConfig(level="INFO", format=custom)).setup()
        handler = logging.root.handlers[0]
        assert isinstance(handler.formatter, MaskingFormatter)
        assert handler.formatter._fmt == custom

    def test_empty_format_uses_default(self) -> None:
        PrBodyLogging(LoggingConfig(level="INFO", format="")).setup()
        assert logging.root.handlers[0].formatter._fmt == DEFAULT_FORMAT

    def test_setup_masks_given_secrets(self) -> None:
        PrBodyLogging(LoggingConfig(level="INFO", format="%(message)s"), secrets=["tok123", ""]).setup()
        formatter = logging.root.handlers[0].formatter
        assert formatter.secrets == {"tok123"}
        assert formatter.format(_record("Authorization: token tok123")) == "Authorization: token ***"
