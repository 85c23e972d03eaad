"""Logging from config and env.

Levels (inclusive):
- ERROR: critical errors only
- WARNING: non-critical issues and ERROR
- INFO: service messages, WARNING, and ERROR
- DEBUG: debugging and all levels above

Configure via prbody.yaml (logging.level, logging.format) or env
(LOGGING_LEVEL, LOGGING_FORMAT). Output goes to stderr; stdout is kept
for workflow commands and --dry-run output.
"""

import logging
from typing import Iterable

from prbody.config import LoggingConfig

LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}

DEFAULT_LEVEL = "INFO"
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
MASK = "***"


def _resolve_level(level: str) -> int:
    """Map level name to logging constant; unknown names give INFO."""
    return LEVELS.get(level.upper().strip(), logging.INFO)


def mask_secrets(text: str, secrets: Iterable[str]) -> str:
    """Replace every secret value in text with '***'."""
    for secret in secrets:
        if secret:
            text = text.replace(secret, MASK)
    return text


class MaskingFormatter(logging.Formatter):
    """Formatter that masks secrets (the API token) in log output."""

    def __init__(self, fmt: str, secrets: Iterable[str], **kwargs) -> None:
        super().__init__(fmt, **kwargs)
        self.secrets = {s for s in secrets if s}

    def format(self, record: logging.LogRecord) -> str:
        result = super().format(record)
        if self.secrets:
            return mask_secrets(result, self.secrets)
        return result


class PrBodyLogging:
    """Configures root logger from LoggingConfig (YAML + env LOGGING_*)."""

    def __init__(self, config: LoggingConfig, secrets: Iterable[str] = ()) -> None:
        self._level = _resolve_level(config.level)
        self._format = config.format or DEFAULT_FORMAT
        self._secrets = [s for s in secrets if s]

    def setup(self) -> None:
        """Apply level, format and secret masking to the root logger."""
        logging.basicConfig(
            level=self._level,
            format=self._format,
            force=True,
        )
        formatter = MaskingFormatter(self._format, self._secrets)
        for handler in logging.root.handlers:
            handler.setFormatter(formatter)
