"""Errors that end an invocation.

Configuration and empty-body problems are returned from the resolver
pipeline as instances of these classes; remote failures are raised by
the adapter (see prbody.adapters.GitPlatformError).
"""

from prbody.adapters.base import GitPlatformError

USAGE_HINT = "Please check your setup: see the Usage section of README.md."

# Fetch/update failures from the hosting platform, never wrapped
RemoteError = GitPlatformError


class PrBodyError(Exception):
    """Base for errors carrying a remediation hint."""

    def __init__(self, message: str, hint: str = USAGE_HINT) -> None:
        self.message = message
        self.hint = hint
        super().__init__(f"{message}\n{hint}")


class ConfigError(PrBodyError):
    """Inputs are missing, conflicting or point at no pull request."""


class EmptyBodyError(PrBodyError):
    """Neither the inputs nor the pull request provide a body to work on."""
