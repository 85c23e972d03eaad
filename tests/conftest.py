"""Keep the runner's own workflow environment out of the tests."""

import os

import pytest

_PREFIXES = ("INPUT_", "GITHUB_", "LOGGING_")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in list(os.environ):
        if key.upper().startswith(_PREFIXES):
            monkeypatch.delenv(key, raising=False)
