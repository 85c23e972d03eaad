"""Configuration loading from YAML and environment.

Step inputs come from the ``INPUT_*`` variables GitHub Actions sets for
each ``with:`` entry. The token is only ever read from there (or from a
CLI flag); never put real tokens in config files committed to the repo.
"""

import os
from pathlib import Path
from typing import Any, Mapping

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# Step input name -> ActionInputs field. Actions exposes each as INPUT_<NAME upper-cased>.
INPUT_NAMES = {
    "githubToken": "github_token",
    "prNumber": "pr_number",
    "body": "body",
    "find": "find",
    "isHtmlCommentTag": "is_html_comment_tag",
    "replace": "replace",
}


class ActionInputs(BaseModel):
    """The six step inputs, one invocation's worth.

    Empty string means "not set" for every text input.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    github_token: str = Field(default="", description="Token for the API (githubToken)")
    pr_number: str = Field(default="", description="Pull request number; only outside pull_request events")
    body: str = Field(default="", description="Full replacement body")
    find: str = Field(default="", description="Text to find, or tag name")
    is_html_comment_tag: bool = Field(
        default=False,
        description="Replace the block between two <!-- find --> markers",
    )
    replace: str = Field(default="", description="Replacement text")

    @field_validator("github_token", "pr_number", "body", "find", "replace", mode="before")
    @classmethod
    def _strip(cls, value: Any) -> Any:
        # Actions trims inputs before handing them over
        if value is None:
            return ""
        if isinstance(value, str):
            return value.strip()
        return value

    @field_validator("is_html_comment_tag", mode="before")
    @classmethod
    def _parse_flag(cls, value: Any) -> bool:
        # Only the literal "true" enables the flag; "yes", "1" and typos do not
        if isinstance(value, str):
            return value.strip().lower() == "true"
        return bool(value)


class GitHubConfig(BaseSettings):
    """GitHub API and workflow run settings."""

    model_config = SettingsConfigDict(env_prefix="GITHUB_", extra="ignore")

    api_url: str = Field(default="https://api.github.com", description="API base URL (Enterprise aware)")
    repository: str = Field(default="", description="owner/repo of the workflow run")
    event_name: str = Field(default="", description="Name of the triggering event")
    event_path: str = Field(default="", description="Path to the event payload JSON")


class LoggingConfig(BaseSettings):
    """Logging settings."""

    model_config = SettingsConfigDict(env_prefix="LOGGING_", extra="ignore")

    level: str = Field(default="INFO", description="Log level")
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log format",
    )


class AppConfig(BaseSettings):
    """Root application config from YAML + env."""

    model_config = SettingsConfigDict(extra="ignore")

    github: GitHubConfig = Field(default_factory=GitHubConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def _substitute_env(value: Any, env: Mapping[str, str]) -> Any:
    """Replace ${VAR} and $VAR in strings with values from env."""
    if isinstance(value, str):
        if value.startswith("${") and value.endswith("}"):
            key = value[2:-1].strip()
            return env.get(key, value)
        if value.startswith("$") and not value.startswith("${"):
            key = value[1:].strip()
            return env.get(key, value)
        return value
    if isinstance(value, dict):
        return {k: _substitute_env(v, env) for k, v in value.items()}
    if isinstance(value, list):
        return [_substitute_env(v, env) for v in value]
    return value


def load_config(config_path: Path | None = None) -> AppConfig:
    """Load config from YAML file and environment.

    A missing file is not an error: defaults and GITHUB_* / LOGGING_*
    variables are used.
    """
    path = config_path or Path("prbody.yaml")
    if not path.is_file():
        return AppConfig()

    raw = yaml.safe_load(path.read_text()) or {}
    raw = _substitute_env(raw, dict(os.environ))
    if not isinstance(raw, dict):
        raise ValueError(f"{path} must hold a mapping")

    sections = {}
    for name in ("github", "logging"):
        section = raw.get(name) or {}
        if not isinstance(section, dict):
            raise ValueError(f"{path}: `{name}` must be a mapping")
        sections[name] = section

    return AppConfig(
        github=GitHubConfig(**sections["github"]),
        logging=LoggingConfig(**sections["logging"]),
    )


def input_env_var(name: str) -> str:
    """Environment variable Actions uses for a step input."""
    return f"INPUT_{name.replace(' ', '_').upper()}"


def load_inputs(env: Mapping[str, str] | None = None, **overrides: Any) -> ActionInputs:
    """Read step inputs from INPUT_* variables, then apply non-None
    overrides (CLI flags, keyed by field name) on top."""
    env = os.environ if env is None else env
    values: dict[str, Any] = {}
    for name, field in INPUT_NAMES.items():
        var = input_env_var(name)
        if var in env:
            values[field] = env[var]
    values.update({k: v for k, v in overrides.items() if v is not None})
    return ActionInputs(**values)
