"""prbody entry point.

Runs once per workflow step: reads step inputs and the event payload,
edits the pull request body, and reports failure as a GitHub Actions
``::error::`` command with exit code 1.

Usage: prbody [--config prbody.yaml] [--dry-run] [--check] [input overrides]
"""

import argparse
import logging
import sys
from pathlib import Path

import requests
import yaml

from prbody.adapters import GitHubAdapter, GitPlatformError
from prbody.config import load_config, load_inputs
from prbody.context import EventContext
from prbody.errors import PrBodyError
from prbody.logging import PrBodyLogging
from prbody.resolver import apply, validate_configuration

logger = logging.getLogger("prbody")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI flags; input flags override INPUT_* variables."""
    parser = argparse.ArgumentParser(
        prog="prbody",
        description="Find and replace text in a GitHub pull request body",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=Path("prbody.yaml"),
        help="Path to YAML config file",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Only load and validate inputs, then exit",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the new body instead of updating the pull request",
    )
    parser.add_argument("--token", dest="github_token", help="GitHub token (githubToken)")
    parser.add_argument("--pr-number", dest="pr_number", help="Pull request number (prNumber)")
    parser.add_argument("--body", help="Full replacement body (body)")
    parser.add_argument("--find", help="Text to find, or tag name (find)")
    parser.add_argument("--replace", help="Replacement text (replace)")
    parser.add_argument(
        "--html-comment-tag",
        dest="is_html_comment_tag",
        action="store_true",
        default=None,
        help="Replace the block between two <!-- find --> markers (isHtmlCommentTag)",
    )
    parser.add_argument("--repo", help="owner/repo, overrides GITHUB_REPOSITORY")
    parser.add_argument("--event-path", help="Event payload JSON, overrides GITHUB_EVENT_PATH")
    return parser.parse_args(argv)


def format_error_command(message: str) -> str:
    """Encode message as a single-line ``::error::`` workflow command."""
    escaped = message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")
    return f"::error::{escaped}"


def _fail(message: str) -> int:
    print(format_error_command(message))
    return 1


def main(argv: list[str] | None = None) -> int:
    """Entry point: one pull request body edit."""
    args = parse_args(argv)

    try:
        config = load_config(args.config)
    except (yaml.YAMLError, ValueError) as e:
        return _fail(f"Invalid config file {args.config}: {e}")

    try:
        inputs = load_inputs(
            github_token=args.github_token,
            pr_number=args.pr_number,
            body=args.body,
            find=args.find,
            replace=args.replace,
            is_html_comment_tag=args.is_html_comment_tag,
        )
    except ValueError as e:
        return _fail(f"Invalid inputs: {e}")

    PrBodyLogging(config.logging, secrets=[inputs.github_token]).setup()

    try:
        context = EventContext.from_github_config(
            config.github,
            event_path=args.event_path,
            repository=args.repo,
        )
    except (OSError, ValueError) as e:
        logger.error("Could not read event payload: %s", e)
        return _fail(f"Could not read event payload: {e}")

    if args.check:
        result = validate_configuration(context, inputs)
        if isinstance(result, PrBodyError):
            logger.error("%s", result.message)
            return _fail(str(result))
        print("Inputs OK:", type(result).__name__, context.repository)
        return 0

    adapter = GitHubAdapter(token=inputs.github_token, api_url=config.github.api_url)
    try:
        outcome = apply(context, inputs, adapter, dry_run=args.dry_run)
    except (GitPlatformError, requests.RequestException) as e:
        logger.error("GitHub API call failed: %s", e)
        return _fail(str(e))
    except Exception as e:
        logger.exception("Fatal error: %s", e)
        return _fail(str(e))

    if isinstance(outcome, PrBodyError):
        logger.error("%s", outcome.message)
        return _fail(str(outcome))

    if args.dry_run:
        print(outcome.body)
    return 0


if __name__ == "__main__":
    sys.exit(main())
