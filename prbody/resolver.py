"""Decide which pull request to edit and what its new body is.

Pipeline: validate inputs -> resolve pull request -> compute next body
-> update. Validation and computation return either a value or an error
instance; ``apply`` stops at the first error and never calls the update
with a partial result. Platform errors from the adapter are raised
unchanged.
"""

import logging
from dataclasses import dataclass

from prbody.adapters.base import GitPlatformAdapter
from prbody.config import ActionInputs
from prbody.context import EventContext
from prbody.errors import ConfigError, EmptyBodyError
from prbody.models import PullRequest
from prbody.strategies import FindReplace, FullBody, Strategy, TagBlock

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Applied:
    """Successful run.

    ``pull_request`` is the pull request as resolved, ``body`` the body
    computed for it. ``updated`` is what the platform returned for the
    update, or None on a dry run.
    """

    pull_request: PullRequest
    body: str
    updated: PullRequest | None = None


def _build_strategy(inputs: ActionInputs) -> Strategy | ConfigError:
    body, find, replace = inputs.body, inputs.find, inputs.replace

    if not body and not (find and replace):
        return ConfigError("You must either set `body` input or both `find` and `replace` inputs.")
    if body and find and replace:
        return ConfigError("You can't use `body` input while setting both `find` and `replace` inputs.")
    if inputs.is_html_comment_tag:
        if not find:
            return ConfigError("You can't set `isHtmlCommentTag` input to `true` without also setting `find` input.")
        return TagBlock(tag=find, body=body, replace=replace)
    if body and (find or replace):
        return ConfigError(
            "`body` can only be combined with `find` when `isHtmlCommentTag` input is `true`; "
            "unset `find` and `replace` to replace the whole body."
        )
    if body:
        return FullBody(body=body)
    return FindReplace(find=find, replace=replace)


def validate_configuration(context: EventContext, inputs: ActionInputs) -> Strategy | ConfigError:
    """Check inputs against each other and the trigger context.

    Returns the strategy to use, or the first ConfigError found.
    """
    if not inputs.github_token:
        return ConfigError("You forgot to set `githubToken` input.")

    strategy = _build_strategy(inputs)
    if isinstance(strategy, ConfigError):
        return strategy

    if context.pull_request is None and not inputs.pr_number:
        return ConfigError(
            "You must either trigger this action from a pull request event, or set the `prNumber` input."
        )
    if context.pull_request is not None and inputs.pr_number:
        return ConfigError("You can't use `prNumber` input while in the context of a pull request event.")
    if inputs.pr_number:
        try:
            int(inputs.pr_number, 10)
        except ValueError:
            return ConfigError(f"`prNumber` input must be a pull request number, got {inputs.pr_number!r}.")
    if not context.repository:
        return ConfigError("Cannot tell which repository the pull request belongs to; set GITHUB_REPOSITORY.")

    return strategy


def resolve_pull_request(
    context: EventContext,
    pr_number: str,
    adapter: GitPlatformAdapter,
) -> PullRequest:
    """Use the pull request from the event if there is one, else fetch it.

    Raises GitPlatformError if the fetch fails.
    """
    if context.pull_request is not None:
        logger.debug(
            "Using pull request #%s from %s event payload",
            context.pull_request.number,
            context.event_name or "triggering",
        )
        return context.pull_request
    number = int(pr_number, 10)
    logger.info(
        "Fetching pull request #%s from %s (event: %s)",
        number,
        context.repository,
        context.event_name or "unknown",
    )
    return adapter.get_pr(context.repository, number)


def compute_next_body(pull_request: PullRequest, strategy: Strategy) -> str | EmptyBodyError:
    """Return the new body, or EmptyBodyError if there is nothing to
    search in and nothing to put in its place."""
    if strategy.needs_current_body and not pull_request.body:
        return EmptyBodyError("Pull request body is empty. There is nothing to `find` and `replace`.")

    if not strategy.matches(pull_request.body):
        logger.info("No match in pull request #%s body, leaving it unchanged", pull_request.number)
    return strategy.next_body(pull_request.body)


def apply(
    context: EventContext,
    inputs: ActionInputs,
    adapter: GitPlatformAdapter,
    dry_run: bool = False,
) -> Applied | ConfigError | EmptyBodyError:
    """Run the whole pipeline once.

    Returns Applied on success, otherwise the first ConfigError or
    EmptyBodyError. GitPlatformError from fetch or update propagates.
    """
    strategy = validate_configuration(context, inputs)
    if isinstance(strategy, ConfigError):
        return strategy
    logger.debug("Using %s strategy", type(strategy).__name__)

    pull_request = resolve_pull_request(context, inputs.pr_number, adapter)

    next_body = compute_next_body(pull_request, strategy)
    if isinstance(next_body, EmptyBodyError):
        return next_body

    if dry_run:
        logger.info("Dry run: not updating pull request #%s", pull_request.number)
        return Applied(pull_request=pull_request, body=next_body)

    updated = adapter.update_pr_body(context.repository, pull_request.number, next_body)
    logger.info("Updated body of pull request #%s", updated.number)
    return Applied(pull_request=pull_request, body=next_body, updated=updated)
