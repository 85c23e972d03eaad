"""Pull request model."""

from pydantic import BaseModel, ConfigDict


class PullRequest(BaseModel):
    """Pull request as far as body editing is concerned.

    ``body`` is None when the pull request has no description at all.
    """

    model_config = ConfigDict(frozen=True)

    number: int
    body: str | None = None
