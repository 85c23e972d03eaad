"""Abstract base for Git platform adapters."""

from abc import ABC, abstractmethod

from prbody.models import PullRequest


class GitPlatformError(Exception):
    """Raised when a Git platform API call fails."""

    pass


class GitPlatformAdapter(ABC):
    """What the body resolver needs from a Git hosting platform."""

    @abstractmethod
    def get_pr(self, repo: str, pr_number: int) -> PullRequest:
        """Fetch PR by number."""
        ...

    @abstractmethod
    def update_pr_body(self, repo: str, pr_number: int, body: str) -> PullRequest:
        """Replace the PR description; returns the PR as the platform
        reports it after the update."""
        ...
