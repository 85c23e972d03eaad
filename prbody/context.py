"""Trigger context: which repository and, maybe, which pull request.

Built once from the workflow run environment and passed explicitly to
everything that needs it.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict

from prbody.config import GitHubConfig
from prbody.models import PullRequest

logger = logging.getLogger(__name__)


class EventContext(BaseModel):
    """Triggering event as seen by this run.

    ``pull_request`` is set only when the event payload carries one
    (pull_request, pull_request_target and similar events).
    """

    model_config = ConfigDict(frozen=True)

    repository: str = ""
    event_name: str = ""
    pull_request: PullRequest | None = None

    @classmethod
    def from_payload(
        cls,
        payload: Dict[str, Any],
        repository: str = "",
        event_name: str = "",
    ) -> "EventContext":
        pr_data = payload.get("pull_request")
        pull_request = None
        if isinstance(pr_data, dict) and "number" in pr_data:
            pull_request = PullRequest(number=pr_data["number"], body=pr_data.get("body"))
        if not repository:
            repo_data = payload.get("repository") or {}
            repository = repo_data.get("full_name", "") if isinstance(repo_data, dict) else ""
        return cls(repository=repository, event_name=event_name, pull_request=pull_request)

    @classmethod
    def from_github_config(
        cls,
        config: GitHubConfig,
        event_path: str | None = None,
        repository: str | None = None,
    ) -> "EventContext":
        """Load the event payload named by GITHUB_EVENT_PATH (or
        event_path); a missing file means an empty payload."""
        path_str = event_path or config.event_path
        payload: Dict[str, Any] = {}
        if path_str:
            path = Path(path_str)
            if path.is_file():
                payload = json.loads(path.read_text(encoding="utf-8")) or {}
                if not isinstance(payload, dict):
                    raise ValueError(f"{path} does not hold a JSON object")
            else:
                logger.warning("Event payload %s not found, assuming no pull request", path)
        return cls.from_payload(
            payload,
            repository=repository or config.repository,
            event_name=config.event_name,
        )
