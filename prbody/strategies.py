"""Ways to turn the current pull request body into the next one.

Exactly one strategy is active per run. Each is a frozen dataclass with
``next_body(current)``; none of them mutate or re-read anything.
"""

import re
from dataclasses import dataclass
from typing import Union


def html_comment_marker(tag: str) -> str:
    """Return the ``<!-- tag -->`` delimiter for a tag name."""
    return f"<!-- {tag} -->"


@dataclass(frozen=True)
class FullBody:
    """Discard the current body and use ``body`` verbatim."""

    body: str

    @property
    def needs_current_body(self) -> bool:
        return False

    def matches(self, current: str | None) -> bool:
        return True

    def next_body(self, current: str | None) -> str:
        return self.body


@dataclass(frozen=True)
class TagBlock:
    """Rewrite the block delimited by two ``<!-- tag -->`` markers.

    The whole block, markers included, is replaced by ``body`` when set,
    otherwise by ``replace`` wrapped in fresh markers. The match is
    greedy and spans lines, so it runs from the first opening marker to
    the last closing one. Only the first match is replaced; no match
    leaves the body as it is.
    """

    tag: str
    body: str = ""
    replace: str = ""

    @property
    def needs_current_body(self) -> bool:
        return not self.body

    @property
    def pattern(self) -> re.Pattern:
        marker = re.escape(html_comment_marker(self.tag))
        return re.compile(f"{marker}.*{marker}", re.DOTALL)

    @property
    def replacement(self) -> str:
        if self.body:
            return self.body
        marker = html_comment_marker(self.tag)
        return f"{marker}\n{self.replace}\n{marker}"

    def matches(self, current: str | None) -> bool:
        return self.pattern.search(current or "") is not None

    def next_body(self, current: str | None) -> str:
        replacement = self.replacement
        # Callable replacement: backslashes in user text are not group references
        return self.pattern.sub(lambda _m: replacement, current or "", count=1)


@dataclass(frozen=True)
class FindReplace:
    """Replace the first literal occurrence of ``find`` with ``replace``."""

    find: str
    replace: str

    @property
    def needs_current_body(self) -> bool:
        return True

    def matches(self, current: str | None) -> bool:
        return self.find in (current or "")

    def next_body(self, current: str | None) -> str:
        return (current or "").replace(self.find, self.replace, 1)


Strategy = Union[FullBody, TagBlock, FindReplace]
