"""Commit skip filters using Chain of Responsibility pattern."""
import re
from abc import ABC, abstractmethod
from typing import Optional, Sequence

from .models import Commit


class CommitFilter(ABC):
    """Abstract base class for skip filters."""

    def __init__(self, next_filter: Optional['CommitFilter'] = None):
        self.next_filter = next_filter

    def handle(self, commit: Commit) -> Optional[str]:
        """Return the reason to skip the commit, or None to check it."""
        reason = self.skip_reason(commit)
        if reason or not self.next_filter:
            return reason
        return self.next_filter.handle(commit)

    @abstractmethod
    def skip_reason(self, commit: Commit) -> Optional[str]:
        """Decide whether this filter skips the commit."""
        pass


class MergeCommitFilter(CommitFilter):
    """Skips commits with more than one parent."""

    def skip_reason(self, commit: Commit) -> Optional[str]:
        if commit.is_merge:
            return "merge commit"
        return None


class AuthorFilter(CommitFilter):
    """Skips commits whose author name or email matches a pattern."""

    def __init__(
        self,
        patterns: Sequence["re.Pattern"],
        next_filter: Optional[CommitFilter] = None,
    ):
        super().__init__(next_filter)
        self.patterns = tuple(patterns)

    def skip_reason(self, commit: Commit) -> Optional[str]:
        for pattern in self.patterns:
            if pattern.search(commit.author_name) or pattern.search(commit.author_email):
                return f"author matches '{pattern.pattern}'"
        return None


def create_filter_chain(
    skip_merge_commits: bool = True, skip_authors: Sequence["re.Pattern"] = ()
) -> Optional[CommitFilter]:
    """Create the skip filter chain for the given settings.

    Returns None when no filter applies.
    """
    chain: Optional[CommitFilter] = None
    if skip_authors:
        chain = AuthorFilter(skip_authors, chain)
    if skip_merge_commits:
        chain = MergeCommitFilter(chain)
    return chain
