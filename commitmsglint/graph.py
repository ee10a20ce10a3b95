"""Read-only access to the commit graph of a repository.

The resolver and the validator only depend on the ``CommitGraph``
interface. ``GitCommitGraph`` implements it on top of GitPython.
"""

from abc import ABC, abstractmethod
from typing import Dict

from git import Repo
from git.exc import BadName, BadObject, GitCommandError

from .errors import EndpointNotFound, GraphTraversalError
from .models import Commit


class CommitGraph(ABC):
    """Abstract accessor for commits of a repository."""

    @abstractmethod
    def resolve(self, name: str) -> Commit:
        """Resolve a ref name, revision or SHA to a commit.

        Raises:
            EndpointNotFound: If the name does not denote a commit
        """
        pass

    @abstractmethod
    def get(self, hexsha: str) -> Commit:
        """Fetch a commit by its full hash.

        Raises:
            GraphTraversalError: If the commit cannot be read
        """
        pass


class GitCommitGraph(CommitGraph):
    """Commit graph backed by a GitPython repository.

    Attributes:
        repo (Repo): The repository to read from; never modified
    """

    def __init__(self, repo: Repo):
        self.repo = repo
        self._cache: Dict[str, Commit] = {}

    def resolve(self, name: str) -> Commit:
        try:
            # Repo.commit accepts branches, tags, HEAD~n and raw SHAs,
            # peeling annotated tags to the tagged commit
            git_commit = self.repo.commit(name)
        except (BadName, BadObject, ValueError, GitCommandError) as e:
            raise EndpointNotFound(name) from e
        return self._convert(git_commit)

    def get(self, hexsha: str) -> Commit:
        if hexsha in self._cache:
            return self._cache[hexsha]
        try:
            git_commit = self.repo.commit(hexsha)
        except (BadName, BadObject, ValueError, GitCommandError) as e:
            raise GraphTraversalError(f"failed to read commit {hexsha}: {e}") from e
        return self._convert(git_commit)

    def _convert(self, git_commit) -> Commit:
        hexsha = git_commit.hexsha
        if hexsha in self._cache:
            return self._cache[hexsha]

        try:
            message = git_commit.message
            if isinstance(message, bytes):
                message = message.decode('utf-8', errors='replace')
            commit = Commit(
                hexsha=hexsha,
                parents=tuple(parent.hexsha for parent in git_commit.parents),
                author_name=git_commit.author.name or "",
                author_email=git_commit.author.email or "",
                message=message,
                committed_date=int(git_commit.committed_date),
            )
        except (ValueError, OSError) as e:
            raise GraphTraversalError(f"failed to read commit {hexsha}: {e}") from e

        self._cache[hexsha] = commit
        return commit
