"""Exception types raised by commit-msg-lint."""
from typing import List, Optional


class CommitLintError(Exception):
    """Base class for all commit-msg-lint errors."""


class ConfigError(CommitLintError):
    """The configuration file is missing, unparseable or invalid."""


class EndpointNotFound(CommitLintError):
    """A ref name or SHA could not be resolved to a commit."""

    def __init__(self, identifier: str, hint: Optional[str] = None):
        self.identifier = identifier
        self.hint = hint
        message = f"failed to resolve '{identifier}' as ref or SHA"
        if hint:
            message = f"{message} (hint: {hint})"
        super().__init__(message)


class InvalidRange(CommitLintError):
    """A commit range specification is malformed."""

    def __init__(self, spec: str):
        self.spec = spec
        super().__init__(f"invalid commit range format: {spec}")


class GraphTraversalError(CommitLintError):
    """The repository failed while walking commit history."""


class InputError(CommitLintError):
    """The pre-push hook input could not be read."""


class ValidationFailure(CommitLintError):
    """One or more commits violate the configured rules.

    Attributes:
        failures: Every failing commit, in scan order. In fail-fast mode this
            holds exactly one entry.
    """

    def __init__(self, failures: List["CommitFailure"]):
        if not failures:
            raise ValueError("ValidationFailure needs at least one failure")
        self.failures = list(failures)
        first = self.failures[0]
        super().__init__(
            f"commit {first.commit.short_sha} in {first.ref} failed validation"
        )

    @property
    def commit(self):
        return self.failures[0].commit

    @property
    def ref(self) -> str:
        return self.failures[0].ref

    @property
    def violations(self):
        return self.failures[0].violations
