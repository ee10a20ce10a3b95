"""Shared models for commit-msg-lint."""
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

ZERO_OID = "0" * 40


class RuleType(str, Enum):
    DENY = "deny"
    REQUIRE = "require"


class Scope(str, Enum):
    TITLE = "title"
    BODY = "body"
    FOOTER = "footer"
    MESSAGE = "message"


@dataclass(frozen=True)
class Commit:
    """Read-only view of a commit as seen by the linter."""

    hexsha: str
    parents: Tuple[str, ...]
    author_name: str
    author_email: str
    message: str
    committed_date: int

    @property
    def short_sha(self) -> str:
        return self.hexsha[:7]

    @property
    def summary(self) -> str:
        return self.message.split("\n", 1)[0].strip()

    @property
    def is_merge(self) -> bool:
        return len(self.parents) > 1


@dataclass(frozen=True)
class ParsedMessage:
    raw: str = ""
    title: str = ""
    body: str = ""
    footer: str = ""


@dataclass(frozen=True)
class CompiledRule:
    """A validated rule holding its compiled pattern."""

    name: str
    type: RuleType
    scope: Scope
    pattern: str
    regex: "re.Pattern"
    message: Optional[str] = None

    @property
    def violation_message(self) -> str:
        """The rule's custom message, or a default based on its type."""
        if self.message:
            return self.message
        if self.type == RuleType.DENY:
            return f"Pattern must not match in {self.scope.value}"
        return f"Pattern must match in {self.scope.value}"


@dataclass(frozen=True)
class RuleViolation:
    rule: CompiledRule
    # deny: True means the pattern was found; require: False means it was absent
    matched: bool


@dataclass(frozen=True)
class CommitFailure:
    commit: Commit
    ref: str
    violations: List[RuleViolation] = field(default_factory=list)


@dataclass(frozen=True)
class RefUpdate:
    """One line of pre-push hook input."""

    local_ref: str
    local_oid: str
    remote_ref: str
    remote_oid: str

    @property
    def is_delete(self) -> bool:
        return self.local_oid == ZERO_OID

    @property
    def is_new_branch(self) -> bool:
        return self.remote_oid == ZERO_OID
