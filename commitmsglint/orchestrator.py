"""Validation of commit ranges against the configured rules."""
from typing import Iterable, Iterator, List, Optional, TextIO

from .config import RuleSet
from .errors import EndpointNotFound, InputError, ValidationFailure
from .filters import create_filter_chain
from .graph import CommitGraph
from .models import Commit, CommitFailure, RefUpdate
from .observers import ValidationObserver
from .parser import parse_commit_message
from .resolver import CommitRangeResolver
from .rules import evaluate_rules

MIN_REF_FIELDS = 4


def parse_push_input(stream: TextIO) -> Iterator[RefUpdate]:
    """Read ref updates from the stdin of a git pre-push hook.

    Each line holds ``<local ref> <local oid> <remote ref> <remote oid>``.
    Blank lines and lines with fewer than four fields are ignored.

    Raises:
        InputError: If the stream cannot be read or decoded
    """
    try:
        for line in stream:
            fields = line.split()
            if len(fields) < MIN_REF_FIELDS:
                continue
            yield RefUpdate(
                local_ref=fields[0],
                local_oid=fields[1],
                remote_ref=fields[2],
                remote_oid=fields[3],
            )
    except (OSError, UnicodeDecodeError) as e:
        raise InputError(f"error reading stdin: {e}") from e


class ValidationOrchestrator:
    """Checks the commits of pushes or explicit ranges against a rule set.

    Commits are examined in the order the resolver returns them. Merge
    commits and skipped authors are filtered out before parsing. With
    fail-fast in effect the first violating commit ends the whole run;
    otherwise every commit is checked and all failures are reported
    together.

    Attributes:
        graph (CommitGraph): Accessor for the repository's commits
        ruleset (RuleSet): Compiled rules and effective settings
        resolver (CommitRangeResolver): Computes the commits to check
        observers (List[ValidationObserver]): Observers to notify
    """

    def __init__(
        self,
        graph: CommitGraph,
        ruleset: RuleSet,
        resolver: Optional[CommitRangeResolver] = None,
    ):
        self.graph = graph
        self.ruleset = ruleset
        self.resolver = resolver or CommitRangeResolver(graph)
        self.filter_chain = create_filter_chain(
            skip_merge_commits=ruleset.skip_merge_commits,
            skip_authors=ruleset.skip_authors,
        )
        self.observers: List[ValidationObserver] = []

    def add_observer(self, observer: ValidationObserver) -> None:
        self.observers.append(observer)

    def remove_observer(self, observer: ValidationObserver) -> None:
        self.observers.remove(observer)

    def check_commits(self, commits: Iterable[Commit], ref: str) -> List[CommitFailure]:
        """Evaluate the rules for every commit that is not skipped.

        Returns:
            List[CommitFailure]: Failing commits in scan order; at most one
            when fail-fast is in effect
        """
        failures = []
        for commit in commits:
            if self.filter_chain:
                reason = self.filter_chain.handle(commit)
                if reason:
                    for observer in self.observers:
                        observer.on_commit_skipped(commit, reason)
                    continue

            parsed = parse_commit_message(commit.message)
            violations = evaluate_rules(self.ruleset.rules, parsed)

            for observer in self.observers:
                observer.on_commit_checked(commit, ref, violations)

            if violations:
                failures.append(CommitFailure(commit=commit, ref=ref, violations=violations))
                if self.ruleset.fail_fast:
                    break
        return failures

    def commits_for_update(self, update: RefUpdate) -> List[Commit]:
        """Determine the commits a single ref update introduces."""
        if update.is_delete:
            return []

        if update.is_new_branch:
            # only commits not already on the main ref are new
            try:
                main = self.graph.resolve(self.ruleset.main_ref)
            except EndpointNotFound as e:
                raise EndpointNotFound(
                    self.ruleset.main_ref,
                    hint="set main_ref in the config or pass --main-ref",
                ) from e
            return self.resolver.resolve_range(main.hexsha, update.local_oid)

        return self.resolver.resolve_range(update.remote_oid, update.local_oid)

    def validate_push(self, updates: Iterable[RefUpdate]) -> None:
        """Validate every ref update of a push.

        Raises:
            ValidationFailure: If any checked commit violates a rule
            EndpointNotFound: If an object id of an update is unknown
        """
        failures: List[CommitFailure] = []
        for update in updates:
            if update.is_delete:
                continue

            commits = self.commits_for_update(update)
            for observer in self.observers:
                observer.on_range_resolved(update.local_ref, commits)

            failures.extend(self.check_commits(commits, update.local_ref))
            if failures and self.ruleset.fail_fast:
                break

        if failures:
            raise ValidationFailure(failures)

    def validate_range(self, base_ref: str, head_ref: str) -> None:
        """Validate the commits between two refs or SHAs.

        Raises:
            ValidationFailure: If any checked commit violates a rule
            EndpointNotFound: If either endpoint cannot be resolved
        """
        try:
            commits = self.resolver.resolve_range(base_ref, head_ref)
        except EndpointNotFound as e:
            if e.identifier == base_ref == self.ruleset.main_ref:
                raise EndpointNotFound(
                    base_ref, hint="use --base-ref to specify a different base"
                ) from e
            raise

        ref = f"{base_ref}..{head_ref}"
        for observer in self.observers:
            observer.on_range_resolved(ref, commits)

        failures = self.check_commits(commits, ref)
        if failures:
            raise ValidationFailure(failures)
