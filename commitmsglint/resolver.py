"""Resolution of the commits introduced between two points in history."""
import heapq
import itertools
from typing import Iterable, Iterator, List, Set, Tuple

from .errors import InvalidRange
from .graph import CommitGraph
from .models import ZERO_OID, Commit

RANGE_SEPARATOR = ".."


def parse_range(spec: str) -> Tuple[str, str]:
    """Split a ``BASE..HEAD`` range specification.

    Raises:
        InvalidRange: If the spec is not exactly two non-empty endpoints
    """
    parts = spec.strip().split(RANGE_SEPARATOR)
    if len(parts) != 2:
        raise InvalidRange(spec)
    base, head = parts[0].strip(), parts[1].strip()
    if not base or not head or base.startswith(".") or head.startswith("."):
        raise InvalidRange(spec)
    return base, head


class CommitRangeResolver:
    """Computes which commits a push or a merge request introduces.

    History is walked with an explicit worklist ordered by commit time,
    newest first, and a set of visited hashes, so every commit is yielded
    at most once even when merge commits create converging paths.
    """

    def __init__(self, graph: CommitGraph):
        self.graph = graph

    def resolve_range(self, base: str, head: str) -> List[Commit]:
        """Return the commits reachable from ``head`` but not from ``base``.

        ``base`` and ``head`` may be ref names or SHAs and need not be in an
        ancestor relationship.

        Raises:
            EndpointNotFound: If either endpoint cannot be resolved
            GraphTraversalError: If the repository fails during the walk
        """
        if base == ZERO_OID or head == ZERO_OID:
            return []

        base_commit = self.graph.resolve(base)
        head_commit = self.graph.resolve(head)
        if base_commit.hexsha == head_commit.hexsha:
            return []

        excluded = self.ancestors(base_commit)
        return list(self._walk([head_commit], excluded))

    def resolve_ancestry(self, head: str) -> List[Commit]:
        """Return ``head`` and every commit reachable from it."""
        if head == ZERO_OID:
            return []
        return list(self._walk([self.graph.resolve(head)], set()))

    def ancestors(self, commit: Commit) -> Set[str]:
        """Return the hashes of ``commit`` and all its transitive parents."""
        return {c.hexsha for c in self._walk([commit], set())}

    def _walk(self, starts: Iterable[Commit], excluded: Set[str]) -> Iterator[Commit]:
        counter = itertools.count()
        visited: Set[str] = set()
        worklist = []

        for commit in starts:
            if commit.hexsha not in visited:
                visited.add(commit.hexsha)
                heapq.heappush(worklist, (-commit.committed_date, next(counter), commit))

        while worklist:
            _, _, commit = heapq.heappop(worklist)
            if commit.hexsha in excluded:
                # excluded sets are closed under parents
                continue
            yield commit

            for parent_sha in commit.parents:
                if parent_sha in visited:
                    continue
                visited.add(parent_sha)
                parent = self.graph.get(parent_sha)
                heapq.heappush(worklist, (-parent.committed_date, next(counter), parent))
