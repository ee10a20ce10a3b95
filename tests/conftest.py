import pytest
from pathlib import Path
from typing import Dict, List, Optional

from git import Actor, Repo

from commitmsglint.errors import EndpointNotFound, GraphTraversalError
from commitmsglint.graph import CommitGraph
from commitmsglint.models import Commit

BASE_TIMESTAMP = 1700000000

WIP_CONFIG = """rules:
  - name: prevent-wip
    type: deny
    scope: title
    pattern: '(?i)wip'
    message: "WIP commits are not allowed"
"""

SIGNOFF_CONFIG = """rules:
  - name: require-signoff
    type: require
    scope: footer
    pattern: '^Signed-off-by:'
    message: "Commits must be signed off"
"""


class FakeGraph(CommitGraph):
    """In-memory commit graph for resolver and validator tests."""

    def __init__(self):
        self.commits: Dict[str, Commit] = {}
        self.refs: Dict[str, str] = {}
        self.get_calls: List[str] = []

    def add(
        self,
        hexsha: str,
        parents: tuple = (),
        message: str = "",
        date: Optional[int] = None,
        author_name: str = "Test User",
        author_email: str = "test@example.com",
    ) -> Commit:
        commit = Commit(
            hexsha=hexsha,
            parents=tuple(parents),
            author_name=author_name,
            author_email=author_email,
            message=message or f"Commit {hexsha}",
            committed_date=date if date is not None else BASE_TIMESTAMP + len(self.commits),
        )
        self.commits[hexsha] = commit
        return commit

    def resolve(self, name: str) -> Commit:
        hexsha = self.refs.get(name, name)
        if hexsha not in self.commits:
            raise EndpointNotFound(name)
        return self.commits[hexsha]

    def get(self, hexsha: str) -> Commit:
        self.get_calls.append(hexsha)
        if hexsha not in self.commits:
            raise GraphTraversalError(f"failed to read commit {hexsha}")
        return self.commits[hexsha]


class RepoBuilder:
    """Creates commits with explicit parents, authors and dates."""

    def __init__(self, repo: Repo):
        self.repo = repo
        self.counter = 0
        self.initial = None

    def commit(
        self,
        message: str,
        parents: Optional[list] = None,
        author: Optional[Actor] = None,
        branch: Optional[str] = None,
    ):
        self.counter += 1
        date = f"{BASE_TIMESTAMP + self.counter * 60} +0000"
        actor = author or Actor("Test User", "test@example.com")
        commit = self.repo.index.commit(
            message,
            parent_commits=parents if parents is not None else [],
            head=False,
            author=actor,
            committer=actor,
            author_date=date,
            commit_date=date,
        )
        if branch:
            self.repo.create_head(branch, commit, force=True)
        return commit


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep settings overrides from the developer's shell out of the tests."""
    for name in [
        "COMMIT_MSG_LINT_MAIN_REF",
        "COMMIT_MSG_LINT_FAIL_FAST",
        "COMMIT_MSG_LINT_SKIP_MERGE_COMMITS",
        "COMMIT_MSG_LINT_LOG_FILE",
    ]:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def fake_graph():
    return FakeGraph()


@pytest.fixture
def git_repo(tmp_path):
    """Create a temporary git repository with a single commit on main."""
    repo = Repo.init(tmp_path)
    builder = RepoBuilder(repo)
    initial = builder.commit("Initial commit", branch="main")
    repo.head.reference = repo.heads.main
    repo.head.reset(initial, index=True)
    builder.initial = initial
    yield builder
    repo.close()


def write_config(repo_path: Path, content: str, filename: str = ".commit-msg-lint.yml") -> Path:
    config_path = Path(repo_path) / filename
    config_path.write_text(content)
    return config_path
