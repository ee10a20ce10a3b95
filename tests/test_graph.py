"""Tests for the GitPython-backed commit graph."""
import pytest
from git import Actor

from commitmsglint.errors import EndpointNotFound, GraphTraversalError
from commitmsglint.graph import GitCommitGraph
from commitmsglint.resolver import CommitRangeResolver


def test_resolve_branch_and_sha(git_repo):
    graph = GitCommitGraph(git_repo.repo)
    by_name = graph.resolve("main")
    by_sha = graph.resolve(git_repo.initial.hexsha)

    assert by_name.hexsha == git_repo.initial.hexsha
    assert by_sha == by_name


def test_commit_fields(git_repo):
    author = Actor("Jane Doe", "jane@example.com")
    child = git_repo.commit(
        "Add feature\n\nSigned-off-by: Jane Doe <jane@example.com>\n",
        parents=[git_repo.initial],
        author=author,
    )
    commit = GitCommitGraph(git_repo.repo).get(child.hexsha)

    assert commit.parents == (git_repo.initial.hexsha,)
    assert commit.author_name == "Jane Doe"
    assert commit.author_email == "jane@example.com"
    assert commit.message.startswith("Add feature\n\nSigned-off-by:")
    assert commit.summary == "Add feature"
    assert commit.short_sha == child.hexsha[:7]
    assert commit.committed_date == child.committed_date
    assert not commit.is_merge


def test_resolve_revision_syntax_and_tags(git_repo):
    child = git_repo.commit("Second", parents=[git_repo.initial], branch="feature")
    git_repo.repo.create_tag("v1.0", ref=child, message="release 1.0")
    graph = GitCommitGraph(git_repo.repo)

    assert graph.resolve("feature~1").hexsha == git_repo.initial.hexsha
    assert graph.resolve("v1.0").hexsha == child.hexsha


def test_resolve_unknown(git_repo):
    graph = GitCommitGraph(git_repo.repo)
    with pytest.raises(EndpointNotFound) as excinfo:
        graph.resolve("no-such-branch")
    assert excinfo.value.identifier == "no-such-branch"
    assert "failed to resolve 'no-such-branch' as ref or SHA" in str(excinfo.value)


def test_get_unknown_sha(git_repo):
    graph = GitCommitGraph(git_repo.repo)
    with pytest.raises(GraphTraversalError):
        graph.get("f" * 40)


def test_merge_commit_parents(git_repo):
    left = git_repo.commit("Left", parents=[git_repo.initial])
    right = git_repo.commit("Right", parents=[git_repo.initial])
    merge = git_repo.commit("Merge", parents=[left, right])

    commit = GitCommitGraph(git_repo.repo).get(merge.hexsha)
    assert commit.parents == (left.hexsha, right.hexsha)
    assert commit.is_merge


def test_resolver_on_repository(git_repo):
    first = git_repo.commit("First", parents=[git_repo.initial])
    second = git_repo.commit("Second", parents=[first])
    third = git_repo.commit("Third", parents=[second], branch="feature")

    resolver = CommitRangeResolver(GitCommitGraph(git_repo.repo))
    commits = resolver.resolve_range("main", "feature")
    assert [c.hexsha for c in commits] == [third.hexsha, second.hexsha, first.hexsha]

    ancestry = resolver.resolve_ancestry("feature")
    assert [c.hexsha for c in ancestry][-1] == git_repo.initial.hexsha
    assert len(ancestry) == 4
