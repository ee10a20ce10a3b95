"""Tests for violation report formatting."""
from commitmsglint.config import RuleSpec
from commitmsglint.errors import ValidationFailure
from commitmsglint.models import Commit, CommitFailure, RuleViolation
from commitmsglint.reporter import format_failure, format_report


def make_failure(message="WIP: debug\n\nmore text", ref="refs/heads/feature"):
    commit = Commit(
        hexsha="1234567890abcdef1234567890abcdef12345678",
        parents=("p",),
        author_name="Jane",
        author_email="jane@example.com",
        message=message,
        committed_date=0,
    )
    deny = RuleSpec(
        name="prevent-wip", type="deny", scope="title", pattern="(?i)wip",
        message="WIP commits are not allowed",
    ).compile()
    require = RuleSpec(
        name="require-signoff", type="require", scope="footer", pattern="^Signed-off-by:"
    ).compile()
    return CommitFailure(
        commit=commit,
        ref=ref,
        violations=[RuleViolation(deny, True), RuleViolation(require, False)],
    )


def test_format_failure():
    report = format_failure(make_failure())
    assert report == (
        "Commit 1234567 in refs/heads/feature failed validation:\n"
        "Commit message: WIP: debug\n"
        "\n"
        "Rule violations:\n"
        "  1. [prevent-wip] WIP commits are not allowed\n"
        "     Pattern '(?i)wip' was found in title (deny rule)\n"
        "  2. [require-signoff] Pattern must match in footer\n"
        "     Pattern '^Signed-off-by:' was not found in footer (require rule)"
    )


def test_format_report_multiple_failures():
    error = ValidationFailure([make_failure(), make_failure(ref="refs/heads/other")])
    report = format_report(error)

    assert report.count("failed validation") == 2
    assert "\n\nCommit 1234567 in refs/heads/other failed validation:" in report


def test_validation_failure_message():
    error = ValidationFailure([make_failure()])
    assert str(error) == "commit 1234567 in refs/heads/feature failed validation"
    assert error.ref == "refs/heads/feature"
    assert len(error.violations) == 2
