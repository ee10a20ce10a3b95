"""Human-readable rendering of validation failures."""
from typing import List

from .errors import ValidationFailure
from .models import CommitFailure, RuleType, RuleViolation


def format_violation(index: int, violation: RuleViolation) -> List[str]:
    rule = violation.rule
    lines = [f"  {index}. [{rule.name}] {rule.violation_message}"]
    if rule.type == RuleType.DENY:
        lines.append(
            f"     Pattern '{rule.pattern}' was found in {rule.scope.value} (deny rule)"
        )
    else:
        lines.append(
            f"     Pattern '{rule.pattern}' was not found in {rule.scope.value} (require rule)"
        )
    return lines


def format_failure(failure: CommitFailure) -> str:
    """Render one failing commit with its numbered rule violations."""
    lines = [
        f"Commit {failure.commit.short_sha} in {failure.ref} failed validation:",
        f"Commit message: {failure.commit.summary}",
        "",
        "Rule violations:",
    ]
    for i, violation in enumerate(failure.violations, start=1):
        lines.extend(format_violation(i, violation))
    return "\n".join(lines)


def format_report(error: ValidationFailure) -> str:
    """Render every failure of a validation run, separated by blank lines."""
    return "\n\n".join(format_failure(failure) for failure in error.failures)
