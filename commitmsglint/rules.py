"""Evaluation of deny/require rules against parsed commit messages."""
from typing import Iterable, List

from .models import CompiledRule, ParsedMessage, RuleType, RuleViolation, Scope


def text_for_scope(scope: Scope, message: ParsedMessage) -> str:
    """Return the part of the message a rule with the given scope inspects."""
    if scope == Scope.TITLE:
        return message.title
    if scope == Scope.BODY:
        return message.body
    if scope == Scope.FOOTER:
        return message.footer
    if scope == Scope.MESSAGE:
        return message.raw
    return ""


def evaluate_rule(rule: CompiledRule, message: ParsedMessage) -> bool:
    """Check a single rule.

    Returns:
        bool: True if the rule is violated
    """
    matched = rule.regex.search(text_for_scope(rule.scope, message)) is not None
    if rule.type == RuleType.DENY:
        return matched
    return not matched


def evaluate_rules(
    rules: Iterable[CompiledRule], message: ParsedMessage
) -> List[RuleViolation]:
    """Evaluate all rules against a parsed commit message.

    Args:
        rules: Compiled rules in declaration order
        message: The parsed commit message

    Returns:
        List[RuleViolation]: Violations in rule order, empty if all rules pass
    """
    violations = []
    for rule in rules:
        if evaluate_rule(rule, message):
            # a violated deny rule matched, a violated require rule did not
            violations.append(
                RuleViolation(rule=rule, matched=rule.type == RuleType.DENY)
            )
    return violations
