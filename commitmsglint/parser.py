"""Splitting of raw commit messages into title, body and footer."""
from typing import List

from .models import ParsedMessage


def parse_commit_message(message: str) -> ParsedMessage:
    """Parse a commit message into title, body and footer.

    Sections are separated by one or more blank (whitespace-only) lines.
    The first section is the title and, when there are at least two
    sections, the last one is the footer. Everything in between forms the
    body, rejoined with a single blank line.

    Args:
        message: The commit message as stored in the repository

    Returns:
        ParsedMessage: The sections; ``raw`` holds the normalized message
    """
    message = message.replace("\r\n", "\n").rstrip("\n")
    sections = split_sections(message)

    if not sections:
        return ParsedMessage(raw=message)
    if len(sections) == 1:
        return ParsedMessage(raw=message, title=sections[0])
    if len(sections) == 2:
        return ParsedMessage(raw=message, title=sections[0], footer=sections[1])

    return ParsedMessage(
        raw=message,
        title=sections[0],
        body="\n\n".join(sections[1:-1]),
        footer=sections[-1],
    )


def split_sections(message: str) -> List[str]:
    """Split a normalized message into blank-line delimited sections."""
    sections = []
    current: List[str] = []

    for line in message.split("\n"):
        if not line.strip():
            if current:
                sections.append("\n".join(current))
                current = []
            continue
        current.append(line)

    if current:
        sections.append("\n".join(current))

    return sections
