#!/usr/bin/env python
"""
parsers/message_parser.py - Extracts the command word and arguments from a message body.
Produces a ParsedCommand dataclass, or None for ordinary conversation.
"""

from dataclasses import dataclass, field

from wabot_core.parsers.argument_parser import split_args


PREFIX_DOCUMENT = "prefix"


def is_valid_prefix(value: object) -> bool:
    """A prefix is exactly one non-alphanumeric, non-whitespace character."""
    return isinstance(value, str) and len(value) == 1 and not value.isalnum() and not value.isspace()


@dataclass(frozen=True)
class ParsedCommand:
    prefix: str
    command: str
    args: list[str] = field(default_factory=list)

    @property
    def text(self) -> str:
        """The arguments re-joined with single spaces."""
        return " ".join(self.args)


def normalize_alias(alias: str) -> str:
    """
    Normalize an alias to a standardized format: lowercased and stripped.
    """
    return alias.strip().lower()


def parse_command(body: str | None, prefix: str = ".") -> ParsedCommand | None:
    """
    Parse *body* into a command when it starts with *prefix*.

    Returns None when the body is empty, lacks the prefix, or has nothing
    but whitespace after it. Those messages are normal chat traffic.

    Example:
        parse_command(".Delay  5", ".") -> ParsedCommand(".", "delay", ["5"])
        parse_command("hello", ".")     -> None
    """
    if not body or not prefix or not body.startswith(prefix):
        return None
    tokens = split_args(body[len(prefix):])
    if not tokens:
        return None
    command = normalize_alias(tokens[0])
    return ParsedCommand(prefix=prefix, command=command, args=tokens[1:])


# End of parsers/message_parser.py
