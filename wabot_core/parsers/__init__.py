"""
parsers/__init__.py
-------------------
Parsers package for the chat bot. Provides the command extractor and argument
helpers used by the dispatcher and by command plugins.
"""

from wabot_core.parsers.argument_parser import split_args, validate_model
from wabot_core.parsers.message_parser import (
    PREFIX_DOCUMENT,
    ParsedCommand,
    is_valid_prefix,
    normalize_alias,
    parse_command,
)

__all__ = [
    "PREFIX_DOCUMENT",
    "ParsedCommand",
    "is_valid_prefix",
    "normalize_alias",
    "parse_command",
    "split_args",
    "validate_model",
]

# End of parsers/__init__.py
