#!/usr/bin/env python
"""
parsers/argument_parser.py - Argument parsing utilities.
Provides common functions for splitting command arguments and validating them against
pydantic models, centralizing repetitive string splitting and validation logic.
"""

from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from wabot_core.exceptions import PluginArgError


def split_args(args: str, sep: str | None = None, maxsplit: int = -1) -> list[str]:
    """
    Splits the argument string into tokens.

    Args:
        args (str): The raw argument string.
        sep (str, optional): The delimiter to use for splitting. Defaults to None (whitespace splitting).
        maxsplit (int, optional): Maximum number of splits. Defaults to -1 (no limit).

    Returns:
        list: List of tokens.
    """
    if sep is None:
        return args.strip().split(maxsplit=maxsplit)
    return [token.strip() for token in args.split(sep, maxsplit) if token.strip()]


T = TypeVar("T", bound=BaseModel)


def validate_model(data: dict[str, Any], model: type[T], message: str) -> T:
    """
    validate_model - Validate a data dictionary against a pydantic model.
    Raises PluginArgError carrying *message* on validation failure, so the
    dispatcher can reply with it directly.

    Args:
        data (dict): Data dictionary to validate.
        model (Type[BaseModel]): Pydantic model class.
        message (str): Reply shown to the caller when validation fails.

    Returns:
        An instance of the model.

    Raises:
        PluginArgError: If validation fails.
    """
    try:
        return model.model_validate(data)
    except ValidationError as ve:
        raise PluginArgError(message) from ve


# End of parsers/argument_parser.py
