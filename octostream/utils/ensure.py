"""Argument guards used before any request is built."""

from __future__ import annotations

from typing import Any

from octostream.exceptions import InvalidArgumentError


def argument_not_null(value: Any, name: str) -> None:
    """Raise InvalidArgumentError if ``value`` is None."""
    if value is None:
        raise InvalidArgumentError(f"{name} cannot be None", argument=name)


def argument_not_null_or_empty_string(value: str | None, name: str) -> None:
    """Raise InvalidArgumentError if ``value`` is None, empty or only whitespace."""
    if value is None:
        raise InvalidArgumentError(f"{name} cannot be None", argument=name)
    if not isinstance(value, str):
        raise InvalidArgumentError(f"{name} must be a string", argument=name)
    if not value.strip():
        raise InvalidArgumentError(f"{name} cannot be empty or whitespace", argument=name)


def argument_in_range(value: int | None, name: str, minimum: int = 1) -> None:
    """Raise InvalidArgumentError if ``value`` is set and below ``minimum``."""
    if value is None:
        return
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgumentError(f"{name} must be an integer", argument=name)
    if value < minimum:
        raise InvalidArgumentError(f"{name} must be >= {minimum}, got {value}", argument=name)
