"""Custom exception types for number inspection."""

from __future__ import annotations


class NumInspectError(Exception):
    """Base exception for all numinspect errors."""

    pass


class UnsupportedTypeError(NumInspectError):
    """Width selector does not name a known floating-point width."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Not sure how to parse that number as {name!r}")
        self.name = name


class ParseError(NumInspectError):
    """Text could not be converted to a floating-point value."""

    def __init__(self, text: str, reason: str = "no numeric prefix") -> None:
        super().__init__(f"Cannot parse {text!r}: {reason}")
        self.text = text
        self.reason = reason


class ConfigError(NumInspectError):
    """Configuration-related errors."""

    pass


__all__ = [
    "NumInspectError",
    "UnsupportedTypeError",
    "ParseError",
    "ConfigError",
]
