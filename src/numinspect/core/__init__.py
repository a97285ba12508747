"""Core module with layouts, parsing, inspection, config, and utilities."""

__all__ = [
    "errors",
    "layout",
    "parser",
    "inspector",
    "pipeline",
    "config",
    "logging",
]
