"""Floating-point literal inspector.

Shows how a decimal literal is stored as an IEEE-754 single or double: the
raw sign/exponent/mantissa bits, whether the literal survives a round trip,
machine epsilon, the adjacent value toward zero, and the frexp form.
"""

from .core.config import InspectorConfig, load_config
from .core.errors import NumInspectError, ParseError, UnsupportedTypeError
from .core.inspector import ByteOrder, InspectionReport, inspect
from .core.layout import FloatWidth, WidthSelector
from .core.parser import parse
from .core.pipeline import inspect_literal

__version__ = "0.1.0"

__all__ = [
    "ByteOrder",
    "FloatWidth",
    "InspectionReport",
    "InspectorConfig",
    "NumInspectError",
    "ParseError",
    "UnsupportedTypeError",
    "WidthSelector",
    "inspect",
    "inspect_literal",
    "load_config",
    "parse",
]
