"""Bit-level inspection of floating-point values.

Produces an ``InspectionReport`` for a parsed value: the raw bit pattern and
its IEEE-754 fields, whether the literal survives a round trip through the
stored value, and the derived properties (epsilon, adjacent value toward
zero, frexp decomposition).

Bits are read from the value's storage bytes with the first byte taken as
least significant, so on little-endian hosts the string is the usual
sign-exponent-mantissa layout. ``ByteOrder.NATIVE`` reports the machine's
storage order as-is; ``ByteOrder.CANONICAL`` normalises to IEEE order on
every host and has to be asked for explicitly.
"""

from __future__ import annotations

from enum import Enum

import numpy as np
from pydantic import BaseModel, ConfigDict, model_validator

from .layout import FloatWidth, layout_for, width_of
from .parser import ParsedValue

# Digits used by the legacy tool (std::setprecision(100))
DEFAULT_RENDER_PRECISION = 100


class ByteOrder(str, Enum):
    """Order in which storage bytes are read."""

    NATIVE = "native"
    CANONICAL = "canonical"


class Category(str, Enum):
    """IEEE-754 class of a value."""

    ZERO = "zero"
    SUBNORMAL = "subnormal"
    NORMAL = "normal"
    INFINITE = "infinite"
    NAN = "nan"


class InspectionReport(BaseModel):
    """Read-only result of inspecting one literal."""

    model_config = ConfigDict(frozen=True, ser_json_inf_nan="constants")

    literal: str
    width: FloatWidth
    size_bits: int
    bits: str
    sign: str
    exponent: str
    mantissa: str
    round_trips: bool
    rendered: str | None = None
    epsilon: float
    adjacent: float
    significand: float
    exponent_value: int | None
    radix: int = 2
    category: Category
    value: float

    @model_validator(mode="after")
    def validate_fields(self) -> InspectionReport:
        """Fields must tile the bit string exactly."""
        if len(self.bits) != self.size_bits:
            raise ValueError(f"Bit string has {len(self.bits)} bits, expected {self.size_bits}")
        if self.sign + self.exponent + self.mantissa != self.bits:
            raise ValueError("Sign, exponent and mantissa fields do not partition the bit string")
        if self.round_trips != (self.rendered is None):
            raise ValueError("rendered must be present exactly when the literal does not round-trip")
        return self


def extract_bits(value: np.floating, byte_order: ByteOrder = ByteOrder.NATIVE) -> str:
    """Return the storage bits of ``value``, most significant first.

    Args:
        value: numpy float32 or float64 scalar
        byte_order: NATIVE reads storage as laid out in memory,
            CANONICAL first converts it to little-endian storage

    Returns:
        Bit string of the width's total length
    """
    layout = layout_for(width_of(value))
    stored = np.asarray(value)
    if ByteOrder(byte_order) is ByteOrder.CANONICAL:
        stored = stored.astype(layout.dtype.newbyteorder("<"))
    raw = stored.tobytes()
    return format(int.from_bytes(raw, "little"), f"0{layout.total_bits}b")


def split_fields(bits: str, width: FloatWidth) -> tuple[str, str, str]:
    """Partition a bit string into (sign, exponent, mantissa)."""
    layout = layout_for(width)
    if len(bits) != layout.total_bits:
        raise ValueError(f"Expected {layout.total_bits} bits for {width.value}, got {len(bits)}")
    exp_start = layout.sign_bits
    mant_start = exp_start + layout.exponent_bits
    return bits[:exp_start], bits[exp_start:mant_start], bits[mant_start:]


def render_decimal(value: np.floating, precision: int = DEFAULT_RENDER_PRECISION) -> str:
    """Render ``value`` like C's ``%.<precision>g``.

    float32 values convert to Python floats exactly, so both widths render
    their stored value, not a rounded neighbour. NaN keeps its sign, as
    glibc prints it.
    """
    if np.isnan(value):
        return "-nan" if np.signbit(value) else "nan"
    return format(float(value), f".{precision}g")


def machine_epsilon(width: FloatWidth) -> float:
    """Smallest e with 1 + e != 1 in ``width``."""
    return float(np.finfo(layout_for(width).dtype).eps)


def adjacent_value(value: np.floating) -> np.floating:
    """Next representable value from ``value`` toward zero."""
    return np.nextafter(value, value.dtype.type(0))


def normalize(value: np.floating) -> tuple[float, int | None]:
    """Return (significand, exponent) with value == significand * 2**exponent.

    The exponent of an infinity or NaN is undefined and reported as None.
    """
    if not np.isfinite(value):
        return float(value), None
    significand, exponent = np.frexp(value)
    return float(significand), int(exponent)


def classify(value: np.floating) -> Category:
    if np.isnan(value):
        return Category.NAN
    if np.isinf(value):
        return Category.INFINITE
    if value == 0:
        return Category.ZERO
    if abs(value) < np.finfo(value.dtype).smallest_normal:
        return Category.SUBNORMAL
    return Category.NORMAL


def inspect(
    parsed: ParsedValue,
    byte_order: ByteOrder = ByteOrder.NATIVE,
    render_precision: int = DEFAULT_RENDER_PRECISION,
) -> InspectionReport:
    """Build the inspection report for a parsed value.

    Args:
        parsed: Value produced by the parser
        byte_order: How storage bytes are ordered into the bit string
        render_precision: Significant digits for the round-trip rendering

    Returns:
        Frozen InspectionReport
    """
    value = parsed.value
    layout = layout_for(parsed.width)

    bits = extract_bits(value, byte_order)
    sign, exponent, mantissa = split_fields(bits, parsed.width)

    rendered = render_decimal(value, render_precision)
    round_trips = rendered == parsed.text
    significand, exponent_value = normalize(value)

    return InspectionReport(
        literal=parsed.text,
        width=parsed.width,
        size_bits=layout.total_bits,
        bits=bits,
        sign=sign,
        exponent=exponent,
        mantissa=mantissa,
        round_trips=round_trips,
        rendered=None if round_trips else rendered,
        epsilon=machine_epsilon(parsed.width),
        adjacent=float(adjacent_value(value)),
        significand=significand,
        exponent_value=exponent_value,
        radix=layout.radix,
        category=classify(value),
        value=float(value),
    )


__all__ = [
    "DEFAULT_RENDER_PRECISION",
    "ByteOrder",
    "Category",
    "InspectionReport",
    "extract_bits",
    "split_fields",
    "render_decimal",
    "machine_epsilon",
    "adjacent_value",
    "normalize",
    "classify",
    "inspect",
]
