"""IEEE-754 bit layouts for the supported floating-point widths.

The set of widths is closed, so the layouts live in a static table keyed by
``FloatWidth`` rather than behind a class hierarchy.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

import numpy as np

from .errors import UnsupportedTypeError


class FloatWidth(str, Enum):
    """Binary floating-point width."""

    SINGLE = "single"
    DOUBLE = "double"

    @classmethod
    def from_name(cls, name: str) -> FloatWidth:
        """Resolve a width name, accepting the C type names as aliases."""
        key = _WIDTH_ALIASES.get(name, name)
        try:
            return cls(key)
        except ValueError:
            raise UnsupportedTypeError(name) from None


class WidthSelector(str, Enum):
    """Requested width, or ``AUTO`` to deduce it from the literal."""

    SINGLE = "single"
    DOUBLE = "double"
    AUTO = "auto"

    @classmethod
    def from_name(cls, name: str) -> WidthSelector:
        key = _SELECTOR_ALIASES.get(name, name)
        try:
            return cls(key)
        except ValueError:
            raise UnsupportedTypeError(name) from None

    @property
    def width(self) -> FloatWidth | None:
        if self is WidthSelector.AUTO:
            return None
        return FloatWidth(self.value)


_WIDTH_ALIASES = {"float": "single"}
_SELECTOR_ALIASES = {"float": "single", "[deduce]": "auto"}


@dataclass(frozen=True)
class FloatLayout:
    """Field widths of one binary floating-point format."""

    sign_bits: int
    exponent_bits: int
    mantissa_bits: int
    dtype: np.dtype

    @property
    def total_bits(self) -> int:
        return self.sign_bits + self.exponent_bits + self.mantissa_bits

    @property
    def byte_size(self) -> int:
        return self.dtype.itemsize

    @property
    def exponent_bias(self) -> int:
        return (1 << (self.exponent_bits - 1)) - 1

    @property
    def radix(self) -> int:
        return 2

    @property
    def uint_dtype(self) -> np.dtype:
        """Unsigned integer type with the same storage size."""
        return np.dtype(f"u{self.byte_size}")

    def __post_init__(self) -> None:
        if self.total_bits != self.dtype.itemsize * 8:
            raise ValueError(
                f"Layout fields sum to {self.total_bits} bits, "
                f"but {self.dtype} stores {self.dtype.itemsize * 8}"
            )


LAYOUTS: dict[FloatWidth, FloatLayout] = {
    FloatWidth.SINGLE: FloatLayout(sign_bits=1, exponent_bits=8, mantissa_bits=23, dtype=np.dtype(np.float32)),
    FloatWidth.DOUBLE: FloatLayout(sign_bits=1, exponent_bits=11, mantissa_bits=52, dtype=np.dtype(np.float64)),
}


def layout_for(width: FloatWidth) -> FloatLayout:
    """Return the static bit layout for ``width``."""
    try:
        return LAYOUTS[FloatWidth(width)]
    except (KeyError, ValueError):
        raise UnsupportedTypeError(str(width)) from None


def width_of(value: np.floating) -> FloatWidth:
    """Map a numpy floating scalar back to its width."""
    for width, layout in LAYOUTS.items():
        if value.dtype == layout.dtype:
            return width
    raise UnsupportedTypeError(str(value.dtype))


__all__ = [
    "FloatWidth",
    "WidthSelector",
    "FloatLayout",
    "LAYOUTS",
    "layout_for",
    "width_of",
]
