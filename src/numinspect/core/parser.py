"""Decimal literal parsing with ``strtof``/``strtod`` semantics.

The longest numeric prefix of the text is converted to the nearest value of
the requested width (round half to even). Anything after that prefix is
ignored unless ``strict`` parsing is requested.

Single precision is rounded straight from the exact value of the literal.
Going through a double first would round twice and can land one ulp off,
e.g. ``1 + 2**-24 + 2**-60`` must become ``1 + 2**-23``, not ``1.0``.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from decimal import Decimal
from fractions import Fraction

import numpy as np

from .errors import ParseError
from .layout import FloatWidth, layout_for

# Grammar accepted by strtod(3) in the C locale. Alternatives are tried in
# order, so "0x" with no hex digits falls back to the decimal "0".
_NUMBER_RE = re.compile(
    r"""
    [ \t\n\v\f\r]*
    (?P<sign>[+-]?)
    (?:
        0[xX](?=\.?[0-9a-fA-F])
            (?P<hex_int>[0-9a-fA-F]*)
            (?:\.(?P<hex_frac>[0-9a-fA-F]*))?
            (?:[pP](?P<hex_exp>[+-]?[0-9]+))?
      | (?P<decimal>
            (?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)
            (?:[eE][+-]?[0-9]+)?
        )
      | (?P<inf>[iI][nN][fF](?:[iI][nN][iI][tT][yY])?)
      | (?P<nan>[nN][aA][nN])(?:\((?P<nan_chars>[0-9A-Za-z_]*)\))?
    )
    """,
    re.VERBOSE,
)

# Smallest magnitude that rounds to infinity in single precision:
# FLT_MAX plus half an ulp. FLT_MAX has an odd mantissa, so the tie goes up.
_SINGLE_OVERFLOW = Fraction((1 << 25) - 1) * (1 << 103)

# strtoull saturates here; longer decimal payloads always overflow
_ULLONG_MAX = (1 << 64) - 1

# Exponents beyond this have already been turned into 0 or inf by the double
_EXPONENT_CLAMP = 10**9


@dataclass(frozen=True)
class NumericLiteral:
    """Input text together with the width it should be read as."""

    text: str
    width: FloatWidth


@dataclass(frozen=True)
class ParsedValue:
    """A floating-point value decoded from a literal, tagged with its width."""

    literal: NumericLiteral
    value: np.floating

    @property
    def width(self) -> FloatWidth:
        return self.literal.width

    @property
    def text(self) -> str:
        return self.literal.text


def deduce(text: str) -> FloatWidth | None:
    """Deduce the width of a bare literal.

    Only literals containing a decimal point are treated as floating point;
    they are read as double. Anything else yields ``None``.
    """
    if "." in text:
        return FloatWidth.DOUBLE
    return None


def parse(text: str, width: FloatWidth, strict: bool = False) -> ParsedValue:
    """Convert ``text`` to a value of ``width``.

    Args:
        text: Literal text, converted as by ``strtof``/``strtod``
        width: Target width
        strict: Reject characters after the numeric prefix

    Returns:
        ParsedValue holding a numpy scalar of the width's dtype

    Raises:
        ParseError: If the text has no numeric prefix, or (strict) trailing text
        UnsupportedTypeError: If ``width`` is not a known width
    """
    if not isinstance(width, FloatWidth):
        width = FloatWidth.from_name(width)
    return parse_literal(NumericLiteral(text=text, width=width), strict=strict)


def parse_literal(literal: NumericLiteral, strict: bool = False) -> ParsedValue:
    """Parse an already-constructed literal."""
    layout = layout_for(literal.width)
    text = literal.text

    match = _NUMBER_RE.match(text)
    if match is None:
        raise ParseError(text)
    if strict and match.end() != len(text):
        raise ParseError(text, f"trailing characters {text[match.end():]!r}")

    negative = match.group("sign") == "-"
    if match.group("nan") is not None:
        value = _quiet_nan(literal.width, _nan_payload(match.group("nan_chars")), negative)
    elif match.group("inf") is not None:
        value = layout.dtype.type(-math.inf if negative else math.inf)
    elif literal.width is FloatWidth.DOUBLE:
        value = np.float64(_to_double(match))
    else:
        value = _to_single(match)

    return ParsedValue(literal=literal, value=value)


def _to_double(match: re.Match) -> float:
    sign = match.group("sign")
    if match.group("decimal") is not None:
        # float() is correctly rounded and overflows to inf like strtod
        return float(sign + match.group("decimal"))
    try:
        return float.fromhex(sign + _hex_text(match))
    except OverflowError:
        return -math.inf if sign == "-" else math.inf


def _to_single(match: re.Match) -> np.float32:
    # The double is only used to dispose of the extremes cheaply: a literal
    # that overflows or underflows double does the same in single.
    approx = _to_double(match)
    if approx == 0.0 or not math.isfinite(approx):
        with np.errstate(over="ignore"):
            return np.float32(approx)

    exact = _exact_value(match)
    if abs(exact) >= _SINGLE_OVERFLOW:
        return np.float32(math.copysign(math.inf, approx))
    return _nearest_single(exact, approx)


def _nearest_single(exact: Fraction, approx: float) -> np.float32:
    """Round ``exact`` to float32, using ``approx`` to find the neighbourhood."""
    with np.errstate(over="ignore"):
        guess = np.float32(approx)
    if not np.isfinite(guess):
        guess = np.float32(math.copysign(float(np.finfo(np.float32).max), approx))

    # Rounding through double is at most one ulp off; pick the closest of the
    # guess and its neighbours, preferring an even mantissa on a tie.
    up = np.nextafter(guess, np.float32(math.inf))
    down = np.nextafter(guess, np.float32(-math.inf))
    candidates = [c for c in (down, guess, up) if np.isfinite(c)]
    return min(candidates, key=lambda c: (abs(Fraction(float(c)) - exact), _low_bit(c)))


def _low_bit(value: np.float32) -> int:
    return int(np.asarray(value).view(np.uint32)) & 1


def _exact_value(match: re.Match) -> Fraction:
    sign = -1 if match.group("sign") == "-" else 1
    if match.group("decimal") is not None:
        # Decimal keeps long literals clear of the int/str digit limit
        return sign * Fraction.from_decimal(Decimal(match.group("decimal")))

    int_digits = match.group("hex_int") or ""
    frac_digits = match.group("hex_frac") or ""
    mantissa = int(int_digits + frac_digits or "0", 16)
    exponent = _clamped_exponent(match.group("hex_exp") or "0") - 4 * len(frac_digits)
    if exponent >= 0:
        return sign * Fraction(mantissa << exponent)
    return sign * Fraction(mantissa, 1 << -exponent)


def _clamped_exponent(text: str) -> int:
    digits = text.lstrip("+-").lstrip("0") or "0"
    if len(digits) > 9:
        magnitude = _EXPONENT_CLAMP
    else:
        magnitude = int(digits)
    return -magnitude if text.startswith("-") else magnitude


def _nan_payload(chars: str | None) -> int:
    """Read the n-char sequence of ``nan(...)`` like ``strtoull(chars, NULL, 0)``.

    Only a sequence that is entirely one number sets a payload; anything
    else gives the default NaN.
    """
    if not chars:
        return 0
    if re.fullmatch(r"0[xX][0-9a-fA-F]+", chars):
        value = int(chars[2:], 16)
    elif re.fullmatch(r"0[0-7]*", chars):
        value = int(chars, 8)
    elif re.fullmatch(r"[1-9][0-9]*", chars):
        value = int(chars) if len(chars) <= 20 else _ULLONG_MAX
    else:
        return 0
    return min(value, _ULLONG_MAX)


def _quiet_nan(width: FloatWidth, payload: int, negative: bool) -> np.floating:
    """Build a quiet NaN whose low mantissa bits hold ``payload``."""
    layout = layout_for(width)
    quiet_bit = 1 << (layout.mantissa_bits - 1)
    bits = ((1 << layout.exponent_bits) - 1) << layout.mantissa_bits
    bits |= quiet_bit | (payload & (quiet_bit - 1))
    if negative:
        bits |= 1 << (layout.total_bits - 1)
    return np.array(bits, dtype=layout.uint_dtype).view(layout.dtype)[()]


def _hex_text(match: re.Match) -> str:
    text = "0x" + (match.group("hex_int") or "0")
    if match.group("hex_frac"):
        text += "." + match.group("hex_frac")
    if match.group("hex_exp"):
        text += "p" + match.group("hex_exp")
    return text


__all__ = [
    "NumericLiteral",
    "ParsedValue",
    "deduce",
    "parse",
    "parse_literal",
]
