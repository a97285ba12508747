"""Tests for the per-width bit layout table."""

import numpy as np
import pytest

from numinspect.core.errors import UnsupportedTypeError
from numinspect.core.layout import LAYOUTS, FloatLayout, FloatWidth, WidthSelector, layout_for, width_of


@pytest.mark.parametrize("width", list(FloatWidth))
def test_fields_sum_to_total(width):
    layout = layout_for(width)
    assert layout.sign_bits + layout.exponent_bits + layout.mantissa_bits == layout.total_bits
    assert layout.total_bits == layout.byte_size * 8
    assert layout.radix == 2


def test_single_layout():
    layout = layout_for(FloatWidth.SINGLE)
    assert (layout.sign_bits, layout.exponent_bits, layout.mantissa_bits, layout.total_bits) == (1, 8, 23, 32)
    assert layout.dtype == np.float32
    assert layout.exponent_bias == 127


def test_double_layout():
    layout = layout_for(FloatWidth.DOUBLE)
    assert (layout.sign_bits, layout.exponent_bits, layout.mantissa_bits, layout.total_bits) == (1, 11, 52, 64)
    assert layout.dtype == np.float64
    assert layout.exponent_bias == 1023


def test_table_is_closed():
    assert set(LAYOUTS) == {FloatWidth.SINGLE, FloatWidth.DOUBLE}


def test_inconsistent_layout_rejected():
    with pytest.raises(ValueError, match="sum to 31 bits"):
        FloatLayout(sign_bits=1, exponent_bits=8, mantissa_bits=22, dtype=np.dtype(np.float32))


@pytest.mark.parametrize(
    "name,expected",
    [("single", FloatWidth.SINGLE), ("float", FloatWidth.SINGLE), ("double", FloatWidth.DOUBLE)],
)
def test_width_names(name, expected):
    assert FloatWidth.from_name(name) is expected


@pytest.mark.parametrize("name", ["long double", "half", "int", "", "auto"])
def test_unknown_width_name(name):
    with pytest.raises(UnsupportedTypeError):
        FloatWidth.from_name(name)


def test_selector_aliases():
    assert WidthSelector.from_name("[deduce]") is WidthSelector.AUTO
    assert WidthSelector.from_name("float") is WidthSelector.SINGLE
    assert WidthSelector.AUTO.width is None
    assert WidthSelector.DOUBLE.width is FloatWidth.DOUBLE

    with pytest.raises(UnsupportedTypeError, match="quad"):
        WidthSelector.from_name("quad")


def test_width_of_scalars():
    assert width_of(np.float32(1.0)) is FloatWidth.SINGLE
    assert width_of(np.float64(1.0)) is FloatWidth.DOUBLE
    with pytest.raises(UnsupportedTypeError):
        width_of(np.float16(1.0))
