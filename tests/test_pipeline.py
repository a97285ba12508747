"""Tests for the inspect_literal entry point."""

import pytest

from numinspect import InspectorConfig, inspect_literal
from numinspect.core.errors import ParseError, UnsupportedTypeError
from numinspect.core.inspector import ByteOrder
from numinspect.core.layout import FloatWidth, WidthSelector


def test_auto_without_decimal_point_produces_nothing():
    assert inspect_literal("42", "auto") is None
    assert inspect_literal("1e5") is None
    assert inspect_literal("abc", WidthSelector.AUTO) is None


def test_auto_with_decimal_point_is_double():
    report = inspect_literal("42.0", "auto")
    assert report is not None
    assert report.width is FloatWidth.DOUBLE
    assert report.size_bits == 64
    assert report.round_trips is False
    assert report.rendered == "42"


def test_legacy_selector_names():
    assert inspect_literal("0.5", "[deduce]").width is FloatWidth.DOUBLE
    assert inspect_literal("0.5", "float").width is FloatWidth.SINGLE


def test_explicit_width_parses_integers():
    report = inspect_literal("42", "single")
    assert report.width is FloatWidth.SINGLE
    assert report.round_trips is True
    assert report.significand == 0.65625
    assert report.exponent_value == 6


def test_unsupported_selector():
    with pytest.raises(UnsupportedTypeError):
        inspect_literal("1.0", "long double")


def test_unparseable_literal():
    with pytest.raises(ParseError):
        inspect_literal("abc", "double")
    with pytest.raises(ParseError):
        inspect_literal("abc.", "auto")


def test_zero_normalizes_to_zero_pair():
    report = inspect_literal("0.0", "double")
    assert (report.significand, report.exponent_value) == (0.0, 0)
    assert report.round_trips is False
    assert report.rendered == "0"


def test_point_one_reports_internal_value():
    report = inspect_literal("0.1", "double")
    assert report.round_trips is False
    assert report.rendered.startswith("0.10000000000000000555")


def test_strict_config():
    assert inspect_literal("1.5x", "double").value == 1.5
    with pytest.raises(ParseError):
        inspect_literal("1.5x", "double", InspectorConfig(strict_parsing=True))


def test_render_precision_config():
    assert inspect_literal("0.1", "double", InspectorConfig(render_precision=17)).rendered == "0.10000000000000001"
    assert inspect_literal("0.1", "double", InspectorConfig(render_precision=16)).round_trips is True


def test_byte_order_config():
    report = inspect_literal("1.0", "double", InspectorConfig(byte_order=ByteOrder.CANONICAL))
    assert report.bits == "00" + "1" * 10 + "0" * 52


def test_long_single_literal():
    report = inspect_literal("0." + "1" * 5000, "single")
    assert report.width is FloatWidth.SINGLE
    assert report.round_trips is False
    assert report.rendered == "0.111111111938953399658203125"
