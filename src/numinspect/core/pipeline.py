"""Single entry point from a literal and a type selector to a report."""

from __future__ import annotations

from .config import InspectorConfig
from .inspector import InspectionReport, inspect
from .layout import FloatWidth, WidthSelector
from .parser import NumericLiteral, deduce, parse_literal


def inspect_literal(
    text: str,
    width_selector: WidthSelector | str = WidthSelector.AUTO,
    config: InspectorConfig | None = None,
) -> InspectionReport | None:
    """Parse ``text`` at the selected width and inspect the stored value.

    Args:
        text: Literal as typed by the user
        width_selector: "single", "double" or "auto" (legacy names
            "float" and "[deduce]" are accepted too)
        config: Parsing and rendering options, defaults if omitted

    Returns:
        The report, or None when "auto" finds no decimal point in ``text``

    Raises:
        UnsupportedTypeError: If the selector names no known width
        ParseError: If ``text`` has no numeric prefix
    """
    config = config or InspectorConfig()
    if not isinstance(width_selector, WidthSelector):
        width_selector = WidthSelector.from_name(width_selector)

    width: FloatWidth | None = width_selector.width
    if width is None:
        width = deduce(text)
        if width is None:
            return None

    parsed = parse_literal(NumericLiteral(text=text, width=width), strict=config.strict_parsing)
    return inspect(parsed, byte_order=config.byte_order, render_precision=config.render_precision)


__all__ = ["inspect_literal"]
