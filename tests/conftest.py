import logging
import sys

import pytest

from numinspect.core.inspector import ByteOrder, InspectionReport, inspect
from numinspect.core.layout import FloatWidth
from numinspect.core.parser import parse


def pytest_configure(config: pytest.Config) -> None:  # noqa: ARG001
    config.addinivalue_line("markers", "little_endian: marks tests that read native little-endian storage")


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:  # noqa: ARG001
    if sys.byteorder == "little":
        return
    skip = pytest.mark.skip(reason="native storage order is not little-endian")
    for item in items:
        if "little_endian" in item.keywords:
            item.add_marker(skip)


@pytest.fixture(autouse=True)
def restore_root_logger():
    """The CLI reconfigures the root logger; undo that after each test."""
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    yield
    for handler in root.handlers:
        if handler not in saved_handlers:
            handler.close()
    root.handlers[:] = saved_handlers
    root.setLevel(saved_level)


@pytest.fixture()
def report():
    """Inspect a literal with canonical byte order so bit checks hold on any host."""

    def _report(text: str, width: FloatWidth = FloatWidth.DOUBLE) -> InspectionReport:
        return inspect(parse(text, width), byte_order=ByteOrder.CANONICAL)

    return _report
