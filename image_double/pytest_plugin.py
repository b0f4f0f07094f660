"""pytest fixtures that give each test a clean set of dimension hints.

Import the fixtures into a conftest.py:

    from image_double.pytest_plugin import bitmap_factory, reset_bitmap_hints  # noqa: F401
"""

from __future__ import annotations

import pytest

from image_double.factory import BitmapFactory, reset_all_hints
from image_double.metrics import metrics
from image_double.sniffer import PillowHeaderSniffer


@pytest.fixture(autouse=True)
def reset_bitmap_hints():
    """Clear the process-wide hints after every test."""
    yield
    reset_all_hints()


@pytest.fixture
def bitmap_factory() -> BitmapFactory:
    """A private factory with its own registry, sniffing with Pillow."""
    metrics.reset()
    return BitmapFactory(sniffer=PillowHeaderSniffer())
