"""Pytest configuration.

Every test gets the hint-reset fixture from the package plugin, so hints
registered through the module-level API never leak into the next test.
"""

from __future__ import annotations

import io

import pytest

from image_double.pytest_plugin import bitmap_factory, reset_bitmap_hints  # noqa: F401


def png_bytes(width: int, height: int) -> bytes:
    from PIL import Image

    buf = io.BytesIO()
    Image.new("RGB", (width, height), color="white").save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture
def make_png():
    return png_bytes


@pytest.fixture
def pyvips_module():
    """Skip when libvips cannot be loaded (import can fail with OSError, not just ImportError)."""
    try:
        import pyvips
    except (ImportError, OSError) as e:
        pytest.skip(f"pyvips not available: {e}")
    return pyvips
