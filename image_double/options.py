"""Decode options and pixel formats understood by the decode double."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

import numpy as np


class BitmapConfig(Enum):
    """Pixel formats a synthetic bitmap can report.

    Each member carries the channel count and numpy dtype used when a
    placeholder pixel array is requested.
    """

    ALPHA_8 = ("ALPHA_8", 1, np.uint8)
    RGB_565 = ("RGB_565", 1, np.uint16)
    ARGB_4444 = ("ARGB_4444", 1, np.uint16)
    ARGB_8888 = ("ARGB_8888", 4, np.uint8)
    RGBA_F16 = ("RGBA_F16", 4, np.float16)
    HARDWARE = ("HARDWARE", 4, np.uint8)

    def __init__(self, label: str, channels: int, dtype: type):
        self.label = label
        self.channels = channels
        self.dtype = dtype

    @classmethod
    def from_name(cls, name: str) -> BitmapConfig:
        """Look up a member by name, case-insensitively. Raises ValueError."""
        key = (name or "").strip().upper()
        try:
            return cls[key]
        except KeyError:
            raise ValueError(f"Unknown bitmap config: {name!r}") from None


DEFAULT_CONFIG = BitmapConfig.ARGB_8888


@dataclass
class DecodeOptions:
    """Caller-owned decode options.

    ``out_width``/``out_height`` are written back by every decode that
    receives the options object. ``just_decode_bounds`` is only reflected in
    the bitmap description.
    """

    preferred_config: BitmapConfig | None = None
    sample_size: int = 1
    just_decode_bounds: bool = False
    out_width: int = 0
    out_height: int = 0

    def active_flags(self) -> list[str]:
        flags: list[str] = []
        if self.just_decode_bounds:
            flags.append("inJustDecodeBounds")
        if self.sample_size > 1:
            flags.append(f"inSampleSize={self.sample_size}")
        return flags
