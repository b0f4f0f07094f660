"""Header sniffers: best-effort (width, height) from a stream's image header.

A sniffer answers None when no reader recognizes the bytes. Read errors from
the stream itself (OSError) are not caught here and reach the caller.
"""

from __future__ import annotations

import contextlib
import io
from abc import ABC, abstractmethod
from typing import Any, BinaryIO

from .logger import get_logger
from .metrics import metrics

_logger = get_logger("sniffer")


@contextlib.contextmanager
def _preserve_position(stream: BinaryIO):
    """Rewind a seekable stream to where it was once sniffing is done."""
    seekable = False
    with contextlib.suppress(AttributeError, OSError, ValueError):
        seekable = bool(stream.seekable())
    start = stream.tell() if seekable else None
    try:
        yield
    finally:
        if start is not None:
            stream.seek(start)


class HeaderSniffer(ABC):
    """Strategy base class for reading image dimensions from a header."""

    name = "abstract"

    def sniff(self, stream: BinaryIO) -> tuple[int, int] | None:
        with metrics.sniffing() as record, _preserve_position(stream):
            size = record.size = self._read_size(stream)
        if size is None:
            _logger.debug("%s: format not recognized", self.name)
        else:
            _logger.debug("%s: sniffed %dx%d", self.name, size[0], size[1])
        return size

    @abstractmethod
    def _read_size(self, stream: BinaryIO) -> tuple[int, int] | None:
        """Return (width, height), or None for an unrecognized format."""


_pyvips: Any | None = None


def _get_pyvips_module() -> Any:
    global _pyvips
    if _pyvips is None:
        import pyvips  # type: ignore

        _pyvips = pyvips
    return _pyvips


class PyvipsHeaderSniffer(HeaderSniffer):
    """Opens the bytes with libvips; only the header is parsed until pixels are asked for."""

    name = "pyvips"

    def _read_size(self, stream: BinaryIO) -> tuple[int, int] | None:
        data = stream.read()
        if not data:
            return None
        pyvips = _get_pyvips_module()
        try:
            image = pyvips.Image.new_from_buffer(bytes(data), "", access="sequential")
        except pyvips.Error as e:
            _logger.debug("pyvips rejected stream: %s", e)
            return None
        return int(image.width), int(image.height)


class PillowHeaderSniffer(HeaderSniffer):
    """Uses PIL.Image.open, which reads the header lazily.

    Image.open rewinds whatever it is given, so it gets a copy of the bytes
    from the current position on, the same bytes the pyvips sniffer sees.
    """

    name = "pillow"

    def _read_size(self, stream: BinaryIO) -> tuple[int, int] | None:
        from PIL import Image, UnidentifiedImageError

        try:
            with Image.open(io.BytesIO(stream.read())) as image:
                return int(image.width), int(image.height)
        except UnidentifiedImageError as e:
            _logger.debug("pillow rejected stream: %s", e)
            return None


SNIFFERS: dict[str, type[HeaderSniffer]] = {
    PyvipsHeaderSniffer.name: PyvipsHeaderSniffer,
    PillowHeaderSniffer.name: PillowHeaderSniffer,
}


def create_sniffer(name: str) -> HeaderSniffer:
    try:
        return SNIFFERS[(name or "").strip().lower()]()
    except KeyError:
        raise ValueError(f"Unknown header sniffer: {name!r} (expected one of {sorted(SNIFFERS)})") from None
