"""Image Double - a deterministic stand-in for an image-decoding API.

This package provides:
- Synthetic bitmaps with believable size, config and description (bitmap)
- Identity keys per image source (keys)
- Test-supplied dimension hints (registry)
- Size resolution and decode-option side effects (engine)
- Best-effort header sniffing for anonymous streams (sniffer)

Usage:
    import image_double

    image_double.provide_dimension_hint("img.png", 30, 60)
    bitmap = image_double.decode_file("img.png")
    assert bitmap.size == (30, 60)
    image_double.reset_all_hints()
"""

from .bitmap import SyntheticBitmap
from .engine import ResolutionEngine
from .factory import (
    BitmapFactory,
    decode_byte_array,
    decode_file,
    decode_resource,
    decode_resource_stream,
    decode_stream,
    get_default_factory,
    provide_dimension_hint,
    provide_hint_for_file,
    provide_hint_for_resource,
    provide_hint_for_uri,
    register_resource,
    reset_all_hints,
    set_default_factory,
)
from .options import BitmapConfig, DecodeOptions
from .registry import HintRegistry
from .resources import ResourceTable
from .sniffer import HeaderSniffer, PillowHeaderSniffer, PyvipsHeaderSniffer, create_sniffer
from .streams import NamedStream

__all__ = [
    "BitmapConfig",
    "BitmapFactory",
    "DecodeOptions",
    "HeaderSniffer",
    "HintRegistry",
    "NamedStream",
    "PillowHeaderSniffer",
    "PyvipsHeaderSniffer",
    "ResolutionEngine",
    "ResourceTable",
    "SyntheticBitmap",
    "create_sniffer",
    "decode_byte_array",
    "decode_file",
    "decode_resource",
    "decode_resource_stream",
    "decode_stream",
    "get_default_factory",
    "provide_dimension_hint",
    "provide_hint_for_file",
    "provide_hint_for_resource",
    "provide_hint_for_uri",
    "register_resource",
    "reset_all_hints",
    "set_default_factory",
]
