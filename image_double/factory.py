"""BitmapFactory: the decode entry points a test double answers.

Each entry point derives an identity key for its input, asks the header
sniffer for a fallback size when decoding an anonymous stream, and lets the
ResolutionEngine build the SyntheticBitmap.

Usage:
    from image_double import BitmapFactory, DecodeOptions

    factory = BitmapFactory()
    factory.provide_hint_for_file("img.png", 640, 480)
    bitmap = factory.decode_file("img.png", DecodeOptions(sample_size=2))
    assert bitmap.size == (320, 240)
"""

from __future__ import annotations

import os
from typing import Any, BinaryIO

from .bitmap import (
    PROVENANCE_BYTES,
    PROVENANCE_PATH,
    PROVENANCE_RES_ID,
    PROVENANCE_STREAM,
    SyntheticBitmap,
)
from .engine import ResolutionEngine
from .keys import bytes_key, file_key, resource_key, stream_key, uri_key
from .logger import get_logger
from .metrics import metrics
from .options import DecodeOptions
from .registry import HintRegistry
from .resources import ResourceTable
from .settings_manager import SettingsManager
from .sniffer import HeaderSniffer, create_sniffer

_logger = get_logger("factory")

NINE_PATCH_MARKER = ".9."


class BitmapFactory:
    def __init__(
        self,
        registry: HintRegistry | None = None,
        resources: ResourceTable | None = None,
        sniffer: HeaderSniffer | None = None,
        engine: ResolutionEngine | None = None,
    ):
        # The engine owns the registry it resolves against; a passed engine wins.
        if engine is None:
            engine = ResolutionEngine(registry if registry is not None else HintRegistry())
        self.engine = engine
        self.registry = engine.registry
        self.resources = resources if resources is not None else ResourceTable()
        self.sniffer = sniffer if sniffer is not None else create_sniffer("pyvips")

    @classmethod
    def from_settings(cls, settings: SettingsManager) -> BitmapFactory:
        engine = ResolutionEngine(HintRegistry(), settings.default_size, settings.default_config)
        return cls(sniffer=create_sniffer(settings.sniffer), engine=engine)

    # --- decode entry points --------------------------------------------

    def decode_resource(self, resource_id: int, options: DecodeOptions | None = None) -> SyntheticBitmap:
        metrics.record_decode("resource")
        key = resource_key(self.resources.name_for_id(resource_id))
        bitmap = self.engine.synthesize(key, options)
        bitmap.mark_provenance(PROVENANCE_RES_ID, resource_id)
        return bitmap

    def decode_file(self, path: str | os.PathLike, options: DecodeOptions | None = None) -> SyntheticBitmap:
        metrics.record_decode("file")
        bitmap = self.engine.synthesize(file_key(path), options)
        bitmap.mark_provenance(PROVENANCE_PATH, path)
        return bitmap

    def decode_byte_array(
        self,
        data: bytes,
        offset: int = 0,
        length: int | None = None,
        options: DecodeOptions | None = None,
    ) -> SyntheticBitmap:
        metrics.record_decode("byte_array")
        bitmap = self.engine.synthesize(bytes_key(data, offset, length), options)
        bitmap.mark_provenance(PROVENANCE_BYTES, data)
        return bitmap

    def decode_stream(self, stream: BinaryIO, options: DecodeOptions | None = None) -> SyntheticBitmap:
        metrics.record_decode("stream")
        key = stream_key(stream)
        # Named streams carry their identity; only anonymous ones get sniffed.
        fallback = self.sniffer.sniff(stream) if key is None else None
        bitmap = self.engine.synthesize(key, options, fallback)
        bitmap.mark_provenance(PROVENANCE_STREAM, stream)
        return bitmap

    def decode_resource_stream(
        self,
        stream: BinaryIO,
        value: str | None = None,
        options: DecodeOptions | None = None,
    ) -> SyntheticBitmap:
        """Decode a stream opened for a resource whose file name is ``value``.

        ``foo.9.png`` style names mark the bitmap as a nine-patch.
        """
        bitmap = self.decode_stream(stream, options)
        if value is not None and NINE_PATCH_MARKER in str(value):
            # TODO: parse the real chunk out of the PNG once callers need padding data.
            bitmap.nine_patch_chunk = b""
        return bitmap

    # --- test setup ------------------------------------------------------

    def provide_hint_for_resource(self, resource_id: int, width: int, height: int) -> None:
        self.registry.put(resource_key(self.resources.name_for_id(resource_id)), width, height)

    def provide_hint_for_file(self, path: str | os.PathLike, width: int, height: int) -> None:
        self.registry.put(file_key(path), width, height)

    def provide_hint_for_uri(self, uri: Any, width: int, height: int) -> None:
        self.registry.put(uri_key(uri), width, height)

    def provide_dimension_hint(self, source: Any, width: int, height: int) -> None:
        """Route a hint by source type: int resource id, str/PathLike file, urllib.parse result URI."""
        if isinstance(source, int) and not isinstance(source, bool):
            self.provide_hint_for_resource(source, width, height)
        elif isinstance(source, (str, os.PathLike)):
            self.provide_hint_for_file(source, width, height)
        elif callable(getattr(source, "geturl", None)):
            self.provide_hint_for_uri(source, width, height)
        else:
            raise TypeError(f"Unsupported hint source: {type(source).__name__}")

    def register_resource(self, resource_id: int, name: str) -> None:
        self.resources.register(resource_id, name)

    def reset(self) -> None:
        self.registry.clear()
        _logger.debug("hints cleared")


_default_factory: BitmapFactory | None = None


def get_default_factory() -> BitmapFactory:
    """Process-wide factory behind the module-level functions, built from IMAGE_DOUBLE_SETTINGS."""
    global _default_factory
    if _default_factory is None:
        _default_factory = BitmapFactory.from_settings(SettingsManager.from_env())
    return _default_factory


def set_default_factory(factory: BitmapFactory | None) -> None:
    global _default_factory
    _default_factory = factory


def decode_resource(resource_id: int, options: DecodeOptions | None = None) -> SyntheticBitmap:
    return get_default_factory().decode_resource(resource_id, options)


def decode_file(path: str | os.PathLike, options: DecodeOptions | None = None) -> SyntheticBitmap:
    return get_default_factory().decode_file(path, options)


def decode_byte_array(
    data: bytes, offset: int = 0, length: int | None = None, options: DecodeOptions | None = None
) -> SyntheticBitmap:
    return get_default_factory().decode_byte_array(data, offset, length, options)


def decode_stream(stream: BinaryIO, options: DecodeOptions | None = None) -> SyntheticBitmap:
    return get_default_factory().decode_stream(stream, options)


def decode_resource_stream(
    stream: BinaryIO, value: str | None = None, options: DecodeOptions | None = None
) -> SyntheticBitmap:
    return get_default_factory().decode_resource_stream(stream, value, options)


def provide_dimension_hint(source: Any, width: int, height: int) -> None:
    get_default_factory().provide_dimension_hint(source, width, height)


def provide_hint_for_resource(resource_id: int, width: int, height: int) -> None:
    get_default_factory().provide_hint_for_resource(resource_id, width, height)


def provide_hint_for_file(path: str | os.PathLike, width: int, height: int) -> None:
    get_default_factory().provide_hint_for_file(path, width, height)


def provide_hint_for_uri(uri: Any, width: int, height: int) -> None:
    get_default_factory().provide_hint_for_uri(uri, width, height)


def register_resource(resource_id: int, name: str) -> None:
    get_default_factory().register_resource(resource_id, name)


def reset_all_hints() -> None:
    get_default_factory().reset()
