"""Identity keys for every kind of image source.

The same key is used to look up dimension hints and is embedded in the
bitmap description, so the formats here are part of the observable output.
"""

from __future__ import annotations

import os
import zlib
from typing import Any

from .streams import STREAM_PREFIX, NamedStream

RESOURCE_PREFIX = "resource:"
FILE_PREFIX = "file:"
CHECKSUM_LABEL = "byte array, checksum: "


def resource_key(resource_name: str) -> str:
    return RESOURCE_PREFIX + resource_name


def file_key(path: str | os.PathLike) -> str:
    return FILE_PREFIX + str(path)


def uri_key(uri: Any) -> str:
    # urllib.parse results render through geturl(); plain strings pass through.
    geturl = getattr(uri, "geturl", None)
    return geturl() if callable(geturl) else str(uri)


def stream_key(stream: Any) -> str | None:
    """Name of a NamedStream with the wrapper prefix stripped, else None."""
    if not isinstance(stream, NamedStream):
        return None
    return str(stream).removeprefix(STREAM_PREFIX)


def crc32(data: bytes) -> int:
    return zlib.crc32(data) & 0xFFFFFFFF


def _printable_ascii(chunk: bytes) -> str | None:
    try:
        text = chunk.decode("ascii")
    except UnicodeDecodeError:
        return None
    return text if text.isprintable() else None


def bytes_key(data: bytes, offset: int = 0, length: int | None = None) -> str:
    """Key for ``data[offset:offset + length]``.

    Printable ASCII content is its own key; anything else is named by its
    CRC-32. A sub-range adds `` bytes <offset>..<length>``.
    """
    total = len(data)
    if length is None:
        length = total - offset
    if offset < 0 or length < 0 or offset + length > total:
        raise ValueError(f"range offset={offset} length={length} outside buffer of {total} bytes")

    chunk = bytes(data[offset : offset + length])
    key = _printable_ascii(chunk)
    if key is None:
        key = CHECKSUM_LABEL + str(crc32(chunk))

    if offset != 0 or length != total:
        key += f" bytes {offset}..{length}"
    return key
