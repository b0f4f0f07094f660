"""SyntheticBitmap: the placeholder result of every decode call."""

from __future__ import annotations

from typing import Any

import numpy as np

from .options import DEFAULT_CONFIG, BitmapConfig

PROVENANCE_RES_ID = "res_id"
PROVENANCE_PATH = "path"
PROVENANCE_BYTES = "bytes"
PROVENANCE_STREAM = "stream"


class SyntheticBitmap:
    """A decoded-image stand-in with size, config and a readable description.

    The provenance marker records which entry operation produced the bitmap.
    It is only there for assertions; nothing in the engine reads it back.
    """

    def __init__(self, width: int = 1, height: int = 1, config: BitmapConfig = DEFAULT_CONFIG):
        self.width = width
        self.height = height
        self.config = config
        self.nine_patch_chunk: bytes | None = None
        self._description_parts: list[str] = []
        self._provenance: tuple[str, Any] | None = None

    def __repr__(self) -> str:
        return f"<SyntheticBitmap {self.description!r} {self.width}x{self.height} {self.config.label}>"

    @property
    def description(self) -> str:
        return "".join(self._description_parts)

    def append_description(self, text: str) -> None:
        self._description_parts.append(text)

    @property
    def size(self) -> tuple[int, int]:
        return self.width, self.height

    @property
    def is_nine_patch(self) -> bool:
        return self.nine_patch_chunk is not None

    # --- provenance -------------------------------------------------------

    def mark_provenance(self, kind: str, source: Any) -> None:
        if self._provenance is not None:
            raise RuntimeError(f"provenance already set to {self._provenance[0]!r}, refusing {kind!r}")
        self._provenance = (kind, source)

    @property
    def provenance(self) -> tuple[str, Any] | None:
        return self._provenance

    def _source_if(self, kind: str) -> Any:
        if self._provenance is not None and self._provenance[0] == kind:
            return self._provenance[1]
        return None

    @property
    def created_from_res_id(self) -> int | None:
        return self._source_if(PROVENANCE_RES_ID)

    @property
    def created_from_path(self) -> str | None:
        return self._source_if(PROVENANCE_PATH)

    @property
    def created_from_bytes(self) -> bytes | None:
        return self._source_if(PROVENANCE_BYTES)

    @property
    def created_from_stream(self) -> Any:
        return self._source_if(PROVENANCE_STREAM)

    # --- pixels -----------------------------------------------------------

    def to_array(self) -> np.ndarray:
        """Zero-filled pixel buffer shaped (height, width, channels)."""
        return np.zeros((self.height, self.width, self.config.channels), dtype=self.config.dtype)
