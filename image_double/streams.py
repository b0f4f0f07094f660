from __future__ import annotations

import io

STREAM_PREFIX = "stream for "


class NamedStream(io.BytesIO):
    """In-memory stream that knows which image it stands for.

    Decoding a NamedStream uses its name as the identity key and never sniffs
    the bytes, so the content may be empty.
    """

    def __init__(self, name: str, data: bytes = b""):
        super().__init__(data)
        self.name = name

    def __str__(self) -> str:
        return STREAM_PREFIX + self.name

    def __repr__(self) -> str:
        return f"<NamedStream {self.name!r}>"
