from __future__ import annotations

from .logger import get_logger

_logger = get_logger("registry")


class HintRegistry:
    """Identity key -> (width, height) overrides supplied by test setup.

    Not locked: callers are expected to serialize setup, decode and reset.
    """

    def __init__(self) -> None:
        self._hints: dict[str, tuple[int, int]] = {}

    def put(self, key: str | None, width: int, height: int) -> None:
        if key is None:
            _logger.debug("hint without identity key ignored: %dx%d", width, height)
            return
        self._hints[key] = (int(width), int(height))
        _logger.debug("hint %s -> %dx%d", key, width, height)

    def get(self, key: str | None) -> tuple[int, int] | None:
        if key is None:
            return None
        return self._hints.get(key)

    def clear(self) -> None:
        self._hints.clear()

    def __len__(self) -> int:
        return len(self._hints)

    def __contains__(self, key: object) -> bool:
        return key is not None and key in self._hints
