from __future__ import annotations

from .logger import get_logger

_logger = get_logger("resources")


class ResourceTable:
    """Resource id -> resource name lookup used to build resource identity keys.

    Ids nobody registered resolve to their hex form (``0x7f020001``), so
    decoding an unknown id still produces a stable key.
    """

    def __init__(self, names: dict[int, str] | None = None):
        self._names: dict[int, str] = dict(names or {})

    def register(self, resource_id: int, name: str) -> None:
        self._names[int(resource_id)] = name

    def name_for_id(self, resource_id: int) -> str:
        name = self._names.get(resource_id)
        if name is None:
            name = f"0x{resource_id:08x}"
            _logger.debug("no name registered for resource %s, using %s", resource_id, name)
        return name

    def __contains__(self, resource_id: object) -> bool:
        return resource_id in self._names
