"""Decode statistics: how each synthetic bitmap got its size.

Tests use this to check which path a decode took (hint, sniffed fallback or
default) without parsing descriptions.

Usage:
    from image_double.metrics import ResolutionSource, metrics
    metrics.record_resolution(ResolutionSource.HINT)
    with metrics.sniffing() as sniff:
        sniff.size = sniffer_result
    assert metrics.resolutions[ResolutionSource.HINT] == 1
"""

from __future__ import annotations

import time
from collections import Counter
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from threading import RLock
from typing import Any


class ResolutionSource(Enum):
    HINT = "hint"
    FALLBACK = "fallback"
    DEFAULT = "default"


@dataclass
class SniffRecord:
    """Filled in by the sniffer inside ``DecodeMetrics.sniffing()``."""

    size: tuple[int, int] | None = None


class DecodeMetrics:
    def __init__(self) -> None:
        self._lock = RLock()
        self.decodes: Counter[str] = Counter()
        self.resolutions: Counter[ResolutionSource] = Counter()
        self.sniff_durations: list[float] = []
        self.sniff_unrecognized = 0

    def record_decode(self, entry: str) -> None:
        with self._lock:
            self.decodes[entry] += 1

    def record_resolution(self, source: ResolutionSource) -> None:
        with self._lock:
            self.resolutions[source] += 1

    @contextmanager
    def sniffing(self):
        """Time one sniff; an unrecognized result (size left None) is counted too.

        A sniff that raises is timed but not counted as unrecognized.
        """
        record = SniffRecord()
        start = time.perf_counter()
        failed = True
        try:
            yield record
            failed = False
        finally:
            elapsed = time.perf_counter() - start
            with self._lock:
                self.sniff_durations.append(elapsed)
                if not failed and record.size is None:
                    self.sniff_unrecognized += 1

    @property
    def sniff_count(self) -> int:
        return len(self.sniff_durations)

    def snapshot(self) -> dict[str, Any]:
        with self._lock:
            return {
                "decodes": dict(self.decodes),
                "resolutions": {s.value: n for s, n in self.resolutions.items()},
                "sniffs": {
                    "count": len(self.sniff_durations),
                    "unrecognized": self.sniff_unrecognized,
                    "durations": list(self.sniff_durations),
                },
            }

    def reset(self) -> None:
        with self._lock:
            self.decodes.clear()
            self.resolutions.clear()
            self.sniff_durations.clear()
            self.sniff_unrecognized = 0


metrics = DecodeMetrics()
