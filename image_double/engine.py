"""Resolution engine: turns an identity key and decode options into a bitmap.

Size precedence is hint, then caller fallback (usually sniffed from a
header), then the configured default. Sample-size scaling runs after that,
because hints and sniffed sizes are full-resolution dimensions.
"""

from __future__ import annotations

from .bitmap import SyntheticBitmap
from .logger import get_logger
from .metrics import ResolutionSource, metrics
from .options import DEFAULT_CONFIG, BitmapConfig, DecodeOptions
from .registry import HintRegistry

_logger = get_logger("engine")

DEFAULT_SIZE = (100, 100)


class ResolutionEngine:
    def __init__(
        self,
        registry: HintRegistry | None = None,
        default_size: tuple[int, int] = DEFAULT_SIZE,
        default_config: BitmapConfig = DEFAULT_CONFIG,
    ):
        self.registry = registry if registry is not None else HintRegistry()
        self.default_size = default_size
        self.default_config = default_config

    def resolve_size(self, key: str | None, fallback: tuple[int, int] | None = None) -> tuple[int, int]:
        hinted = self.registry.get(key)
        if hinted is not None:
            metrics.record_resolution(ResolutionSource.HINT)
            return hinted
        if fallback is not None:
            metrics.record_resolution(ResolutionSource.FALLBACK)
            return fallback
        metrics.record_resolution(ResolutionSource.DEFAULT)
        return self.default_size

    @staticmethod
    def scale(size: tuple[int, int], sample_size: int = 1) -> tuple[int, int]:
        """Divide by the sample size (when > 1); each axis is at least 1 either way."""
        w, h = size
        if sample_size > 1:
            w, h = w // sample_size, h // sample_size
        return max(1, w), max(1, h)

    def synthesize(
        self,
        key: str | None,
        options: DecodeOptions | None = None,
        fallback: tuple[int, int] | None = None,
    ) -> SyntheticBitmap:
        width, height = self.resolve_size(key, fallback)
        sample_size = options.sample_size if options is not None else 1
        width, height = self.scale((width, height), sample_size)

        config = self.default_config
        if options is not None and options.preferred_config is not None:
            config = options.preferred_config

        bitmap = SyntheticBitmap(width, height, config)
        bitmap.append_description("Bitmap" if key is None else "Bitmap for " + key)
        flags = options.active_flags() if options is not None else []
        if flags:
            bitmap.append_description(" with options ")
            bitmap.append_description(", ".join(flags))

        if options is not None:
            options.out_width = width
            options.out_height = height

        _logger.debug("synthesized %s", bitmap)
        return bitmap
