import io

import pytest

from image_double.engine import ResolutionEngine
from image_double.factory import BitmapFactory
from image_double.metrics import DecodeMetrics, ResolutionSource, metrics
from image_double.registry import HintRegistry
from image_double.sniffer import PillowHeaderSniffer
from image_double.streams import NamedStream


def test_resolution_sources_are_counted_per_path():
    metrics.reset()
    registry = HintRegistry()
    registry.put("hinted", 1, 1)
    engine = ResolutionEngine(registry)
    engine.synthesize("hinted")
    engine.synthesize(None, fallback=(2, 2))
    engine.synthesize("missing")
    engine.synthesize("missing")
    assert metrics.resolutions[ResolutionSource.HINT] == 1
    assert metrics.resolutions[ResolutionSource.FALLBACK] == 1
    assert metrics.resolutions[ResolutionSource.DEFAULT] == 2
    assert metrics.snapshot()["resolutions"] == {"hint": 1, "fallback": 1, "default": 2}


def test_decodes_are_counted_per_entry_point():
    metrics.reset()
    factory = BitmapFactory(sniffer=PillowHeaderSniffer())
    factory.decode_file("a.png")
    factory.decode_file("b.png")
    factory.decode_byte_array(b"abc")
    factory.decode_stream(NamedStream("n"))
    assert metrics.snapshot()["decodes"] == {"file": 2, "byte_array": 1, "stream": 1}


def test_sniffs_are_timed_and_unrecognized_counted(make_png):
    metrics.reset()
    sniffer = PillowHeaderSniffer()
    sniffer.sniff(io.BytesIO(make_png(4, 4)))
    sniffer.sniff(io.BytesIO(b"not an image"))
    sniffs = metrics.snapshot()["sniffs"]
    assert sniffs["count"] == 2
    assert sniffs["unrecognized"] == 1
    assert len(sniffs["durations"]) == 2


def test_failed_sniff_is_timed_but_not_unrecognized():
    stats = DecodeMetrics()
    with pytest.raises(OSError):
        with stats.sniffing():
            raise OSError("read failed")
    assert stats.sniff_count == 1
    assert stats.sniff_unrecognized == 0


def test_reset_clears_everything():
    stats = DecodeMetrics()
    stats.record_decode("file")
    stats.record_resolution(ResolutionSource.DEFAULT)
    with stats.sniffing():
        pass
    stats.reset()
    assert stats.snapshot() == {
        "decodes": {},
        "resolutions": {},
        "sniffs": {"count": 0, "unrecognized": 0, "durations": []},
    }
