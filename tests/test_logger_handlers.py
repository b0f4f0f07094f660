import logging
import sys

from image_double import logger as id_logger


def test_setup_logger_idempotent_handlers():
    """Calling setup_logger() repeatedly should leave exactly one stderr StreamHandler."""
    base = id_logger.setup_logger(level=logging.DEBUG)
    _ = id_logger.setup_logger(level=logging.DEBUG)

    handlers = [
        h for h in base.handlers if isinstance(h, logging.StreamHandler) and getattr(h, "stream", None) is sys.stderr
    ]
    assert len(handlers) == 1
    assert base.propagate is False


def test_env_level_override(monkeypatch):
    monkeypatch.setenv("IMAGE_DOUBLE_LOG_LEVEL", "warning")
    base = id_logger.setup_logger(level=logging.DEBUG)
    assert base.level == logging.WARNING
    monkeypatch.delenv("IMAGE_DOUBLE_LOG_LEVEL")
    id_logger.setup_logger()


def _stderr_handler(base):
    return next(h for h in base.handlers if getattr(h, "stream", None) is sys.stderr)


def test_category_filter(monkeypatch):
    monkeypatch.setenv("IMAGE_DOUBLE_LOG_CATS", "engine, sniffer")
    base = id_logger.setup_logger()
    handler = _stderr_handler(base)
    assert len(handler.filters) == 1
    flt = handler.filters[0]

    def record(name):
        return logging.LogRecord(name, logging.INFO, __file__, 1, "msg", None, None)

    assert flt.filter(record("image_double.engine"))
    assert not flt.filter(record("image_double.registry"))

    monkeypatch.delenv("IMAGE_DOUBLE_LOG_CATS")
    assert _stderr_handler(id_logger.setup_logger()).filters == []


def test_get_logger_child_name():
    assert id_logger.get_logger("engine").name == "image_double.engine"
    assert id_logger.get_logger().name == "image_double"
