from __future__ import annotations

import json
from pathlib import Path

import pytest

import image_double
from image_double.factory import BitmapFactory, get_default_factory, set_default_factory
from image_double.options import BitmapConfig
from image_double.settings_manager import SETTINGS_ENV
from image_double.sniffer import PillowHeaderSniffer


@pytest.fixture
def fresh_default():
    set_default_factory(None)
    yield
    set_default_factory(None)


def test_module_level_resource_round_trip(fresh_default):
    image_double.register_resource(42, "drawable/an_image")
    image_double.provide_dimension_hint(42, 30, 60)
    bmp = image_double.decode_resource(42)
    assert bmp.size == (30, 60)
    assert bmp.created_from_res_id == 42


def test_reset_all_hints_clears_every_kind(fresh_default):
    image_double.provide_hint_for_resource(1, 2, 3)
    image_double.provide_hint_for_file("a.png", 2, 3)
    image_double.provide_hint_for_uri("content://a", 2, 3)
    assert len(get_default_factory().registry) == 3

    image_double.reset_all_hints()
    assert len(get_default_factory().registry) == 0
    assert image_double.decode_file("a.png").size == (100, 100)
    assert image_double.decode_resource(1).size == (100, 100)
    assert image_double.decode_stream(image_double.NamedStream("content://a")).size == (100, 100)


def test_module_level_byte_and_resource_stream(fresh_default):
    assert image_double.decode_byte_array(b"hello").description == "Bitmap for hello"
    bmp = image_double.decode_resource_stream(image_double.NamedStream("x.9.png"), "x.9.png")
    assert bmp.is_nine_patch


def test_default_factory_reads_settings(fresh_default, tmp_path: Path, monkeypatch):
    settings_path = tmp_path / "settings.json"
    settings_path.write_text(
        json.dumps({"default_width": 64, "default_height": 48, "default_config": "RGB_565", "sniffer": "pillow"}),
        encoding="utf-8",
    )
    monkeypatch.setenv(SETTINGS_ENV, str(settings_path))

    factory = get_default_factory()
    assert isinstance(factory.sniffer, PillowHeaderSniffer)
    bmp = image_double.decode_file("x.png")
    assert bmp.size == (64, 48)
    assert bmp.config is BitmapConfig.RGB_565


def test_set_default_factory(fresh_default):
    mine = BitmapFactory()
    set_default_factory(mine)
    image_double.provide_hint_for_file("b.png", 9, 9)
    assert mine.registry.get("file:b.png") == (9, 9)


def test_hints_do_not_leak_between_tests_part_one():
    image_double.provide_hint_for_file("leak.png", 7, 7)
    assert image_double.decode_file("leak.png").size == (7, 7)


def test_hints_do_not_leak_between_tests_part_two():
    assert image_double.decode_file("leak.png").size == (100, 100)


def test_unknown_sniffer_setting_does_not_break_default_factory(fresh_default, tmp_path: Path, monkeypatch):
    settings_path = tmp_path / "settings.json"
    settings_path.write_text(json.dumps({"sniffer": "imagemagick"}), encoding="utf-8")
    monkeypatch.setenv(SETTINGS_ENV, str(settings_path))

    image_double.reset_all_hints()
    assert get_default_factory().sniffer.name == "pyvips"
    assert image_double.decode_file("x.png").size == (100, 100)
