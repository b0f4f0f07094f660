from __future__ import annotations

import json
import os
from typing import Any

from .logger import get_logger
from .options import DEFAULT_CONFIG, BitmapConfig
from .sniffer import SNIFFERS

_logger = get_logger("settings")

SETTINGS_ENV = "IMAGE_DOUBLE_SETTINGS"


class SettingsManager:
    def __init__(self, settings_path: str | None = None):
        self.settings_path = settings_path
        self._settings: dict[str, Any] = {}
        self.load()

    DEFAULTS: dict[str, Any] = {
        "default_width": 100,
        "default_height": 100,
        "default_config": "ARGB_8888",
        "sniffer": "pyvips",
    }

    @classmethod
    def from_env(cls) -> SettingsManager:
        return cls(os.getenv(SETTINGS_ENV) or None)

    def load(self) -> None:
        try:
            if self.settings_path and os.path.exists(self.settings_path):
                with open(self.settings_path, encoding="utf-8") as f:
                    data = json.load(f)
                    if isinstance(data, dict):
                        self._settings = data
                        _logger.debug("settings loaded: %s", self.settings_path)
                        return
                    _logger.warning("settings file is not a JSON object: %s", self.settings_path)
        except (OSError, ValueError) as e:
            _logger.warning("settings load failed: %s", e)
        self._settings = {}

    def save(self) -> None:
        if not self.settings_path:
            return
        try:
            parent = os.path.dirname(self.settings_path)
            if parent:
                os.makedirs(parent, exist_ok=True)
            with open(self.settings_path, "w", encoding="utf-8") as f:
                json.dump(self._settings, f, ensure_ascii=False, indent=2)
            _logger.debug("settings saved: %s", self.settings_path)
        except OSError as e:
            _logger.error("settings save failed: %s", e)

    def get(self, key: str, default: Any = None) -> Any:
        if key in self._settings:
            return self._settings[key]
        if default is not None:
            return default
        return self.DEFAULTS.get(key)

    def has(self, key: str) -> bool:
        return key in self._settings

    def set(self, key: str, value: Any) -> None:
        self._settings[key] = value
        self.save()

    @property
    def data(self) -> dict[str, Any]:
        return self._settings

    def _positive_int(self, key: str) -> int:
        val = self.get(key)
        try:
            ival = int(val)
        except (TypeError, ValueError):
            ival = 0
        if ival < 1:
            _logger.warning("saved %s invalid: %r", key, val)
            return int(self.DEFAULTS[key])
        return ival

    @property
    def default_width(self) -> int:
        return self._positive_int("default_width")

    @property
    def default_height(self) -> int:
        return self._positive_int("default_height")

    @property
    def default_size(self) -> tuple[int, int]:
        return self.default_width, self.default_height

    @property
    def default_config(self) -> BitmapConfig:
        name = self.get("default_config")
        try:
            return BitmapConfig.from_name(str(name))
        except ValueError:
            _logger.warning("saved default_config invalid: %s", name)
            return DEFAULT_CONFIG

    @property
    def sniffer(self) -> str:
        val = self.get("sniffer")
        name = val.strip().lower() if isinstance(val, str) else ""
        if name not in SNIFFERS:
            _logger.warning("saved sniffer invalid: %r", val)
            return self.DEFAULTS["sniffer"]
        return name
