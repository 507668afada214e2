"""Spider configuration: the YAML settings document and a flat key/value store."""

from __future__ import annotations

import re
import threading
from dataclasses import dataclass, field
from typing import Any, Mapping

import yaml

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")
_TRUE_WORDS = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE_WORDS = frozenset({"0", "f", "F", "FALSE", "false", "False"})

# Flat key suffix under "Spider." paired with the attribute it is read from.
_SPIDER_KEYS = (("Name", "name"), ("Worker", "worker"), ("TLS", "tls"), ("LOGLEVEL", "loglevel"))


@dataclass
class SpiderSection:
    """The ``Spider`` block of a settings document."""

    name: str = ""
    worker: int = 0
    tls: bool = False
    loglevel: str = ""


@dataclass
class Setting:
    """A whole settings document."""

    spider: SpiderSection = field(default_factory=SpiderSection)
    headers: dict[str, str] = field(default_factory=dict)
    cookies: dict[str, str] = field(default_factory=dict)


def _scalar_text(value: Any, where: str) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (Mapping, list, tuple, set)):
        raise ValueError(f"{where}: expected a scalar, got {type(value).__name__}")
    return str(value)


def _as_int(value: Any, where: str) -> int:
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{where}: expected an integer, got {value!r}")
    return value


def _as_bool(value: Any, where: str) -> bool:
    if value is None:
        return False
    if not isinstance(value, bool):
        raise ValueError(f"{where}: expected a boolean, got {value!r}")
    return value


def _string_map(value: Any, where: str) -> dict[str, str]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ValueError(f"{where}: expected a mapping, got {type(value).__name__}")
    return {str(key): _scalar_text(item, f"{where}.{key}") for key, item in value.items()}


def parse_setting(data: str | bytes | Mapping[str, Any] | None) -> Setting:
    """Build a :class:`Setting` from YAML text or an already loaded mapping."""
    if isinstance(data, (str, bytes)):
        data = yaml.safe_load(data)
    if data is None:
        return Setting()
    if not isinstance(data, Mapping):
        raise ValueError(f"settings document must be a mapping, got {type(data).__name__}")

    spider_block = data.get("Spider")
    if spider_block is None:
        spider_block = {}
    if not isinstance(spider_block, Mapping):
        raise ValueError("Spider: expected a mapping")

    spider = SpiderSection(
        name=_scalar_text(spider_block.get("SpiderName"), "Spider.SpiderName"),
        worker=_as_int(spider_block.get("WorkerNumber"), "Spider.WorkerNumber"),
        tls=_as_bool(spider_block.get("TLS"), "Spider.TLS"),
        loglevel=_scalar_text(spider_block.get("LOGLEVEL"), "Spider.LOGLEVEL"),
    )
    return Setting(
        spider=spider,
        headers=_string_map(data.get("Headers"), "Headers"),
        cookies=_string_map(data.get("Cookies"), "Cookies"),
    )


class SettingManager:
    """Thread-safe flat store of string settings keyed like ``Spider.Name``."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self.settings: dict[str, str] = {}

    def get_setting(self, key: str) -> str | None:
        """Return the value stored under ``key``, or ``None`` if absent."""
        with self._lock:
            return self.settings.get(key)

    def set_setting(self, key: str, value: str) -> None:
        with self._lock:
            self.settings[key] = value

    def get_int(self, name: str, default: int) -> int:
        """Return the setting as a decimal integer, or ``default``."""
        value = self.get_setting(name)
        if value is None or not _INT_PATTERN.fullmatch(value):
            return default
        return int(value)

    def get_bool(self, name: str) -> bool:
        """Return the setting as a boolean; missing or unparsable is ``False``."""
        value = self.get_setting(name)
        if value is None:
            return False
        return value in _TRUE_WORDS

    def load_from_setting(self, setting: Setting) -> None:
        """Flatten a :class:`Setting` into ``Section.Field`` keys."""
        for suffix, attribute in _SPIDER_KEYS:
            value = getattr(setting.spider, attribute)
            if isinstance(value, bool):
                text = "true" if value else "false"
            else:
                text = str(value)
            self.set_setting(f"Spider.{suffix}", text)
        for key, value in setting.headers.items():
            self.set_setting(f"Headers.{key}", value)
        for key, value in setting.cookies.items():
            self.set_setting(f"Cookies.{key}", value)