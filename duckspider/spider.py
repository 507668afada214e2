"""Spiders: where a crawl starts and where its settings come from."""

from __future__ import annotations

import os
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Iterator, Optional

from .request import Callback, Request
from .settings import SettingManager, parse_setting

_DEFAULT_CONFIG = os.path.join("config", "config.yaml")


def load_settings(path: str | os.PathLike) -> SettingManager:
    """Read a YAML settings file and return it flattened into a manager."""
    with open(path, "rb") as handle:
        data = handle.read()
    manager = SettingManager()
    manager.load_from_setting(parse_setting(data))
    return manager


class BaseSpider(ABC):
    """What the crawler needs from a spider."""

    @abstractmethod
    def name(self) -> str:
        """Return the spider's name."""

    @abstractmethod
    def start_requests(self) -> Iterator[Request]:
        """Yield the requests the crawl starts from."""

    @abstractmethod
    def load_config(self) -> SettingManager:
        """Return the spider's settings."""


@dataclass
class MakeSpider(BaseSpider):
    """A spider built from a start URL (or URLs) and a single callback."""

    spider_name: str = ""
    urls: list[str] = field(default_factory=list)
    url: str = ""
    callback: Optional[Callback] = None
    settings_path: str = ""

    def name(self) -> str:
        return self.spider_name

    def load_config(self) -> SettingManager:
        """Load settings from ``settings_path`` or ``./config/config.yaml``."""
        path = self.settings_path or os.path.join(os.getcwd(), _DEFAULT_CONFIG)
        return load_settings(path)

    def start_requests(self) -> Iterator[Request]:
        """Yield ``url`` alone if it is set, otherwise every entry of ``urls``."""
        if self.url:
            yield Request(self.url, callback=self.callback)
            return
        for url in self.urls:
            yield Request(url, callback=self.callback)