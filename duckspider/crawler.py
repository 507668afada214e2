"""Crawlers and running several spiders at once."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Optional

from .downloader import Downloader
from .engine import Engine
from .spider import BaseSpider


class Crawler:
    """One spider together with its settings and engine."""

    def __init__(self, spider: BaseSpider, downloader: Optional[Downloader] = None) -> None:
        self.spider = spider
        self.settings = spider.load_config()
        self.log_level = self.settings.get_setting("Spider.LOGLEVEL") or ""
        self.downloader = downloader
        self.engine: Optional[Engine] = None

    def crawl(self) -> None:
        """Run the spider to completion."""
        self.engine = Engine(self, self.downloader)
        self.engine.start(self.spider, self.settings)


class CrawlerProcess:
    """Registers spiders by configured name and runs them concurrently."""

    def __init__(self, downloader_factory: Optional[Callable[[], Downloader]] = None) -> None:
        self._downloader_factory = downloader_factory
        self._crawlers: dict[str, Crawler] = {}

    @property
    def names(self) -> list[str]:
        """Registered spider names in sorted order."""
        return sorted(self._crawlers)

    def add_spider(self, spider: BaseSpider) -> None:
        """Register ``spider`` under its ``Spider.Name`` setting; skip duplicates."""
        crawler = self.create_crawler(spider)
        name = crawler.settings.get_setting("Spider.Name")
        if name is None:
            raise KeyError("未获取到Spider.Name")
        if name in self._crawlers:
            print(f"[警告] 爬虫 {name} 已存在，跳过注册")
            return
        self._crawlers[name] = crawler

    def create_crawler(self, spider: BaseSpider) -> Crawler:
        downloader = self._downloader_factory() if self._downloader_factory else None
        return Crawler(spider, downloader)

    def start_crawlers(self) -> None:
        self.crawl()

    def crawl(self) -> None:
        """Run every registered crawler in its own thread and wait for all."""
        crawlers = [self._crawlers[name] for name in self.names]
        if not crawlers:
            return
        with ThreadPoolExecutor(max_workers=len(crawlers)) as pool:
            futures = [pool.submit(crawler.crawl) for crawler in crawlers]
        for future in futures:
            future.result()