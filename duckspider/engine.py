"""The crawl loop: schedule requests, download them, route callback output."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING, Any, Iterable, Optional

from .downloader import Downloader
from .items import StrictItem
from .logger import Logger, init_logger
from .request import Request
from .scheduler import Scheduler
from .settings import SettingManager
from .spider import BaseSpider

if TYPE_CHECKING:
    from .crawler import Crawler

_DEFAULT_WORKERS = 8


class Engine:
    """Drives one spider's crawl with a pool of download workers."""

    def __init__(self, crawler: Optional["Crawler"] = None,
                 downloader: Optional[Downloader] = None) -> None:
        self.crawler = crawler
        self.downloader = downloader if downloader is not None else Downloader()
        self.scheduler = Scheduler()
        self.settings: Optional[SettingManager] = None
        self.spider: Optional[BaseSpider] = None
        self.logger: Optional[Logger] = None

    def start(self, spider: BaseSpider, settings: SettingManager) -> None:
        """Set up logging and run the spider to completion."""
        self.spider = spider
        self.settings = settings
        level = self.crawler.log_level if self.crawler is not None else ""
        self.logger = init_logger(spider.name(), level)
        self.logger.info("Starting spider %s", spider.name())
        self.open_spider(spider)

    def open_spider(self, spider: BaseSpider) -> None:
        self.crawl(spider)

    def crawl(self, spider: BaseSpider) -> None:
        """Alternate between draining the scheduler and taking start requests."""
        start = iter(spider.start_requests())
        while True:
            if not self.scheduler.is_empty():
                self._crawl()
                continue
            request = next(start, None)
            if request is None:
                break
            self.en_request(request)
            if self.scheduler.is_empty() and self.downloader.idle():
                break

    def _worker_count(self) -> int:
        if self.settings is None:
            return _DEFAULT_WORKERS
        return self.settings.get_int("Spider.WorkerNumber", _DEFAULT_WORKERS)

    def _crawl(self) -> None:
        futures = []
        with ThreadPoolExecutor(max_workers=max(1, self._worker_count())) as pool:
            while (request := self.get_next_request()) is not None:
                futures.append(pool.submit(self._work, request))
        for future in futures:
            future.result()

    def _work(self, request: Request) -> None:
        outputs = self.fetch(request)
        if outputs is not None:
            for output in outputs:
                self.diversion(output)

    def fetch(self, request: Request) -> Optional[Iterable[Any]]:
        """Download ``request`` and return what its callback produces, if any."""
        response = self.downloader.fetch(request)
        if request.callback is not None:
            return request.callback(response)
        return None

    def diversion(self, output: Any) -> None:
        """Schedule requests, print items, print a blank line for anything else."""
        if isinstance(output, Request):
            self.en_request(output)
        elif isinstance(output, StrictItem):
            print(output.all())
        else:
            print("")

    def en_request(self, request: Request) -> None:
        self.schedule_request(request)

    def schedule_request(self, request: Request) -> None:
        self.scheduler.en_request(request)

    def get_next_request(self) -> Optional[Request]:
        return self.scheduler.next_request()