# duckspider

A small crawling framework. You describe a spider (its name, its start URLs
and a callback), and the engine schedules requests, fetches them with a pool
of worker threads and hands each downloaded body, as a string, to the
request's callback. Whatever the callback yields is routed back into the
engine: new `Request` objects are scheduled, `StrictItem` objects are printed
(their fields as a dict), and anything else prints an empty line.

## Installation

```
pip install duckspider
```

## Configuration

Each spider reads a YAML settings file, by default `config/config.yaml`
under the current working directory (`MakeSpider.settings_path` overrides
it):

```yaml
Spider:
  SpiderName: demo
  WorkerNumber: 8
  TLS: false
  LOGLEVEL: info
Headers:
  User-Agent: duckspider
Cookies:
  session: placeholder
```

`duckspider.spider.load_settings(path)` reads such a file with
`duckspider.settings.parse_setting` and flattens it into a
`SettingManager`. The keys it stores are `Spider.Name`, `Spider.Worker`,
`Spider.TLS`, `Spider.LOGLEVEL`, and one `Headers.<name>` or
`Cookies.<name>` key per entry. Values are strings, read back with
`get_setting` (returns `None` when missing), `get_int(name, default)` and
`get_bool(name)`. A document with values of the wrong type (for example a
non-integer `WorkerNumber`) raises `ValueError`.

The engine sizes its worker pool from the `Spider.WorkerNumber` key and falls
back to 8 when it is absent; note that the YAML loader stores `WorkerNumber`
under `Spider.Worker`, so the pool size only changes when
`Spider.WorkerNumber` is set on the manager with `set_setting`.
`Spider.LOGLEVEL` sets the log level (`debug`, `info`, `warn`/`warning`,
`error`, `fatal`, `panic`; anything else means `info`).

## A spider

```python
from duckspider.crawler import CrawlerProcess
from duckspider.downloader import Downloader
from duckspider.items import StrictItem
from duckspider.spider import MakeSpider


def parse(body):
    item = StrictItem(["body"])
    item.set("body", body)
    yield item


spider = MakeSpider(
    spider_name="demo",
    urls=["https://example.com/a", "https://example.com/b"],
    callback=parse,
    settings_path="config/config.yaml",
)

process = CrawlerProcess(downloader_factory=lambda: Downloader(simulate=False))
process.add_spider(spider)
process.start_crawlers()
```

If `MakeSpider.url` is set, only that one URL is requested; otherwise every
entry of `urls` is. Spiders are registered under their `Spider.Name` setting;
a second spider with a name already registered is skipped with a printed
warning, and a spider whose settings lack `Spider.Name` raises `KeyError`.
`start_crawlers` runs every registered crawler in its own thread, in name
order, and returns when all have finished. Your own spiders can also
subclass `duckspider.spider.BaseSpider` and implement `name`,
`start_requests` and `load_config`.

### The downloader

`Downloader()` is simulated by default: `fetch` waits `delay` seconds
(1.0), prints `Download Test Is => <url>` and returns the string
`"response"` without touching the network. `Downloader(simulate=False)`
performs a plain GET of the request URL, prints the status code and returns
the body decoded as UTF-8. `Downloader.idle()` tells whether any request is
in flight. Pass a `downloader_factory` to `CrawlerProcess` (or a
`downloader` to `Crawler` / `Engine`) to choose one.

## Selecting data from a page

```python
from duckspider.request import Request
from duckspider.response import build_data_selection

request = Request("https://example.com/")
page = build_data_selection(
    "https://example.com/",
    {"Content-Type": "text/html; charset=utf-8"},
    200,
    request,
    b"<html><body><p class='x'>hi</p></body></html>",
)

page.css("p.x").get()        # '<p class="x">hi</p>'
page.xpath("//p").get_all()  # every matching node rendered as HTML
page.regex(r"h\w")           # ['ht', 'hi', 'ht'], matched over the raw text
page.text()                  # the body decoded with the Content-Type charset
```

`xpath` and `css` return new selections and can be chained; `get` renders the
first selected node (or returns `""`), `get_all` renders all of them. An
invalid CSS selector raises `ValueError`. `json()` decodes the body as JSON.
The body may be given as bytes, a string or a binary file object.

## Items

`StrictItem(fields)` only accepts the fields named when it is created;
setting any other field (with `set` or `item[key] = value`) raises
`KeyError`. `get(key, default)` reads a field and `all()` returns a copy of
every field that has been set.

## Statistics and logging

`duckspider.logger.init_logger(name, level)` returns a `Logger` writing one
line per record to standard output and carrying a `Stats` collection in
`logger.stats`. `Logger.fatal` logs and exits with status 1; `Logger.panic`
logs and raises `RuntimeError`. `Stats.add_int` accumulates counters,
`Stats.add_string` stores notes, `Stats.render_table()` returns them as a
text table and `Stats.out_table_info()` prints it.

## What it does not do

- There is no command-line tool; crawls are started from Python code.
- Requests are not de-duplicated: every request yielded is scheduled.
- The real downloader only issues a plain GET; a request's `method`,
  `headers`, `body`, `cookies`, `proxy` and `priority` are carried but not
  used, and neither are the configured `Headers`, `Cookies` or `TLS` values.
- Callbacks receive the body string, not a `DataSelection`; call
  `build_data_selection` yourself to query it.
- Items are only printed; nothing is stored or exported.