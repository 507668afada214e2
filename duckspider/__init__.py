"""A small crawling framework: spiders, a scheduler, a downloader and HTML selections."""

__version__ = "0.1.0"
__all__ = [
    "crawler",
    "downloader",
    "engine",
    "items",
    "logger",
    "request",
    "response",
    "scheduler",
    "settings",
    "spider",
]