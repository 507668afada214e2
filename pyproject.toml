[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "duckspider"
version = "0.1.0"
description = "A small crawling framework with a scheduler, concurrent workers, HTML selections and strict items"
requires-python = ">=3.10"
keywords = ["crawler", "spider", "scraping", "xpath", "css", "html"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP",
    "Topic :: Software Development :: Libraries :: Python Modules",
]
dependencies = [
    "pyyaml",
    "lxml",
    "beautifulsoup4",
    "tabulate",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["duckspider"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
