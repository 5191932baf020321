"""
SiteMapper package initializer.
Defines the package version and exposes the CLI.
"""
__version__ = "0.1.0"

from .cli import cli  # noqa: E402
from .crawler import SiteMapCrawler, WebUrl  # noqa: E402

__all__ = ["__version__", "cli", "SiteMapCrawler", "WebUrl"]
