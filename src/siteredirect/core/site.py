"""Site application: directory layout and page discovery.

Pages are discovered from Markdown sources under the source directory.
README.md and index.md map to their directory path ("/guide/"), any other
file maps to "<name>.html" ("/guide/setup.html").
"""

import asyncio
import json
import logging
import re
from dataclasses import dataclass
from pathlib import Path

from siteredirect.config import DEFAULT_MODE, AppConfig
from siteredirect.core.cache import PageCache
from siteredirect.core.types import URLPath

logger = logging.getLogger(__name__)

PAGES_DATA_FILENAME = "pages.json"

_INDEX_NAMES = frozenset({"readme.md", "index.md"})
_SKIPPED_DIRS = frozenset({"node_modules"})
_H1_PATTERN = re.compile(r"^#[ \t]+(.+?)(?:[ \t]+#+)?[ \t]*$")
_FENCE_PATTERN = re.compile(r"^ {0,3}(`{3,}|~{3,})")


@dataclass(frozen=True)
class Page:
    """Discovered page data."""

    path: URLPath
    title: str
    source_path: Path


class SiteDirs:
    """Absolute directories of a site, joined with optional extra segments."""

    __slots__ = ("_config",)

    def __init__(self, config: AppConfig) -> None:
        self._config = config

    def source(self, *parts: str) -> Path:
        return self._config.source.joinpath(*parts)

    def temp(self, *parts: str) -> Path:
        return self._config.temp.joinpath(*parts)

    def cache(self, *parts: str) -> Path:
        return self._config.cache.joinpath(*parts)


class SiteApp:
    """Site application built from a resolved config.

    `pages` stays empty until `init()` has discovered them.
    """

    def __init__(self, config: AppConfig, *, mode: str = DEFAULT_MODE) -> None:
        """Initialize site application.

        Args:
            config: Resolved site configuration
            mode: Execution mode recorded with prepared data
        """
        self.options = config
        self.mode = mode
        self.dir = SiteDirs(config)
        self.pages: list[Page] = []

    async def init(self) -> None:
        """Discover pages and write prepared page data to the temp directory.

        Raises:
            FileNotFoundError: If the source directory doesn't exist
        """
        source_dir = self.dir.source()
        if not source_dir.is_dir():
            raise FileNotFoundError(f"Source directory not found: {source_dir}")

        logger.debug(f"Discovering pages in {source_dir} ({self.mode} mode)")
        self.pages = await asyncio.to_thread(self._load_pages)
        await asyncio.to_thread(self._write_pages_data)
        logger.info(f"Discovered {len(self.pages)} pages")

    def _load_pages(self) -> list[Page]:
        source_dir = self.dir.source()
        cache = PageCache(self.dir.cache())
        pages = [
            self._load_page(source_dir, source_path.relative_to(source_dir), cache)
            for source_path in source_dir.rglob("*.md")
            if source_path.is_file() and _is_page_source(source_path.relative_to(source_dir))
        ]
        return sorted(pages, key=lambda page: page.path)

    def _load_page(self, source_dir: Path, source_path: Path, cache: PageCache) -> Page:
        full_path = source_dir / source_path
        source_mtime = full_path.stat().st_mtime

        cached = cache.get(source_path, source_mtime)
        if cached is not None:
            title = cached.title
        else:
            title = extract_title(full_path.read_text(encoding="utf-8")) or _title_from_stem(
                source_path,
            )
            cache.set(source_path, title, source_mtime)

        return Page(path=page_path_for(source_path), title=title, source_path=source_path)

    def _write_pages_data(self) -> None:
        temp_dir = self.dir.temp()
        temp_dir.mkdir(parents=True, exist_ok=True)
        data = {
            "mode": self.mode,
            "title": self.options.title,
            "base": self.options.base,
            "pages": [
                {"path": page.path, "title": page.title, "source": page.source_path.as_posix()}
                for page in self.pages
            ],
        }
        (temp_dir / PAGES_DATA_FILENAME).write_text(
            json.dumps(data, ensure_ascii=False, indent=2),
            encoding="utf-8",
        )


def page_path_for(source_path: Path) -> URLPath:
    """Map a Markdown source path to its page URL path.

    Args:
        source_path: Source path relative to the source directory

    Returns:
        Page URL path (e.g., "/", "/guide/", "/guide/setup.html")
    """
    parent = source_path.parent.as_posix()
    prefix = "/" if parent == "." else f"/{parent}/"
    if source_path.name.lower() in _INDEX_NAMES:
        return URLPath(prefix)
    return URLPath(f"{prefix}{source_path.stem}.html")


def extract_title(text: str) -> str | None:
    """Return the text of the first level-one heading, if any.

    Lines inside fenced code blocks are not headings.
    """
    fence: str | None = None
    for line in text.splitlines():
        fence_match = _FENCE_PATTERN.match(line)
        if fence_match is not None:
            marker = fence_match.group(1)
            if fence is None:
                fence = marker
            elif marker[0] == fence[0] and len(marker) >= len(fence):
                fence = None
            continue
        if fence is not None:
            continue
        match = _H1_PATTERN.match(line)
        if match is not None:
            return match.group(1)
    return None


def _title_from_stem(source_path: Path) -> str:
    """Humanize a file name ("setup-guide.md" -> "Setup Guide")."""
    stem = source_path.stem
    if stem.lower() in ("readme", "index") and source_path.parent.name:
        stem = source_path.parent.name
    return stem.replace("-", " ").replace("_", " ").title()


def _is_page_source(source_path: Path) -> bool:
    """Skip hidden and partial files and anything inside such directories."""
    for part in source_path.parts:
        if part.startswith((".", "_")) or part in _SKIPPED_DIRS:
            return False
    return True
