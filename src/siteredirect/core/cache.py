"""File-based page metadata cache with mtime invalidation.

Cache structure:
    .cache/
    ├── .gitignore
    └── pages/
        └── guide/
            └── setup.md.json    # {"title": ..., "source_mtime": ...}
"""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import TypedDict


class CachedPage(TypedDict):
    """Cached page metadata structure."""

    title: str
    source_mtime: float


@dataclass
class CacheEntry:
    """Result of cache lookup."""

    title: str


class PageCache:
    """File-based cache for metadata extracted from page sources.

    Uses source file mtime for invalidation. Cache entries are considered valid
    when the cached mtime matches the current source file mtime.
    """

    _GITIGNORE_CONTENT = "# Ignore everything in this directory\n*\n"

    def __init__(self, cache_dir: Path) -> None:
        """Initialize cache with directory path.

        Args:
            cache_dir: Root directory for cache files (e.g., .vuepress/.cache/)
        """
        self._cache_dir = cache_dir
        self._pages_dir = cache_dir / "pages"

    def _ensure_cache_dir(self) -> None:
        """Create cache directory with .gitignore if it doesn't exist."""
        if not self._cache_dir.exists():
            self._cache_dir.mkdir(parents=True, exist_ok=True)
            gitignore_path = self._cache_dir / ".gitignore"
            gitignore_path.write_text(self._GITIGNORE_CONTENT, encoding="utf-8")

    def _entry_path(self, source_path: Path) -> Path:
        return self._pages_dir / f"{source_path.as_posix()}.json"

    def get(self, source_path: Path, source_mtime: float) -> CacheEntry | None:
        """Retrieve cached entry if valid.

        Args:
            source_path: Page source path relative to the source directory
            source_mtime: Current mtime of source file

        Returns:
            CacheEntry if cache hit and valid, None otherwise
        """
        entry_path = self._entry_path(source_path)
        if not entry_path.exists():
            return None

        try:
            data = json.loads(entry_path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError):
            return None

        if not isinstance(data, dict):
            return None
        if data.get("source_mtime") != source_mtime:
            return None
        title = data.get("title")
        if not isinstance(title, str):
            return None

        return CacheEntry(title=title)

    def set(self, source_path: Path, title: str, source_mtime: float) -> None:
        """Store entry in cache.

        Args:
            source_path: Page source path relative to the source directory
            title: Extracted page title
            source_mtime: Source file mtime for invalidation
        """
        self._ensure_cache_dir()

        entry_path = self._entry_path(source_path)
        entry_path.parent.mkdir(parents=True, exist_ok=True)

        entry: CachedPage = {"title": title, "source_mtime": source_mtime}
        entry_path.write_text(json.dumps(entry), encoding="utf-8")
