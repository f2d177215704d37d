"""Cache, temp and output directory lifecycle.

All operations are idempotent: removing a directory that does not exist
is a no-op.
"""

import asyncio
import logging
import shutil
from collections.abc import Iterable
from pathlib import Path

from siteredirect.core.site import SiteApp

logger = logging.getLogger(__name__)


async def remove_dir(path: Path) -> None:
    """Recursively remove a directory if it exists.

    Args:
        path: Directory to remove
    """
    if not path.exists():
        logger.debug(f"Nothing to remove at {path}")
        return
    logger.debug(f"Removing {path}")
    await asyncio.to_thread(shutil.rmtree, path)


async def clean_temp(app: SiteApp) -> None:
    """Remove the site's temp directory."""
    await remove_dir(app.dir.temp())


async def clean_cache(app: SiteApp) -> None:
    """Remove the site's cache directory."""
    await remove_dir(app.dir.cache())


async def empty_dir(path: Path, *, protected: Iterable[Path] = ()) -> None:
    """Remove everything inside a directory, creating it if missing.

    Args:
        path: Directory to empty
        protected: Directories that must survive; the working directory
            is always included

    Raises:
        ValueError: If path is a protected directory or contains one
    """
    guarded = [Path.cwd(), *protected]
    await asyncio.to_thread(_empty_dir_sync, path, guarded)


def _empty_dir_sync(path: Path, protected: list[Path]) -> None:
    resolved = path.resolve()
    for keep in protected:
        keep_resolved = keep.resolve()
        if resolved == keep_resolved or resolved in keep_resolved.parents:
            raise ValueError(f"Refusing to empty {path}: it contains {keep}")

    if not path.exists():
        path.mkdir(parents=True)
        return

    for child in path.iterdir():
        if child.is_dir() and not child.is_symlink():
            shutil.rmtree(child)
        else:
            child.unlink()
    logger.debug(f"Emptied {path}")
