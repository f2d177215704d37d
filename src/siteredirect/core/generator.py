"""Redirect page generation.

Builds one redirect task per page and writes all of them concurrently.
Tasks share no state, so the output set does not depend on write order.
"""

import asyncio
import logging
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from siteredirect.config import RunConfig
from siteredirect.core.document import render_redirect_document
from siteredirect.core.paths import build_redirect_url, resolve_output_path
from siteredirect.core.site import Page

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RedirectTask:
    """A single redirect page to write."""

    page_path: str
    destination_url: str
    destination_file: Path

    @classmethod
    def for_page(cls, page: Page, config: RunConfig) -> "RedirectTask":
        """Create the task for a page.

        Args:
            page: Discovered page
            config: Run options providing hostname, base and output folder

        Returns:
            RedirectTask for the page
        """
        return cls(
            page_path=page.path,
            destination_url=build_redirect_url(config.hostname, config.base, page.path),
            destination_file=resolve_output_path(config.output_folder, page.path),
        )


async def write_redirect(task: RedirectTask) -> None:
    """Write the redirect document for a task, creating parent directories.

    An existing file at the destination is overwritten.
    """
    await asyncio.to_thread(_write_redirect_sync, task)


def _write_redirect_sync(task: RedirectTask) -> None:
    task.destination_file.parent.mkdir(parents=True, exist_ok=True)
    task.destination_file.write_text(
        render_redirect_document(task.destination_url),
        encoding="utf-8",
    )
    logger.debug(f"{task.page_path} -> {task.destination_url}")


async def generate_redirects(pages: Iterable[Page], config: RunConfig) -> list[RedirectTask]:
    """Write redirect documents for all pages concurrently.

    All writes are dispatched together and awaited as one batch. The first
    failure cancels the remaining writes and is raised; files written before
    that point are left on disk.

    Args:
        pages: Pages to redirect
        config: Run options

    Returns:
        Tasks that were written

    Raises:
        OSError: If any write fails
    """
    tasks = [RedirectTask.for_page(page, config) for page in pages]

    try:
        async with asyncio.TaskGroup() as group:
            for task in tasks:
                group.create_task(write_redirect(task))
    except ExceptionGroup as eg:
        raise eg.exceptions[0] from eg

    logger.info(f"Wrote {len(tasks)} redirect pages to {config.output_folder}")
    return tasks
