"""Path and URL helpers for redirect pages.

Joins hostname, base and page path fragments without doubling separators,
and maps page URL paths to files under the output folder.
"""

from pathlib import Path

INDEX_FILENAME = "index.html"


def remove_leading_slash(value: str) -> str:
    """Strip a single leading slash."""
    return value[1:] if value.startswith("/") else value


def remove_ending_slash(value: str) -> str:
    """Strip a single trailing slash."""
    return value[:-1] if value.endswith("/") else value


def build_redirect_url(hostname: str, base: str, page_path: str) -> str:
    """Build the absolute destination URL for a page.

    The hostname is used verbatim apart from one trailing slash. The base is
    inserted as-is and is expected to start and end with a slash.

    Args:
        hostname: Origin to redirect to (e.g., "https://new.example.com/")
        base: Site base path (e.g., "/" or "/docs/")
        page_path: Page URL path, starting with "/"

    Returns:
        Destination URL (e.g., "https://new.example.com/docs/guide/")
    """
    return f"{remove_ending_slash(hostname)}{base}{remove_leading_slash(page_path)}"


def resolve_output_path(output_folder: Path, page_path: str) -> Path:
    """Map a page URL path to its redirect file under the output folder.

    Directory-style paths ("/guide/") become "guide/index.html". Any other
    path is joined as-is.

    Args:
        output_folder: Root directory for redirect files
        page_path: Page URL path, starting with "/"

    Returns:
        Destination file path
    """
    if page_path.endswith("/"):
        page_path = f"{page_path}{INDEX_FILENAME}"
    return output_folder / remove_leading_slash(page_path)
