"""Core type definitions."""

from typing import NewType

# URL path of a page (e.g., "/", "/guide/", "/api.html")
# Distinct from filesystem Path to catch type mismatches
URLPath = NewType("URLPath", str)
