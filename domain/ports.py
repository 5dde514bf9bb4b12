"""Port interfaces for benchdiff.

All ports are defined as typing.Protocol — structural subtyping means any class
with matching method signatures satisfies the Protocol without inheritance.

This module has ZERO external imports — only stdlib and typing.
"""

from __future__ import annotations

from typing import Protocol


class FileSystemPort(Protocol):
    """Abstraction over file system operations."""

    def read_file(self, path: str) -> str:
        """Read and return the contents of a file."""
        ...

    def write_file(self, path: str, content: str) -> None:
        """Write content to a file, creating parent directories as needed."""
        ...

    def list_directory(self, path: str) -> list[str]:
        """Return the entry names of a directory (non-recursive).

        Raises FileNotFoundError if the directory does not exist.
        """
        ...

    def file_exists(self, path: str) -> bool:
        """Return True if the file exists."""
        ...

    def make_directory(self, path: str) -> None:
        """Create a directory (and parents) if it doesn't exist."""
        ...
