from __future__ import annotations

import pytest


class MemoryFS:
    """In-memory stand-in for the read/write collaborators."""

    def __init__(self, files: dict[str, str]) -> None:
        self.files = dict(files)
        self.reads: list[str] = []
        self.writes: list[tuple[str, str]] = []

    def read_text(self, path: str) -> str:
        self.reads.append(path)
        try:
            return self.files[path]
        except KeyError:
            raise FileNotFoundError(path) from None

    def write_text(self, path: str, content: str) -> None:
        self.writes.append((path, content))
        self.files[path] = content


@pytest.fixture
def memfs():
    return MemoryFS
