from __future__ import annotations
from pathlib import Path

DEFAULT_ENCODING = "utf-8"

def read_text(path: str, encoding: str = DEFAULT_ENCODING) -> str:
    # newline="" keeps \r\n intact so offsets match the bytes on disk
    with open(Path(path), "r", encoding=encoding, newline="") as fh:
        return fh.read()

def write_text(path: str, content: str, encoding: str = DEFAULT_ENCODING) -> None:
    with open(Path(path), "w", encoding=encoding, newline="") as fh:
        fh.write(content)
