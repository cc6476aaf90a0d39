from __future__ import annotations
from dataclasses import dataclass, field
from typing import Callable, Set

ReadText = Callable[[str], str]
WriteText = Callable[[str, str], None]

@dataclass
class CleanContext:
    """State for one `clean_file` call. Never shared between calls."""
    read_text: ReadText
    verbose: bool = False
    visited: Set[str] = field(default_factory=set)
    inlined: int = 0
