from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import List

@dataclass
class CleanConfig:
    path: Path
    roots: List[str]
    dry_run: bool = False
    verbose: bool = False
    encoding: str = "utf-8"
    report_path: Path | None = None

    def root_names(self) -> List[str]:
        # keep first occurrence order; duplicates add nothing to the closure
        return list(dict.fromkeys(self.roots))
