from __future__ import annotations
from rich.console import Console

__version__ = "0.3.0"

# Shared diagnostics sink; stdout is left to the CLI summaries.
console = Console(stderr=True, soft_wrap=True)


class DtsPruneError(Exception):
    """Base class for fatal errors raised while cleaning a bundle."""


class MalformedReferenceError(DtsPruneError):
    def __init__(self, path: str, line: int, directive: str) -> None:
        self.path = path
        self.line = line
        self.directive = directive
        super().__init__(f"{path}:{line}: malformed reference directive: {directive}")
