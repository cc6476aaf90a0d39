from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional, Literal, Tuple, FrozenSet

DirectiveKind = Literal["path", "types", "unrecognized"]

@dataclass(frozen=True)
class TextRange:
    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start < 0 or self.end < self.start:
            raise ValueError(f"invalid text range [{self.start}, {self.end})")

    def check(self, length: int) -> "TextRange":
        if self.end > length:
            raise ValueError(f"text range [{self.start}, {self.end}) exceeds source length {length}")
        return self

    def slice(self, text: str) -> str:
        return text[self.start:self.end]

@dataclass(frozen=True)
class Edit:
    range: TextRange
    replacement: str = ""

@dataclass(frozen=True)
class ReferenceDirective:
    range: TextRange
    kind: DirectiveKind
    line: int  # 1-based
    target: Optional[str] = None
    normalized: Optional[str] = None  # path kind only

@dataclass(frozen=True)
class DeclarationBlock:
    name: str
    range: TextRange  # qualifiers through end of body
    has_body: bool
    dependencies: FrozenSet[str] = field(default_factory=frozenset)
    qualifiers: Tuple[TextRange, ...] = ()
