from __future__ import annotations
from typing import Iterable, List

from dtsprune.parsing.ir import Edit

def apply_edits(source: str, edits: Iterable[Edit]) -> str:
    """
    Return `source` with every edit applied; `source` itself is left alone.

    Edits may come in any order. A range that starts inside an earlier edit
    only contributes its replacement, so a repeated deletion is a no-op.
    """
    ordered = sorted(edits, key=lambda e: (e.range.start, e.range.end, e.replacement))
    if not ordered:
        return source
    length = len(source)
    parts: List[str] = []
    cursor = 0
    for edit in ordered:
        edit.range.check(length)
        if edit.range.start > cursor:
            parts.append(source[cursor:edit.range.start])
        parts.append(edit.replacement)
        if edit.range.end > cursor:
            cursor = edit.range.end
    parts.append(source[cursor:])
    return "".join(parts)
