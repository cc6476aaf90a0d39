from __future__ import annotations
from typing import AbstractSet, Iterable, List

from dtsprune.parsing.ir import DeclarationBlock, Edit, TextRange

def deletion_start(text: str, block: DeclarationBlock) -> int:
    """
    Where the deletion of `block` begins.

    Blocks with `export`/`declare` qualifiers start at the first qualifier
    token and also take the single line break right before it, so removing a
    block does not leave an empty line behind. Anything earlier on the
    previous line stays.
    """
    if not block.qualifiers:
        return block.range.start
    start = block.qualifiers[0].start
    if start > 0 and text[start - 1] == "\n":
        start -= 1
    if start > 0 and text[start - 1] == "\r":
        start -= 1
    return start

def prune_edits(text: str, blocks: Iterable[DeclarationBlock], reachable: AbstractSet[str]) -> List[Edit]:
    edits: List[Edit] = []
    for block in blocks:
        if not block.has_body or block.name in reachable:
            continue
        edits.append(Edit(TextRange(deletion_start(text, block), block.range.end), ""))
    return edits
