from __future__ import annotations
import re
from array import array
from bisect import bisect_left
from itertools import accumulate
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Tuple, FrozenSet

import tree_sitter_typescript
from tree_sitter import Language, Node, Parser

from rich.markup import escape

from dtsprune import console
from dtsprune.parsing.ir import DeclarationBlock, TextRange

TYPESCRIPT = Language(tree_sitter_typescript.language_typescript())

MODULE_NODE_TYPES = ("module", "internal_module")
QUALIFIER_TOKENS = ("export", "declare")

_ESCAPE_RE = re.compile(r"\\(.)")


class _Offsets:
    """Maps tree-sitter byte offsets onto offsets into the decoded str."""

    def __init__(self, text: str, src: bytes) -> None:
        self.ascii = len(src) == len(text)
        # byte offset at which each character starts, plus the end offset
        self._starts = array("Q") if self.ascii else array("Q",
            accumulate((len(ch.encode("utf-8")) for ch in text), initial=0)
        )

    def char(self, byte_offset: int) -> int:
        if self.ascii:
            return byte_offset
        return bisect_left(self._starts, byte_offset)

    def range(self, start_byte: int, end_byte: int) -> TextRange:
        return TextRange(self.char(start_byte), self.char(end_byte))


def _string_value(src: bytes, node: Node) -> str:
    raw = src[node.start_byte:node.end_byte].decode("utf-8")
    return _ESCAPE_RE.sub(r"\1", raw[1:-1])


def _unwrap(node: Node) -> Optional[Tuple[Node, List[Node]]]:
    """Peel export/declare wrappers off a top-level statement."""
    qualifiers: List[Node] = []
    while True:
        if node.type in MODULE_NODE_TYPES:
            return node, qualifiers
        if node.type == "export_statement":
            inner = node.child_by_field_name("declaration")
        elif node.type == "ambient_declaration":
            inner = next((c for c in node.named_children if c.type != "comment"), None)
        else:
            return None
        if inner is None:
            return None
        qualifiers.extend(
            c for c in node.children
            if c.type in QUALIFIER_TOKENS and c.start_byte < inner.start_byte
        )
        node = inner


def _dependencies(src: bytes, body: Node) -> FrozenSet[str]:
    deps = set()
    for stmt in body.named_children:
        if stmt.type not in ("import_statement", "export_statement"):
            continue
        source = stmt.child_by_field_name("source")
        if source is not None and source.type == "string":
            deps.add(_string_value(src, source))
    return frozenset(deps)


def _body_dependencies(src: bytes, body: Node, name: str, line: int) -> FrozenSet[str]:
    # The current grammar only gives string-named modules a statement_block
    # body; ERROR recovery or a grammar change could hand us anything else.
    if body.type != "statement_block":
        console.print(f"[yellow]Line {line}: body of module \"{escape(name)}\" is {body.type}; dependencies ignored[/]")
        return frozenset()
    return _dependencies(src, body)


def parse_declarations(text: str) -> List[DeclarationBlock]:
    src = text.encode("utf-8")
    offsets = _Offsets(text, src)
    tree = Parser(TYPESCRIPT).parse(src)
    root = tree.root_node
    if root.has_error:
        console.print("[yellow]Declaration text has syntax errors; blocks inside them are left untouched[/]")

    blocks: List[DeclarationBlock] = []
    for stmt in root.named_children:
        unwrapped = _unwrap(stmt)
        if unwrapped is None:
            continue
        mod, qualifiers = unwrapped
        line = mod.start_point[0] + 1
        name_node = mod.child_by_field_name("name")
        if name_node is None or name_node.type != "string":
            kind = name_node.type if name_node is not None else "missing"
            console.print(f"[yellow]Line {line}: module declaration name is {kind}, not a string literal; left untouched[/]")
            continue
        name = _string_value(src, name_node)
        quals = tuple(offsets.range(q.start_byte, q.end_byte) for q in qualifiers)
        start_byte = qualifiers[0].start_byte if qualifiers else mod.start_byte
        body = mod.child_by_field_name("body")

        if body is None:
            blocks.append(DeclarationBlock(
                name=name, range=offsets.range(start_byte, mod.end_byte),
                has_body=False, qualifiers=quals,
            ))
            continue
        deps = _body_dependencies(src, body, name, line)
        blocks.append(DeclarationBlock(
            name=name, range=offsets.range(start_byte, body.end_byte),
            has_body=True, dependencies=deps, qualifiers=quals,
        ))
    return blocks


def build_dependency_map(blocks: Iterable[DeclarationBlock]) -> Mapping[str, FrozenSet[str]]:
    """name -> required names. Blocks sharing a name contribute the union of their imports."""
    deps: Dict[str, FrozenSet[str]] = {}
    for block in blocks:
        deps[block.name] = deps.get(block.name, frozenset()) | block.dependencies
    return MappingProxyType(deps)
