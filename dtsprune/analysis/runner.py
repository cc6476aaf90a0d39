from __future__ import annotations

import os
import typing as t
from dataclasses import dataclass, field
from functools import partial
from pathlib import Path

from dtsprune import console
from dtsprune.analysis.dependency_graph import build_module_graph, find_cycles, reachable_names
from dtsprune.analysis.patcher import apply_edits
from dtsprune.analysis.pruner import prune_edits
from dtsprune.analysis.resolver import inline_references
from dtsprune.core.config import CleanConfig
from dtsprune.core.context import CleanContext, ReadText, WriteText
from dtsprune.ingestion import files
from dtsprune.parsing.ts_parser import build_dependency_map, parse_declarations


@dataclass
class CleanResult:
    path: str
    roots: list[str]
    reachable: list[str] = field(default_factory=list)
    kept: list[str] = field(default_factory=list)
    removed: list[str] = field(default_factory=list)
    inlined_references: int = 0
    edits: int = 0
    written: bool = False
    output: str = field(default="", repr=False)  # final text, written or not

    @property
    def changed(self) -> bool:
        return self.inlined_references > 0 or self.edits > 0


def clean_file(
    path: str | Path,
    root_names: t.Sequence[str],
    *,
    read_text: ReadText | None = None,
    write_text: WriteText | None = None,
    config: CleanConfig | None = None,
) -> CleanResult:
    """
    Inline `/// <reference path>` includes of `path`, then delete every
    `declare module "..." { }` block not reachable from `root_names`.

    The file is written once at the end, and only when something changed.
    """
    # relative paths would lose a leading ".." once normalized
    path = os.path.abspath(path)
    encoding = config.encoding if config else files.DEFAULT_ENCODING
    verbose = bool(config and config.verbose)
    dry_run = bool(config and config.dry_run)
    read_text = read_text or partial(files.read_text, encoding=encoding)
    write_text = write_text or partial(files.write_text, encoding=encoding)

    ctx = CleanContext(read_text=read_text, verbose=verbose)
    text = inline_references(path, ctx)

    blocks = parse_declarations(text)
    deps = build_dependency_map(blocks)
    G = build_module_graph(deps)
    if verbose:
        for cycle in find_cycles(G):
            console.print(f"[dim]Import cycle: {' -> '.join(cycle)}[/]")
    reachable = reachable_names(deps, root_names, graph=G)

    edits = prune_edits(text, blocks, reachable)
    removed = sorted({b.name for b in blocks if b.has_body and b.name not in reachable})
    result = CleanResult(
        path=path,
        roots=list(root_names),
        reachable=sorted(reachable),
        kept=sorted({b.name for b in blocks if not b.has_body or b.name in reachable}),
        removed=removed,
        inlined_references=ctx.inlined,
        edits=len(edits),
    )

    if not result.changed:
        console.print(f"No changes to {path}")
        result.output = text
        return result
    result.output = apply_edits(text, edits)
    if dry_run:
        console.print(f"Dry run: {path} not written ({len(text)} -> {len(result.output)} characters)")
        return result
    write_text(path, result.output)
    result.written = True
    return result
