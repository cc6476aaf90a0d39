from __future__ import annotations
from typing import List

from rich.markup import escape

from dtsprune import console
from dtsprune.analysis.patcher import apply_edits
from dtsprune.core.context import CleanContext
from dtsprune.parsing.ir import Edit
from dtsprune.parsing.references import normalize_path, scan_directives

def inline_references(path: str, ctx: CleanContext) -> str:
    """
    Return the text of `path` with every `/// <reference path>` replaced by the
    referenced file's own inlined text.

    Each normalized target is inlined once per run; later directives to the
    same target are replaced with empty text. `types` references and other
    `///` comments are kept as they are.
    """
    ctx.visited.add(normalize_path(path))
    return _resolve(path, ctx)

def _resolve(path: str, ctx: CleanContext) -> str:
    text = ctx.read_text(path)
    edits: List[Edit] = []
    for directive in scan_directives(text, path):
        if directive.kind != "path":
            continue
        ctx.inlined += 1
        target = directive.normalized
        if target in ctx.visited:
            if ctx.verbose:
                console.print(f"[dim]{escape(path)}:{directive.line}: {escape(target)} already inlined[/]")
            edits.append(Edit(directive.range, ""))
            continue
        ctx.visited.add(target)
        if ctx.verbose:
            console.print(f"[dim]{escape(path)}:{directive.line}: inlining {escape(target)}[/]")
        edits.append(Edit(directive.range, _resolve(target, ctx)))
    return apply_edits(text, edits)
