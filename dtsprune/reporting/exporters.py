from __future__ import annotations
from pathlib import Path
import json
from dtsprune.analysis.runner import CleanResult
from dtsprune.parsing.ir import DeclarationBlock
from dtsprune.reporting.schema import BlockJSON, CleanReportJSON

def to_report(result: CleanResult) -> CleanReportJSON:
    return CleanReportJSON(
        file=result.path,
        roots=result.roots,
        reachable=result.reachable,
        kept=result.kept,
        removed=result.removed,
        inlined_references=result.inlined_references,
        edits=result.edits,
        written=result.written,
    )

def blocks_to_json(blocks: list[DeclarationBlock]) -> list[BlockJSON]:
    return [
        BlockJSON(name=b.name, has_body=b.has_body, dependencies=sorted(b.dependencies))
        for b in blocks
    ]

def export_json_report(result: CleanResult, out: Path) -> Path:
    payload = to_report(result)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(json.dumps(payload.model_dump(), indent=2), encoding="utf-8")
    return out
