from __future__ import annotations
import re
from typing import List

from dtsprune import MalformedReferenceError
from dtsprune.parsing.ir import ReferenceDirective, TextRange

DIRECTIVE_MARKER = "///"

_DIRECTIVE_LINE_RE = re.compile(r"^///[^\n]*", re.MULTILINE)
_REFERENCE_OPEN_RE = re.compile(r"^///\s*<reference\b")
_REFERENCE_RE = re.compile(
    r"^///\s*<reference\s+([A-Za-z][\w-]*)\s*=\s*([\"'])(.*?)\2\s*/>"
)

def normalize_path(path: str) -> str:
    """Collapse `.` and `..` segments; a `..` with nothing left to climb is dropped."""
    path = path.replace("\\", "/")
    absolute = path.startswith("/")
    parts: List[str] = []
    for seg in path.split("/"):
        if seg in ("", "."):
            continue
        if seg == "..":
            if parts:
                parts.pop()
            continue
        parts.append(seg)
    joined = "/".join(parts)
    return "/" + joined if absolute else joined

def resolve_target(containing_file: str, target: str) -> str:
    target = target.replace("\\", "/")
    if target.startswith("/"):
        return normalize_path(target)
    directory = containing_file.replace("\\", "/").rpartition("/")[0]
    if not directory:
        return normalize_path(target)
    return normalize_path(f"{directory}/{target}")

def scan_directives(text: str, path: str) -> list[ReferenceDirective]:
    """Find every `///` line in `text` and classify it."""
    directives: list[ReferenceDirective] = []
    line = 1
    last = 0
    for m in _DIRECTIVE_LINE_RE.finditer(text):
        line += text.count("\n", last, m.start())
        last = m.start()
        start, end = m.start(), m.end()
        if end > start and text[end - 1] == "\r":
            end -= 1
        content = text[start:end]
        rng = TextRange(start, end)

        if not _REFERENCE_OPEN_RE.match(content):
            directives.append(ReferenceDirective(range=rng, kind="unrecognized", line=line))
            continue
        ref = _REFERENCE_RE.match(content)
        if not ref:
            raise MalformedReferenceError(path, line, content)
        attr, value = ref.group(1), ref.group(3)
        if attr == "path":
            directives.append(ReferenceDirective(
                range=rng, kind="path", line=line, target=value,
                normalized=resolve_target(path, value),
            ))
        elif attr == "types":
            directives.append(ReferenceDirective(range=rng, kind="types", line=line, target=value))
        else:
            directives.append(ReferenceDirective(range=rng, kind="unrecognized", line=line, target=value))
    return directives
