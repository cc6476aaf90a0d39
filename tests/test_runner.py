from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from dtsprune import MalformedReferenceError
from dtsprune.analysis.runner import clean_file
from dtsprune.core.config import CleanConfig

SCENARIO_A = textwrap.dedent(
    """\
    declare module "A" {
        import { B } from "B";
        export interface A { b: B }
    }
    declare module "B" {
        export interface B { n: number }
    }
    declare module "C" {
        export interface C { s: string }
    }
    """
)


def test_unreachable_block_removed_rest_byte_identical(memfs) -> None:
    fs = memfs({"/p/bundle.d.ts": SCENARIO_A})
    result = clean_file("/p/bundle.d.ts", ["A"], read_text=fs.read_text, write_text=fs.write_text)

    assert result.reachable == ["A", "B"]
    assert result.removed == ["C"]
    assert result.kept == ["A", "B"]
    assert result.written
    ((path, content),) = fs.writes
    assert path == "/p/bundle.d.ts"
    c_start = SCENARIO_A.index('\ndeclare module "C"')
    assert content == SCENARIO_A[:c_start] + "\n"
    assert "C" not in content.replace("declare", "")


def test_second_run_makes_no_changes(memfs) -> None:
    fs = memfs({"/p/bundle.d.ts": SCENARIO_A})
    clean_file("/p/bundle.d.ts", ["A"], read_text=fs.read_text, write_text=fs.write_text)
    first = fs.files["/p/bundle.d.ts"]

    result = clean_file("/p/bundle.d.ts", ["A"], read_text=fs.read_text, write_text=fs.write_text)
    assert result.edits == 0
    assert not result.written
    assert len(fs.writes) == 1
    assert fs.files["/p/bundle.d.ts"] == first


def test_nothing_to_remove_skips_write(memfs, capsys: pytest.CaptureFixture[str]) -> None:
    fs = memfs({"/p/bundle.d.ts": SCENARIO_A})
    result = clean_file("/p/bundle.d.ts", ["A", "C"], read_text=fs.read_text, write_text=fs.write_text)
    assert not result.changed
    assert fs.writes == []
    assert "No changes" in capsys.readouterr().err


def test_inlining_alone_triggers_write(memfs) -> None:
    fs = memfs({
        "/proj/X.d.ts": '/// <reference path="./sub.d.ts" />\ndeclare module "A" {}\n',
        "/proj/sub.d.ts": 'declare module "M" {}',
    })
    result = clean_file("/proj/X.d.ts", ["A", "M"], read_text=fs.read_text, write_text=fs.write_text)
    assert result.inlined_references == 1
    assert result.edits == 0
    assert fs.writes == [("/proj/X.d.ts", 'declare module "M" {}\ndeclare module "A" {}\n')]


def test_inlined_blocks_are_pruned_too(memfs) -> None:
    fs = memfs({
        "/proj/X.d.ts": '/// <reference path="./sub.d.ts" />\ndeclare module "A" {}\n',
        "/proj/sub.d.ts": 'declare module "M" {}',
    })
    clean_file("/proj/X.d.ts", ["A"], read_text=fs.read_text, write_text=fs.write_text)
    assert fs.files["/proj/X.d.ts"] == '\ndeclare module "A" {}\n'


def test_cyclic_imports_are_kept_together(memfs) -> None:
    text = (
        'declare module "A" { import "B"; }\n'
        'declare module "B" { import "A"; }\n'
        'declare module "Z" { import "A"; }\n'
    )
    fs = memfs({"/p/b.d.ts": text})
    result = clean_file("/p/b.d.ts", ["A"], read_text=fs.read_text, write_text=fs.write_text)
    assert result.removed == ["Z"]
    assert fs.files["/p/b.d.ts"] == text[: text.index('\ndeclare module "Z"')] + "\n"


def test_malformed_reference_leaves_file_untouched(memfs) -> None:
    fs = memfs({"/p/b.d.ts": "/// <reference path=sub.d.ts />\n" + SCENARIO_A})
    with pytest.raises(MalformedReferenceError):
        clean_file("/p/b.d.ts", ["A"], read_text=fs.read_text, write_text=fs.write_text)
    assert fs.writes == []


def test_unreadable_reference_leaves_file_untouched(memfs) -> None:
    fs = memfs({"/p/b.d.ts": '/// <reference path="missing.d.ts" />\n' + SCENARIO_A})
    with pytest.raises(FileNotFoundError):
        clean_file("/p/b.d.ts", ["A"], read_text=fs.read_text, write_text=fs.write_text)
    assert fs.writes == []


def test_dry_run_computes_without_writing(memfs) -> None:
    fs = memfs({"/p/bundle.d.ts": SCENARIO_A})
    cfg = CleanConfig(path=Path("/p/bundle.d.ts"), roots=["A"], dry_run=True)
    result = clean_file("/p/bundle.d.ts", ["A"], read_text=fs.read_text, write_text=fs.write_text, config=cfg)
    assert result.edits == 1
    assert not result.written
    assert fs.writes == []


def test_default_collaborators_use_the_filesystem(tmp_path: Path) -> None:
    (tmp_path / "types").mkdir()
    (tmp_path / "types" / "extra.d.ts").write_text('declare module "extra" {}\r\n', encoding="utf-8")
    bundle = tmp_path / "bundle.d.ts"
    bundle.write_bytes(
        b'/// <reference path="types/extra.d.ts" />\r\n'
        + SCENARIO_A.replace("\n", "\r\n").encode("utf-8")
    )

    result = clean_file(bundle, ["A"])

    assert result.written
    assert result.removed == ["C", "extra"]
    out = bundle.read_bytes().decode("utf-8")
    assert "extra" not in out
    assert 'declare module "C"' not in out
    assert out.startswith('\r\n\r\ndeclare module "A" {\r\n')
    assert "\r\n" in out and "\n" not in out.replace("\r\n", "")


def test_relative_path_with_parent_segment(tmp_path: Path, monkeypatch) -> None:
    (tmp_path / "x").mkdir()
    (tmp_path / "w").mkdir()
    (tmp_path / "x" / "sub.d.ts").write_text('declare module "S" {}\n', encoding="utf-8")
    bundle = tmp_path / "x" / "b.d.ts"
    bundle.write_text('/// <reference path="sub.d.ts" />\ndeclare module "T" {}\n', encoding="utf-8")
    monkeypatch.chdir(tmp_path / "w")

    result = clean_file("../x/b.d.ts", ["S"])

    assert Path(result.path).resolve() == bundle.resolve()
    assert result.removed == ["T"]
    assert bundle.read_text(encoding="utf-8") == 'declare module "S" {}\n\n'


def test_namespaces_and_global_survive_empty_roots(memfs) -> None:
    text = (
        "declare namespace Globals {\n    const version: string;\n}\n"
        "declare global {\n    interface Window { app: unknown }\n}\n"
        'declare module "A" {}\n'
    )
    fs = memfs({"/p/b.d.ts": text})
    result = clean_file("/p/b.d.ts", [], read_text=fs.read_text, write_text=fs.write_text)
    assert result.removed == ["A"]
    assert fs.files["/p/b.d.ts"] == text[: text.index('\ndeclare module "A"')] + "\n"


def test_dry_run_returns_output(memfs) -> None:
    fs = memfs({"/p/bundle.d.ts": SCENARIO_A})
    cfg = CleanConfig(path=Path("/p/bundle.d.ts"), roots=["A"], dry_run=True)
    result = clean_file("/p/bundle.d.ts", ["A"], read_text=fs.read_text, write_text=fs.write_text, config=cfg)
    assert result.output == SCENARIO_A[: SCENARIO_A.index('\ndeclare module "C"')] + "\n"
    assert fs.writes == []


def test_kept_lists_bodyless_copy_of_removed_name(memfs) -> None:
    text = 'declare module "A" {}\ndeclare module "C";\ndeclare module "C" {}\n'
    fs = memfs({"/p/b.d.ts": text})
    result = clean_file("/p/b.d.ts", ["A"], read_text=fs.read_text, write_text=fs.write_text)
    assert result.removed == ["C"]
    assert result.kept == ["A", "C"]
    assert fs.files["/p/b.d.ts"] == 'declare module "A" {}\ndeclare module "C";\n'
