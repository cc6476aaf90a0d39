from __future__ import annotations

from dotenv import load_dotenv
load_dotenv()

from pathlib import Path
import json
from typing import List, Optional
import typer

from rich.console import Console
from rich.table import Table

from dtsprune import DtsPruneError, __version__
from dtsprune.core.config import CleanConfig
from dtsprune.core.context import CleanContext
from dtsprune.presets import load_options
from dtsprune.ingestion import files
from dtsprune.analysis.runner import clean_file
from dtsprune.analysis.resolver import inline_references
from dtsprune.analysis.dependency_graph import reachable_names
from dtsprune.parsing.ts_parser import build_dependency_map, parse_declarations
from dtsprune.reporting.exporters import blocks_to_json, export_json_report


app = typer.Typer(add_completion=False, help="Strip unused `declare module` blocks from a .d.ts bundle")
console = Console()


def _version(value: bool) -> None:
    if value:
        console.print(f"dtsprune {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(False, "--version", callback=_version, is_eager=True, help="Show version and exit"),
) -> None:
    pass


def _target(path: str) -> Path:
    p = Path(path)
    if not p.is_file():
        typer.secho(f"File not found: {p}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=2)
    return p.resolve()


@app.command("clean")
def clean(
    path: str = typer.Argument(..., help="Declaration bundle to clean in place"),
    roots: Optional[List[str]] = typer.Argument(None, help="Module names to keep, with everything they import"),
    config_file: Optional[str] = typer.Option(None, "--config", envvar="DTSPRUNE_CONFIG", help="YAML options file"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Compute the result but do not write the file"),
    report: Optional[str] = typer.Option(None, "--report", help="Write a JSON summary of the run here"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show inlining and cycle details"),
) -> None:
    """Inline reference directives and remove modules not reachable from ROOTS."""
    target = _target(path)
    try:
        options = load_options(Path(config_file) if config_file else None)
    except (OSError, ValueError) as e:
        typer.secho(f"Could not load options: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=2)

    cfg = CleanConfig(
        path=target,
        roots=list(roots or []) + options["roots"],
        dry_run=dry_run,
        verbose=verbose or bool(options.get("verbose")),
        encoding=options.get("encoding") or files.DEFAULT_ENCODING,
        report_path=Path(report) if report else None,
    )
    if not cfg.roots:
        typer.secho("No root module names given", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=2)

    try:
        result = clean_file(cfg.path, cfg.root_names(), config=cfg)
    except (DtsPruneError, OSError) as e:
        typer.secho(f"Clean failed, {target} left unchanged: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    table = Table(title=f"Modules in {target.name}")
    table.add_column("Module", overflow="fold")
    table.add_column("Status", justify="center")
    for name in result.kept:
        table.add_row(name, "[green]kept[/]")
    for name in result.removed:
        table.add_row(name, "[red]removed[/]")
    console.print(table)
    console.print(f"Inlined references: {result.inlined_references}  Edits: {result.edits}")

    if cfg.report_path:
        out = export_json_report(result, cfg.report_path)
        typer.secho(f"Wrote report: {out}", fg=typer.colors.GREEN)
    if result.written:
        typer.secho(f"Wrote {target}", fg=typer.colors.GREEN)


@app.command("inspect")
def inspect(
    path: str = typer.Argument(..., help="Declaration bundle to inspect"),
    roots: Optional[List[str]] = typer.Argument(None, help="Optional roots; marks which modules would be kept"),
    as_json: bool = typer.Option(False, "--json", help="Print blocks as JSON instead of a table"),
) -> None:
    """List the module blocks of a bundle and what each imports. Never writes."""
    target = _target(path)
    try:
        text = inline_references(str(target), CleanContext(read_text=files.read_text))
    except (DtsPruneError, OSError) as e:
        typer.secho(f"Inspect failed: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    blocks = parse_declarations(text)
    if as_json:
        typer.echo(json.dumps([b.model_dump() for b in blocks_to_json(blocks)], indent=2))
        return

    reachable = reachable_names(build_dependency_map(blocks), roots) if roots else None
    console.rule(f"[bold]{target.name}")
    table = Table(title="Declared modules")
    table.add_column("Module", overflow="fold")
    table.add_column("Body", justify="center")
    table.add_column("Imports", overflow="fold")
    if reachable is not None:
        table.add_column("Kept", justify="center")
    for b in blocks:
        row = [b.name, "yes" if b.has_body else "no", ", ".join(sorted(b.dependencies)) or "-"]
        if reachable is not None:
            row.append("yes" if (b.name in reachable or not b.has_body) else "[red]no[/]")
        table.add_row(*row)
    console.print(table)


if __name__ == "__main__":
    app()
