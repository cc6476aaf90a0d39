from __future__ import annotations
from pathlib import Path
import yaml

DEFAULT_OPTIONS_PATH = Path("dtsprune.yaml")

DEFAULT_OPTIONS = {
    "roots": [],
    "encoding": "utf-8",
    "verbose": False,
}

def load_options(options_path: Path | None) -> dict:
    p = options_path or DEFAULT_OPTIONS_PATH
    if not p.exists():
        return dict(DEFAULT_OPTIONS)
    loaded = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    if not isinstance(loaded, dict):
        raise ValueError(f"{p}: expected a mapping of options, got {type(loaded).__name__}")
    options = dict(DEFAULT_OPTIONS)
    options.update(loaded)
    options["roots"] = [str(r) for r in (options.get("roots") or [])]
    return options

def save_options(options: dict, options_path: Path | None) -> Path:
    p = options_path or DEFAULT_OPTIONS_PATH
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(yaml.safe_dump(options, sort_keys=False), encoding="utf-8")
    return p
