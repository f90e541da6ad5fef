import json
from pathlib import Path
from typing import Any

def ensure_dir(path: Path) -> Path:
    path.mkdir(parents=True, exist_ok=True)
    return path

def read_text(path: Path) -> str:
    # model dumps and exported subtitles sometimes carry a BOM
    return path.read_text(encoding="utf-8", errors="replace").lstrip("\ufeff")

def write_text(path: Path, content: str) -> Path:
    ensure_dir(path.parent)
    path.write_text(content, encoding="utf-8")
    return path

def dump_json(data: Any) -> str:
    return json.dumps(data, ensure_ascii=False, indent=2)
