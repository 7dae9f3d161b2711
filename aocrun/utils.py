from __future__ import annotations

import gzip
import json
from pathlib import Path
from typing import IO, Any, Dict

import yaml


def load_yaml_or_json(path: Path) -> Dict[str, Any]:
    data: Dict[str, Any]
    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() in {".yaml", ".yml"}:
        data = yaml.safe_load(text) or {}
    elif path.suffix.lower() == ".json":
        data = json.loads(text)
    else:
        raise ValueError(f"Unsupported golden table format: {path}")
    if not isinstance(data, dict):
        raise ValueError(f"Invalid golden table format: {path}")
    return data


def ensure_dir(path: Path) -> None:
    path.mkdir(parents=True, exist_ok=True)


def open_input(path: Path) -> IO[str]:
    if path.suffix.lower() == ".gz":
        return gzip.open(path, "rt", encoding="utf-8")
    return open(path, "r", encoding="utf-8")


def parse_list(value: str | None) -> list[str]:
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


def parse_parts(value: str | None) -> list[int] | None:
    items = parse_list(value)
    if not items:
        return None
    return [int(item) for item in items]
