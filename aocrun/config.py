from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

import yaml


@dataclass
class Config:
    base_dir: Path
    inputs_dir: Path
    golden_path: Path
    input_pattern: str
    default_timeout: float
    default_jobs: int
    default_cycles: int
    default_format: str
    version: str


DEFAULT_CONFIG = {
    "version": "0.1.0",
    "paths": {
        "inputs_dir": "./inputs",
        "golden_path": "./golden.yaml",
    },
    "inputs": {
        "pattern": "{name}{variant}.txt",
    },
    "defaults": {
        "timeout": 0,
        "jobs": 1,
        "cycles": 10,
        "format": "text",
    },
}


def load_config(config_path: Path | None = None) -> Config:
    base_dir = Path.cwd()
    if config_path is None:
        config_path = base_dir / "config.yaml"

    if config_path.exists():
        data = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
    else:
        data = DEFAULT_CONFIG

    paths: Dict[str, Any] = data.get("paths", {})
    inputs: Dict[str, Any] = data.get("inputs", {})
    defaults: Dict[str, Any] = data.get("defaults", {})

    def _p(key: str, fallback: str) -> Path:
        return (base_dir / paths.get(key, fallback)).resolve()

    return Config(
        base_dir=base_dir,
        inputs_dir=_p("inputs_dir", "./inputs"),
        golden_path=_p("golden_path", "./golden.yaml"),
        input_pattern=str(inputs.get("pattern", "{name}{variant}.txt")),
        default_timeout=float(defaults.get("timeout", 0) or 0),
        default_jobs=int(defaults.get("jobs", 1)),
        default_cycles=int(defaults.get("cycles", 10)),
        default_format=str(defaults.get("format", "text")),
        version=str(data.get("version", "0.1.0")),
    )


def write_default_config(path: Path) -> None:
    path.write_text(yaml.safe_dump(DEFAULT_CONFIG, sort_keys=False), encoding="utf-8")
