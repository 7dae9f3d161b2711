from pathlib import Path

import pytest

from aocrun.inputs import FileLineSource

REPO_ROOT = Path(__file__).resolve().parent.parent


@pytest.fixture
def inputs_dir() -> Path:
    return REPO_ROOT / "inputs"


@pytest.fixture
def golden_path() -> Path:
    return REPO_ROOT / "golden.yaml"


@pytest.fixture
def source(inputs_dir: Path) -> FileLineSource:
    return FileLineSource(inputs_dir)
