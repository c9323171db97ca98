from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Dict

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


@pytest.fixture()
def write_env(tmp_path: Path):
    def _write(content: str, name: str = ".env") -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture()
def exec_source():
    def _exec(source: str) -> Dict[str, Any]:
        namespace: Dict[str, Any] = {}
        exec(compile(source, "<generated>", "exec"), namespace)
        return namespace

    return _exec
