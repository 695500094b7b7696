"""Pytest configuration for tests.

No sys.path hacks - tests should import from installed bcegate package.
"""

import json
from pathlib import Path

import pytest


@pytest.fixture
def write_json(tmp_path):
    """Write a JSON document under tmp_path and return its path."""
    def _write(name: str, data) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        return path
    return _write
