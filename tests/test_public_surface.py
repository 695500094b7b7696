"""Test public API surface - ensure imports work correctly."""

import types

import bcegate
from bcegate.codes import GateStatus


def test_root_exports():
    for name in bcegate.__all__:
        assert hasattr(bcegate, name), name


def test_api_exports_are_functions():
    from bcegate.api import check, classify_diff, load_diff_tree, resolve_baseline_files
    for fn in (check, classify_diff, load_diff_tree, resolve_baseline_files):
        assert isinstance(fn, types.FunctionType)


def test_check_on_empty_sequence():
    result = bcegate.check([])
    assert isinstance(result, bcegate.GateResult)
    assert result.status == GateStatus.PASSED


def test_generate_schemas(tmp_path):
    import importlib.util
    from pathlib import Path

    script = Path(__file__).resolve().parent.parent / "scripts" / "generate_schemas.py"
    spec = importlib.util.spec_from_file_location("generate_schemas", script)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)

    written = module.generate_schemas(tmp_path / "schemas")
    assert sorted(p.name for p in written) == sorted(module.SCHEMAS)
    assert all(p.read_text(encoding="utf-8").startswith("{") for p in written)
