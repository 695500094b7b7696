"""Generate JSON schemas from Pydantic models and save to schemas/ directory."""

import json
from pathlib import Path

from bcegate.contracts import GateResult
from bcegate.kernel.diff_tree import DiffDocument
from bcegate._internal.project import ProjectDescriptor


SCHEMAS = {
    "diff_document.schema.json": DiffDocument,
    "gate_result.schema.json": GateResult,
    "project_descriptor.schema.json": ProjectDescriptor,
}


def generate_schemas(schemas_dir: Path = Path(__file__).parent.parent / "schemas") -> list[Path]:
    """Generate JSON schemas for the comparator input, project descriptor and gate result."""
    schemas_dir.mkdir(exist_ok=True)
    written = []
    for filename, model in SCHEMAS.items():
        path = schemas_dir / filename
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(model.model_json_schema(), f, indent=2, ensure_ascii=False)
        print(f"Generated: {path}")
        written.append(path)
    print("\nSchema generation complete!")
    return written


if __name__ == "__main__":
    generate_schemas()
