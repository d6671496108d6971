"""JSON results report for a bundle generation run.

WHY: Build systems that shell out to the CLI cannot read a Python
GenerationResult. They need the generated sources and bundled configs in
a machine-readable file to feed the next build step.

HOW: build_report() turns a GenerationResult into a plain dict and
validates it against results_schema.json with jsonschema before anything
is written; write_report() serializes it as indented UTF-8 JSON.

RULES:
- Paths are written as strings, in result order
- Validate against the schema before returning; raise on failure
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jsonschema

from assembly_bundler.core.models import GenerationResult

_SCHEMA_PATH = Path(__file__).resolve().parent / "results_schema.json"

_CACHED_SCHEMA: dict[str, Any] | None = None


def _get_schema() -> dict[str, Any]:
    global _CACHED_SCHEMA
    if _CACHED_SCHEMA is None:
        with open(_SCHEMA_PATH, encoding="utf-8") as f:
            _CACHED_SCHEMA = json.load(f)
    return _CACHED_SCHEMA


def build_report(result: GenerationResult) -> dict[str, Any]:
    """Convert a GenerationResult into the report dict.

    Raises:
        jsonschema.ValidationError: If the report does not match the schema.
    """
    report: dict[str, Any] = {
        "success": result.success,
        "generated_files": [str(p) for p in result.generated_files],
        "bundled_config_files": [str(p) for p in result.bundled_config_files],
        "skipped": [str(p) for p in result.skipped],
        "failures": [
            {"assembly": str(f.assembly_path), "message": f.message}
            for f in result.failures
        ],
    }
    jsonschema.validate(instance=report, schema=_get_schema())
    return report


def write_report(result: GenerationResult, path: Path) -> Path:
    content = json.dumps(build_report(result), indent=2, ensure_ascii=False)
    path.write_text(content + "\n", encoding="utf-8")
    return path
