"""JSON export of API responses.

Why JSON:
- Interop with scripts/pipelines (jq, inventories) without re-querying the API.
"""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import BaseModel


def dump_model_json(model: BaseModel) -> str:
    """Stable, UTF-8 friendly JSON text of a model (API nulls kept as `null`)."""

    payload = model.model_dump(mode="json")
    return json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n"


def export_model_json(*, model: BaseModel, output_path: Path) -> Path:
    """Write `model` to `output_path`, creating parent directories."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(dump_model_json(model), encoding="utf-8")
    return output_path
