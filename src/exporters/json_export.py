"""
JSON exporter for Clinicalc.

Produces the opaque payload the persistence layer stores for a calculation:
dates as ISO strings, unset optional fields dropped.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel


def export_payload(obj: BaseModel, include_nulls: bool = False) -> dict[str, Any]:
    """
    JSON-safe dict for a result or observation.

    Args:
        obj: Any engine result or stored observation model
        include_nulls: Whether to include null values in output
    """
    return obj.model_dump(mode="json", exclude_none=not include_nulls)


def export_json(
    obj: BaseModel,
    output_path: Path | None = None,
    indent: int = 2,
    include_nulls: bool = False,
) -> str:
    """
    Export a result or observation to JSON format.

    Args:
        obj: The model to export
        output_path: Optional path to write the JSON file
        indent: JSON indentation level
        include_nulls: Whether to include null values in output

    Returns:
        JSON string representation
    """
    data = export_payload(obj, include_nulls=include_nulls)

    # ensure_ascii off so region names keep their diacritics
    json_str = json.dumps(data, indent=indent, ensure_ascii=False)

    # Write to file if path provided
    if output_path:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(json_str, encoding="utf-8")

    return json_str
