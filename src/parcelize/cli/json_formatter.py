"""
JSON Output Formatter for the Parcelize CLI

Every command produces the same envelope when ``--json-output`` is used.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

import orjson

from parcelize.shared.utils.dataclass_serialization import to_serializable


def format_json_output(
    success: bool,
    command: str,
    data: Any | None = None,
    errors: list[str] | None = None,
    warnings: list[str] | None = None,
) -> bytes:
    """
    Format command output as JSON.

    Args:
        success: Whether the command executed successfully
        command: The command name (e.g., "hub-info", "products")
        data: The command's output data, records are serialized recursively
        errors: List of error messages
        warnings: List of warning messages

    Returns:
        JSON-encoded bytes ready for output

    Example:
        >>> output = format_json_output(
        ...     success=True,
        ...     command="hub-info",
        ...     data=HubInfo(total_sales=1520, music_id=0),
        ... )
        >>> print(output.decode())
        {
          "command": "hub-info",
          "data": {
            "music_id": 0,
            "total_sales": 1520
          },
          "errors": [],
          "success": true,
          "timestamp": "2024-05-29T10:30:00+00:00",
          "warnings": []
        }
    """
    if errors is None:
        errors = []
    if warnings is None:
        warnings = []

    if errors:
        success = False

    json_data = {
        "success": success,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "command": command,
        "data": to_serializable(data),
        "errors": errors,
        "warnings": warnings,
    }

    try:
        return orjson.dumps(
            json_data,
            option=orjson.OPT_SORT_KEYS | orjson.OPT_INDENT_2,
        )
    except (TypeError, orjson.JSONEncodeError) as e:
        error_data = {
            "success": False,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "command": command,
            "data": None,
            "errors": [f"JSON serialization failed: {e!s}"],
            "warnings": [],
        }
        return orjson.dumps(
            error_data,
            option=orjson.OPT_SORT_KEYS | orjson.OPT_INDENT_2,
        )
