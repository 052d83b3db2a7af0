# pinboard/utils/payload.py
from __future__ import annotations

from typing import Any, Dict, Optional

from flask import request

from pinboard.errors import ValidationError


def json_body() -> Dict[str, Any]:
    """JSON object from the request; a missing or unparsable body reads as {}."""
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def text_field(data: Dict[str, Any], key: str, errors: Dict[str, str], *, strip: bool = True) -> str:
    """
    String value of ``key`` or "" when absent/null. Anything that is not a
    string is recorded in ``errors`` and read as "".
    """
    value: Optional[Any] = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        errors[key] = "Must be a string"
        return ""
    return value.strip() if strip else value
