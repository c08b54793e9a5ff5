"""Parsing of structured data out of free-text model output.

Model output is treated as untrusted input: the text may be wrapped in a
Markdown code fence, and whatever remains must decode to exactly the expected
shape. Anything else is rejected as a whole.
"""

from __future__ import annotations

import json
import re
from typing import Any, TypeVar

from pydantic import BaseModel, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

ItemT = TypeVar("ItemT", bound=BaseModel)

_FENCE_OPEN_RE = re.compile(r"^```[A-Za-z0-9_+.-]*[ \t]*(?:\r?\n)?")
_FENCE_CLOSE_RE = re.compile(r"(?:\r?\n)?```\s*$")


class ContentParseError(ValueError):
    """Model output did not decode to the expected structure."""


def strip_code_fence(text: str) -> str:
    """Remove a leading ```lang fence and a trailing ``` fence, on their own lines or not."""
    stripped = text.strip()
    if stripped.startswith("```"):
        stripped = _FENCE_OPEN_RE.sub("", stripped, count=1)
        stripped = _FENCE_CLOSE_RE.sub("", stripped, count=1)
    return stripped.strip()


def decode_json(text: str) -> Any:
    """Strip fences and decode JSON."""
    body = strip_code_fence(text)
    if not body:
        raise ContentParseError("Empty output")
    try:
        return json.loads(body)
    except json.JSONDecodeError as e:
        raise ContentParseError(f"Invalid JSON: {e.msg}") from e


def parse_item_list(text: str, item_type: type[ItemT]) -> list[ItemT]:
    """Decode a non-empty JSON array whose every element is an ``item_type``."""
    data = decode_json(text)
    if not isinstance(data, list):
        raise ContentParseError(f"Expected a JSON array, got {type(data).__name__}")
    if not data:
        raise ContentParseError("Expected a non-empty JSON array")

    try:
        return TypeAdapter(list[item_type]).validate_python(data)  # type: ignore[valid-type]
    except PydanticValidationError as e:
        raise ContentParseError(
            f"Array element does not match {item_type.__name__}: {e.error_count()} error(s)"
        ) from e


def parse_single_item(text: str, item_type: type[ItemT]) -> ItemT:
    """Decode one ``item_type``: the first element of an array, or a bare object."""
    data = decode_json(text)
    if isinstance(data, list):
        if not data:
            raise ContentParseError("Expected at least one element")
        data = data[0]
    if not isinstance(data, dict):
        raise ContentParseError(f"Expected a JSON object, got {type(data).__name__}")

    try:
        return item_type.model_validate(data)
    except PydanticValidationError as e:
        raise ContentParseError(
            f"Object does not match {item_type.__name__}: {e.error_count()} error(s)"
        ) from e
