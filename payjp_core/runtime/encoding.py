"""
Form encoding with bracketed nested keys.

The API takes application/x-www-form-urlencoded bodies in which nested
records are flattened into composite keys:

    {"card": {"number": "4242...", "exp_month": 12}}
    -> card[number]=4242...&card[exp_month]=12

Lists use index segments (items[0][id]=...), booleans are rendered as the
literal tokens true/false, and None is omitted at every depth.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from enum import Enum
from typing import Any
from urllib.parse import urlencode

from pydantic import BaseModel

from .errors import ErrorCode, InvalidRequestError

FormPairs = list[tuple[str, str]]


def _as_mapping(value: BaseModel | Mapping[str, Any]) -> Mapping[str, Any]:
    if isinstance(value, BaseModel):
        return value.model_dump(exclude_none=True, by_alias=True)
    return value


def _render_scalar(key: str, value: Any) -> str:
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return _render_scalar(key, value.value)
    if isinstance(value, (int, float, str)):
        return str(value)
    if isinstance(value, datetime):
        return str(int(value.timestamp()))
    raise InvalidRequestError(
        f"Cannot encode parameter {key!r} of type {type(value).__name__}",
        code=ErrorCode.INVALID_PARAMS,
    )


def _flatten(prefix: str, value: Any, pairs: FormPairs) -> None:
    if value is None:
        return
    if isinstance(value, (BaseModel, Mapping)):
        for child_key, child in _as_mapping(value).items():
            _flatten(f"{prefix}[{child_key}]", child, pairs)
    elif isinstance(value, (list, tuple)):
        for index, item in enumerate(value):
            _flatten(f"{prefix}[{index}]", item, pairs)
    else:
        pairs.append((prefix, _render_scalar(prefix, value)))


def encode(params: BaseModel | Mapping[str, Any] | None) -> FormPairs:
    """Flatten a parameter tree into ordered (key, value) pairs.

    Output order follows the input's key order (field declaration order for
    pydantic models), so a given input always produces the same pairs.

    Args:
        params: A mapping or pydantic model, possibly nested. None yields
            no pairs.

    Returns:
        Flat list of (key, value) string pairs.

    Raises:
        InvalidRequestError: If a value cannot be rendered as a form scalar.
    """
    pairs: FormPairs = []
    if params is None:
        return pairs
    for key, value in _as_mapping(params).items():
        _flatten(str(key), value, pairs)
    return pairs


def encode_form(params: BaseModel | Mapping[str, Any] | None) -> str:
    """Encode parameters as a URL-encoded form body."""
    return urlencode(encode(params))
