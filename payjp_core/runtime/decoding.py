"""
Response decoding into typed records.

Two jobs:
- Validate a JSON body into the shape an operation expects, raising
  SerializationError on any mismatch instead of defaulting.
- Resolve expandable relations. The API returns a related object either as
  a bare id string or, when the request asked for expansion, as the full
  record. `Expandable[T]` accepts both and tells them apart from the JSON
  value itself.
"""

from __future__ import annotations

import json
from functools import lru_cache
from typing import Any, Generic, TypeVar, get_args

from pydantic import BaseModel, TypeAdapter, ValidationError
from pydantic_core import PydanticCustomError, core_schema

from .errors import ErrorCode, SerializationError

T = TypeVar("T")


class Expandable(Generic[T]):
    """A relation that is either a bare id or an expanded record.

    Use as a field annotation, e.g. ``default_card: Expandable[Card] | None``.
    Decoded values are always one of the two variants:

    - Reference: the JSON value was a string id.
    - Expanded: the JSON value was an object, validated as T.
    """

    __slots__ = ()

    @property
    def id(self) -> str:
        raise NotImplementedError

    @property
    def is_expanded(self) -> bool:
        raise NotImplementedError

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: Any
    ) -> core_schema.CoreSchema:
        args = get_args(source_type)
        record_type = args[0] if args else Any
        record_schema = handler.generate_schema(record_type)

        def dispatch(value: Any, validate_record: Any) -> Expandable[Any]:
            if isinstance(value, Expandable):
                return value
            if isinstance(value, str):
                return Reference(value)
            if isinstance(value, dict):
                return Expanded(validate_record(value))
            raise PydanticCustomError(
                "expandable_type",
                "expected an id string or an object, got {kind}",
                {"kind": type(value).__name__},
            )

        return core_schema.no_info_wrap_validator_function(
            dispatch,
            record_schema,
            serialization=core_schema.plain_serializer_function_ser_schema(
                _serialize_expandable
            ),
        )


class Reference(Expandable[T]):
    """Unexpanded relation: only the related object's id."""

    __slots__ = ("_id",)

    def __init__(self, id: str):
        self._id = id

    @property
    def id(self) -> str:
        return self._id

    @property
    def is_expanded(self) -> bool:
        return False

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Reference) and other._id == self._id

    def __hash__(self) -> int:
        return hash(("reference", self._id))

    def __repr__(self) -> str:
        return f"Reference({self._id!r})"


class Expanded(Expandable[T]):
    """Expanded relation: the full related record."""

    __slots__ = ("record",)

    def __init__(self, record: T):
        self.record = record

    @property
    def id(self) -> str:
        record_id = getattr(self.record, "id", None)
        if record_id is None and isinstance(self.record, dict):
            record_id = self.record.get("id")
        return record_id

    @property
    def is_expanded(self) -> bool:
        return True

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Expanded) and other.record == self.record

    def __hash__(self) -> int:
        return hash(("expanded", self.id))

    def __repr__(self) -> str:
        return f"Expanded({self.record!r})"


def _serialize_expandable(value: Expandable[Any]) -> Any:
    if isinstance(value, Expanded):
        record = value.record
        return record.model_dump() if isinstance(record, BaseModel) else record
    return value.id


class ApiErrorBody(BaseModel):
    """Error description from a non-2xx response.

    The server wraps it as {"error": {...}}; `status` is filled in from the
    HTTP response when the body omits it.
    """

    status: int
    type: str
    message: str
    code: str | None = None
    param: str | None = None


@lru_cache(maxsize=None)
def _adapter(shape: Any) -> TypeAdapter[Any]:
    return TypeAdapter(shape)


def decode(body: bytes | str, shape: type[T]) -> T:
    """Validate a JSON response body into `shape`.

    Args:
        body: Raw response body.
        shape: Target type (a pydantic model, generic alias, dict, ...).

    Returns:
        The decoded value.

    Raises:
        SerializationError: If the body is not JSON, has the wrong top-level
            type, misses a required field or holds an invalid value.
    """
    try:
        return _adapter(shape).validate_json(body)
    except ValidationError as e:
        name = getattr(shape, "__name__", repr(shape))
        raise SerializationError(
            f"Response did not match {name}: {e.error_count()} error(s)",
            code=ErrorCode.INVALID_RESPONSE,
            cause=e,
        ) from e


def decode_error_body(body: bytes | str, status: int) -> ApiErrorBody | None:
    """Parse the {"error": {...}} envelope of a failed response.

    Returns:
        The decoded body, or None when the body is empty or not an error
        envelope.
    """
    if not body:
        return None
    try:
        payload = json.loads(body)
    except (ValueError, UnicodeDecodeError):
        return None
    if not isinstance(payload, dict) or not isinstance(payload.get("error"), dict):
        return None

    error = dict(payload["error"])
    error.setdefault("status", status)
    try:
        return ApiErrorBody.model_validate(error)
    except ValidationError:
        return None
