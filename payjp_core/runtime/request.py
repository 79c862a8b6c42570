"""
Description of one logical API call.

A RequestDescriptor is built fresh for each call and never mutated. Its
encoded form is computed once, so every retry of the call re-sends the same
bytes.
"""

from __future__ import annotations

import uuid
from collections.abc import Mapping
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

from .encoding import FormPairs, encode, encode_form


class HttpMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    DELETE = "DELETE"


def _new_request_id() -> str:
    return f"req_{uuid.uuid4().hex[:12]}"


class RequestDescriptor(BaseModel):
    """A method, a resource path and the parameter tree for one call.

    Attributes:
        method: HTTP method.
        path: Resource path relative to the base URL, e.g. "/charges/ch_1".
        params: Parameters as a mapping or pydantic model, possibly nested.
        request_id: Correlation id used in log lines for this call.
    """

    method: HttpMethod
    path: str
    params: Any = None
    request_id: str = Field(default_factory=_new_request_id)

    model_config = {"frozen": True, "arbitrary_types_allowed": True}

    @classmethod
    def get(
        cls, path: str, params: BaseModel | Mapping[str, Any] | None = None
    ) -> "RequestDescriptor":
        return cls(method=HttpMethod.GET, path=path, params=params)

    @classmethod
    def post(
        cls, path: str, params: BaseModel | Mapping[str, Any] | None = None
    ) -> "RequestDescriptor":
        return cls(method=HttpMethod.POST, path=path, params=params)

    @classmethod
    def delete(cls, path: str) -> "RequestDescriptor":
        return cls(method=HttpMethod.DELETE, path=path)

    @property
    def label(self) -> str:
        """Short text used to identify the call in logs."""
        return f"[{self.request_id}] {self.method.value} {self.path}"

    def query_pairs(self) -> FormPairs:
        """Encoded pairs for the query string (GET only)."""
        if self.method is not HttpMethod.GET:
            return []
        return encode(self.params)

    def form_body(self) -> bytes | None:
        """Encoded form body (POST only).

        Raises:
            InvalidRequestError: If a parameter cannot be encoded.
        """
        if self.method is not HttpMethod.POST:
            return None
        return encode_form(self.params).encode("ascii")
