"""
Shared building blocks for resource modules.

- ApiResource: Fields every API object carries
- DeletedObject: Response of every delete endpoint
- ListResponse / ListParams: Paginated list envelope and its query parameters
- Service: Thin base that turns (method, path, params) into an executor call
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Generic, TypeVar
from urllib.parse import quote

from pydantic import BaseModel

from ..runtime.executor import RequestExecutor
from ..runtime.request import HttpMethod, RequestDescriptor

T = TypeVar("T")

Metadata = dict[str, str]


class ApiResource(BaseModel):
    """Base for records returned by the API."""

    id: str
    object: str
    livemode: bool


class DeletedObject(BaseModel):
    """Confirmation returned when an object is deleted."""

    id: str
    deleted: bool
    livemode: bool


class ListResponse(BaseModel, Generic[T]):
    """A page of results.

    Attributes:
        object: Always "list".
        data: Items on this page.
        has_more: Whether more items exist past this page.
        url: Endpoint that produced the list.
        count: Total number of items.
    """

    object: str
    data: list[T]
    has_more: bool
    url: str
    count: int

    def __iter__(self):
        return iter(self.data)

    def __len__(self) -> int:
        return len(self.data)


class Params(BaseModel):
    """Base for request parameter models.

    Unknown fields are rejected so a misspelled parameter fails locally
    instead of being silently dropped.
    """

    model_config = {"extra": "forbid"}


class ListParams(Params):
    """Pagination and time-window filters shared by list endpoints.

    `since` and `until` are Unix timestamps.
    """

    limit: int | None = None
    offset: int | None = None
    since: int | None = None
    until: int | None = None


RequestParams = Params | Mapping[str, Any] | None


def resource_path(*segments: str) -> str:
    """Join path segments, escaping each one (ids included)."""
    return "/" + "/".join(quote(str(segment), safe="") for segment in segments)


class Service:
    """Base for per-resource services.

    Subclasses only supply paths, methods and parameter/response types.
    """

    def __init__(self, executor: RequestExecutor):
        self._executor = executor

    async def _request(
        self,
        method: HttpMethod,
        path: str,
        shape: type[T],
        params: RequestParams = None,
    ) -> T:
        descriptor = RequestDescriptor(method=method, path=path, params=params)
        return await self._executor.execute(descriptor, shape)

    async def _get(self, path: str, shape: type[T], params: RequestParams = None) -> T:
        return await self._request(HttpMethod.GET, path, shape, params)

    async def _post(self, path: str, shape: type[T], params: RequestParams = None) -> T:
        return await self._request(HttpMethod.POST, path, shape, params)

    async def _delete(self, path: str, shape: type[T] = DeletedObject) -> T:
        return await self._request(HttpMethod.DELETE, path, shape)
