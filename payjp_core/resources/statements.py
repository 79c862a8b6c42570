"""
Statements and their download URLs.
"""

from __future__ import annotations

from .base import ApiResource, ListParams, ListResponse, Service, resource_path
from pydantic import BaseModel


class Statement(ApiResource):
    created: int
    title: str | None = None
    tenant: str | None = None
    term: str | None = None
    balance_id: str | None = None
    type: str | None = None
    updated: int | None = None


class StatementUrls(BaseModel):
    """A short-lived download URL. `expires` is a Unix timestamp."""

    object: str
    expires: int
    url: str | None = None


class StatementService(Service):
    async def retrieve(self, statement_id: str) -> Statement:
        return await self._get(resource_path("statements", statement_id), Statement)

    async def statement_urls(self, statement_id: str) -> StatementUrls:
        """Issue a download URL for the statement."""
        return await self._post(
            resource_path("statements", statement_id, "statement_urls"), StatementUrls
        )

    async def list(self, params: ListParams | None = None) -> ListResponse[Statement]:
        return await self._get(resource_path("statements"), ListResponse[Statement], params)
