"""
Terms: aggregation periods for sales and fees.
"""

from __future__ import annotations

from .base import ApiResource, ListParams, ListResponse, Service, resource_path


class Term(ApiResource):
    charge_count: int
    refund_count: int
    start_at: int | None = None
    end_at: int | None = None
    dispute_count: int | None = None


class TermService(Service):
    async def retrieve(self, term_id: str) -> Term:
        return await self._get(resource_path("terms", term_id), Term)

    async def list(self, params: ListParams | None = None) -> ListResponse[Term]:
        return await self._get(resource_path("terms"), ListResponse[Term], params)
