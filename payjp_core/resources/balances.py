"""
Balances: the running total owed to or by the account for a period.
"""

from __future__ import annotations

from .base import ApiResource, ListParams, ListResponse, Service, resource_path
from .statements import StatementUrls
from .transfers import BankInfo


class Balance(ApiResource):
    created: int
    total: int
    available: int
    pending: int
    state: str | None = None
    tenant: str | None = None
    bank_info: BankInfo | None = None
    closed_at: int | None = None
    due_date: int | None = None


class BalanceService(Service):
    async def retrieve(self, balance_id: str) -> Balance:
        return await self._get(resource_path("balances", balance_id), Balance)

    async def statement_urls(self, balance_id: str) -> StatementUrls:
        """Issue a download URL for the balance's statement."""
        return await self._post(
            resource_path("balances", balance_id, "statement_urls"), StatementUrls
        )

    async def list(self, params: ListParams | None = None) -> ListResponse[Balance]:
        return await self._get(resource_path("balances"), ListResponse[Balance], params)
