"""
Transfers: payouts of the account balance to the registered bank account.
"""

from __future__ import annotations

from pydantic import BaseModel

from .base import ApiResource, ListParams, ListResponse, Service, resource_path


class BankInfo(BaseModel):
    bank_code: str
    branch_code: str
    account_type: str
    account_number: str
    account_holder_name: str


class TransferSummary(BaseModel):
    charge_amount: int
    charge_count: int
    charge_fee: int
    refund_amount: int
    refund_count: int


class Transfer(ApiResource):
    created: int
    amount: int
    currency: str
    status: str
    summary: TransferSummary
    scheduled_date: int | None = None
    bank: BankInfo | None = None
    statement_descriptor: str | None = None
    term: str | None = None


class TransferService(Service):
    async def retrieve(self, transfer_id: str) -> Transfer:
        return await self._get(resource_path("transfers", transfer_id), Transfer)

    async def list(self, params: ListParams | None = None) -> ListResponse[Transfer]:
        return await self._get(resource_path("transfers"), ListResponse[Transfer], params)
