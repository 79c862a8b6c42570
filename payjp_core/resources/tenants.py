"""
Platform API: tenants (sub-merchants) and their transfers.
"""

from __future__ import annotations

from pydantic import BaseModel

from .base import (
    ApiResource,
    DeletedObject,
    ListParams,
    ListResponse,
    Metadata,
    Params,
    Service,
    resource_path,
)


class BankAccount(BaseModel):
    bank_code: str
    branch_code: str
    account_type: str
    account_number: str
    account_holder_name: str


class Tenant(ApiResource):
    created: int
    name: str | None = None
    platform_fee_rate: str | None = None
    minimum_transfer_amount: int | None = None
    bank_account: BankAccount | None = None
    currencies_supported: list[str] | None = None
    default_currency: str | None = None
    metadata: Metadata | None = None


class CreateTenantParams(Params):
    """`id` lets the platform choose the tenant id."""

    id: str | None = None
    name: str | None = None
    platform_fee_rate: str | None = None
    minimum_transfer_amount: int | None = None
    bank_account: BankAccount | None = None
    metadata: Metadata | None = None


class UpdateTenantParams(Params):
    name: str | None = None
    platform_fee_rate: str | None = None
    minimum_transfer_amount: int | None = None
    bank_account: BankAccount | None = None
    metadata: Metadata | None = None


class ApplicationUrls(BaseModel):
    """Onboarding URL for a tenant's review application."""

    url: str | None = None
    expires: int | None = None


class TenantTransferSummary(BaseModel):
    charge_amount: int
    charge_count: int
    charge_fee: int
    platform_fee: int
    refund_amount: int
    refund_count: int


class TenantTransfer(ApiResource):
    created: int
    tenant: str
    amount: int
    currency: str
    status: str
    summary: TenantTransferSummary
    scheduled_date: int | None = None
    term: str | None = None


class TenantService(Service):
    async def create(self, params: CreateTenantParams | None = None) -> Tenant:
        return await self._post(resource_path("tenants"), Tenant, params)

    async def retrieve(self, tenant_id: str) -> Tenant:
        return await self._get(resource_path("tenants", tenant_id), Tenant)

    async def update(self, tenant_id: str, params: UpdateTenantParams) -> Tenant:
        return await self._post(resource_path("tenants", tenant_id), Tenant, params)

    async def delete(self, tenant_id: str) -> DeletedObject:
        return await self._delete(resource_path("tenants", tenant_id))

    async def list(self, params: ListParams | None = None) -> ListResponse[Tenant]:
        return await self._get(resource_path("tenants"), ListResponse[Tenant], params)

    async def create_application_urls(self, tenant_id: str) -> ApplicationUrls:
        return await self._post(
            resource_path("tenants", tenant_id, "application_urls"), ApplicationUrls
        )


class TenantTransferService(Service):
    async def retrieve(self, transfer_id: str) -> TenantTransfer:
        return await self._get(resource_path("tenant_transfers", transfer_id), TenantTransfer)

    async def list(self, params: ListParams | None = None) -> ListResponse[TenantTransfer]:
        return await self._get(
            resource_path("tenant_transfers"), ListResponse[TenantTransfer], params
        )
