"""
The merchant account that owns the API key.
"""

from __future__ import annotations

from .base import ApiResource, Metadata, Service, resource_path


class Account(ApiResource):
    created: int
    email: str | None = None
    merchant_name: str | None = None
    business_type: str | None = None
    currencies_supported: list[str] | None = None
    default_currency: str | None = None
    product_detail: str | None = None
    metadata: Metadata | None = None


class AccountService(Service):
    async def retrieve(self) -> Account:
        return await self._get(resource_path("account"), Account)
