"""
Cards stored on a customer.
"""

from __future__ import annotations

from enum import Enum

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
from ..runtime.executor import RequestExecutor


class CardThreeDSecureStatus(str, Enum):
    UNVERIFIED = "unverified"
    VERIFIED = "verified"
    ATTEMPTED = "attempted"
    FAILED = "failed"
    ERROR = "error"


class Card(ApiResource):
    """A payment card, either on a customer or embedded in a token/charge."""

    created: int
    brand: str
    exp_month: int
    exp_year: int
    last4: str
    customer: str | None = None
    cvc_check: str | None = None
    fingerprint: str | None = None
    name: str | None = None
    address_line1: str | None = None
    address_line2: str | None = None
    address_city: str | None = None
    address_state: str | None = None
    address_zip: str | None = None
    address_zip_check: str | None = None
    country: str | None = None
    three_d_secure_status: CardThreeDSecureStatus | None = None
    email: str | None = None
    phone: str | None = None
    metadata: Metadata | None = None


class CreateCardParams(Params):
    """Attach a card to a customer from a token id."""

    card: str
    default: bool | None = None
    metadata: Metadata | None = None


class UpdateCardParams(Params):
    exp_month: int | None = None
    exp_year: int | None = None
    name: str | None = None
    address_line1: str | None = None
    address_line2: str | None = None
    address_city: str | None = None
    address_state: str | None = None
    address_zip: str | None = None
    country: str | None = None
    email: str | None = None
    phone: str | None = None
    metadata: Metadata | None = None


class CardService(Service):
    """Card operations scoped to one customer."""

    def __init__(self, executor: RequestExecutor, customer_id: str):
        super().__init__(executor)
        self.customer_id = customer_id

    def _path(self, *segments: str) -> str:
        return resource_path("customers", self.customer_id, "cards", *segments)

    async def create(self, params: CreateCardParams) -> Card:
        return await self._post(self._path(), Card, params)

    async def retrieve(self, card_id: str) -> Card:
        return await self._get(self._path(card_id), Card)

    async def update(self, card_id: str, params: UpdateCardParams) -> Card:
        return await self._post(self._path(card_id), Card, params)

    async def delete(self, card_id: str) -> DeletedObject:
        return await self._delete(self._path(card_id))

    async def list(self, params: ListParams | None = None) -> ListResponse[Card]:
        return await self._get(self._path(), ListResponse[Card], params)
