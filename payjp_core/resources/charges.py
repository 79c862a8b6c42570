"""
Charges: payments against a card token or a customer.

A charge created with capture=False is only authorized; capture() settles
it, reauth() extends the authorization window, and refund() returns all or
part of a captured amount.
"""

from __future__ import annotations

from .base import (
    ApiResource,
    ListParams,
    ListResponse,
    Metadata,
    Params,
    Service,
    resource_path,
)
from .cards import Card, CardThreeDSecureStatus
from .customers import Customer
from .subscriptions import Subscription
from ..runtime.decoding import Expandable


class Charge(ApiResource):
    """A payment.

    `customer` and `subscription` are expandable relations: a bare id by
    default, the full record when expanded.
    """

    created: int
    amount: int
    currency: str
    paid: bool
    captured: bool
    refunded: bool
    amount_refunded: int
    captured_at: int | None = None
    card: Card | None = None
    customer: Expandable[Customer] | None = None
    subscription: Expandable[Subscription] | None = None
    description: str | None = None
    failure_code: str | None = None
    failure_message: str | None = None
    fee_rate: str | None = None
    refund_reason: str | None = None
    expired_at: int | None = None
    metadata: Metadata | None = None
    three_d_secure_status: CardThreeDSecureStatus | None = None
    tenant: str | None = None
    platform_fee: int | None = None
    platform_fee_rate: str | None = None
    total_platform_fee: int | None = None


class CreateChargeParams(Params):
    """Parameters for creating a charge.

    Either `card` (a token id) or `customer` must be given. Set
    `capture=False` to authorize only, `expiry_days` (1-60) to bound the
    authorization.
    """

    amount: int
    currency: str = "jpy"
    card: str | None = None
    customer: str | None = None
    description: str | None = None
    capture: bool | None = None
    expiry_days: int | None = None
    metadata: Metadata | None = None
    three_d_secure: bool | None = None
    tenant: str | None = None
    platform_fee: int | None = None


class UpdateChargeParams(Params):
    description: str | None = None
    metadata: Metadata | None = None


class CaptureParams(Params):
    """Omit `amount` to capture the full authorized amount."""

    amount: int | None = None


class RefundParams(Params):
    """Omit `amount` for a full refund."""

    amount: int | None = None
    refund_reason: str | None = None


class ReauthParams(Params):
    expiry_days: int | None = None


class ListChargeParams(ListParams):
    customer: str | None = None
    subscription: str | None = None
    tenant: str | None = None


class ChargeService(Service):
    async def create(self, params: CreateChargeParams) -> Charge:
        return await self._post(resource_path("charges"), Charge, params)

    async def retrieve(self, charge_id: str) -> Charge:
        return await self._get(resource_path("charges", charge_id), Charge)

    async def update(self, charge_id: str, params: UpdateChargeParams) -> Charge:
        return await self._post(resource_path("charges", charge_id), Charge, params)

    async def capture(self, charge_id: str, params: CaptureParams | None = None) -> Charge:
        return await self._post(resource_path("charges", charge_id, "capture"), Charge, params)

    async def refund(self, charge_id: str, params: RefundParams | None = None) -> Charge:
        return await self._post(resource_path("charges", charge_id, "refund"), Charge, params)

    async def reauth(self, charge_id: str, params: ReauthParams | None = None) -> Charge:
        return await self._post(resource_path("charges", charge_id, "reauth"), Charge, params)

    async def tds_finish(self, charge_id: str) -> Charge:
        """Complete 3D Secure authentication for a charge."""
        return await self._post(resource_path("charges", charge_id, "tds_finish"), Charge)

    async def list(self, params: ListChargeParams | None = None) -> ListResponse[Charge]:
        return await self._get(resource_path("charges"), ListResponse[Charge], params)
