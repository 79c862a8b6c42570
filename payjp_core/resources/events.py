"""
Events: the audit log of changes to account objects.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel

from .base import ApiResource, ListParams, ListResponse, Service, resource_path


class EventType(str, Enum):
    """Well-known event types.

    Event.type stays a plain string so new server-side types still decode;
    compare against these members (they are str subclasses).
    """

    CHARGE_CREATED = "charge.created"
    CHARGE_UPDATED = "charge.updated"
    CHARGE_SUCCEEDED = "charge.succeeded"
    CHARGE_FAILED = "charge.failed"
    CHARGE_CAPTURED = "charge.captured"
    CHARGE_REFUNDED = "charge.refunded"
    CUSTOMER_CREATED = "customer.created"
    CUSTOMER_UPDATED = "customer.updated"
    CUSTOMER_DELETED = "customer.deleted"
    CUSTOMER_CARD_CREATED = "customer.card.created"
    CUSTOMER_CARD_UPDATED = "customer.card.updated"
    CUSTOMER_CARD_DELETED = "customer.card.deleted"
    PLAN_CREATED = "plan.created"
    PLAN_UPDATED = "plan.updated"
    PLAN_DELETED = "plan.deleted"
    SUBSCRIPTION_CREATED = "subscription.created"
    SUBSCRIPTION_UPDATED = "subscription.updated"
    SUBSCRIPTION_DELETED = "subscription.deleted"
    SUBSCRIPTION_PAUSED = "subscription.paused"
    SUBSCRIPTION_RESUMED = "subscription.resumed"
    SUBSCRIPTION_CANCELED = "subscription.canceled"
    SUBSCRIPTION_RENEWED = "subscription.renewed"
    TRANSFER_CREATED = "transfer.created"


class EventData(BaseModel):
    """The object the event is about, as raw JSON.

    `previous_attributes` holds the changed fields' old values on update
    events.
    """

    object: dict[str, Any]
    previous_attributes: dict[str, Any] | None = None


class Event(ApiResource):
    created: int
    type: str
    data: EventData
    pending_webhooks: int | None = None


class EventService(Service):
    async def retrieve(self, event_id: str) -> Event:
        return await self._get(resource_path("events", event_id), Event)

    async def list(self, params: ListParams | None = None) -> ListResponse[Event]:
        return await self._get(resource_path("events"), ListResponse[Event], params)
