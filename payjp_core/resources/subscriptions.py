"""
Subscriptions: a customer enrolled in a plan.

Lifecycle: active/trial -> paused -> active (resume), and cancel ends the
subscription at the current period end.
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
from .plans import Plan


class SubscriptionStatus(str, Enum):
    ACTIVE = "active"
    TRIAL = "trial"
    CANCELED = "canceled"
    PAUSED = "paused"


class Subscription(ApiResource):
    """A plan subscription.

    Attributes:
        customer: Id of the subscribed customer.
        plan: The subscribed plan, always returned inline.
        status: Current lifecycle state.
    """

    created: int
    customer: str
    plan: Plan
    status: SubscriptionStatus
    start: int
    trial_end: int | None = None
    paused_at: int | None = None
    canceled_at: int | None = None
    resumed_at: int | None = None
    current_period_start: int | None = None
    current_period_end: int | None = None
    prorate: bool | None = None
    metadata: Metadata | None = None


class CreateSubscriptionParams(Params):
    customer: str
    plan: str
    trial_end: int | None = None
    prorate: bool | None = None
    metadata: Metadata | None = None


class UpdateSubscriptionParams(Params):
    plan: str | None = None
    trial_end: int | None = None
    prorate: bool | None = None
    metadata: Metadata | None = None


class ResumeSubscriptionParams(Params):
    prorate: bool | None = None


class SubscriptionService(Service):
    async def create(self, params: CreateSubscriptionParams) -> Subscription:
        return await self._post(resource_path("subscriptions"), Subscription, params)

    async def retrieve(self, subscription_id: str) -> Subscription:
        return await self._get(resource_path("subscriptions", subscription_id), Subscription)

    async def update(
        self, subscription_id: str, params: UpdateSubscriptionParams
    ) -> Subscription:
        return await self._post(
            resource_path("subscriptions", subscription_id), Subscription, params
        )

    async def pause(self, subscription_id: str) -> Subscription:
        return await self._post(
            resource_path("subscriptions", subscription_id, "pause"), Subscription
        )

    async def resume(
        self, subscription_id: str, params: ResumeSubscriptionParams | None = None
    ) -> Subscription:
        return await self._post(
            resource_path("subscriptions", subscription_id, "resume"), Subscription, params
        )

    async def cancel(self, subscription_id: str) -> Subscription:
        return await self._post(
            resource_path("subscriptions", subscription_id, "cancel"), Subscription
        )

    async def delete(self, subscription_id: str) -> DeletedObject:
        return await self._delete(resource_path("subscriptions", subscription_id))

    async def list(self, params: ListParams | None = None) -> ListResponse[Subscription]:
        return await self._get(
            resource_path("subscriptions"), ListResponse[Subscription], params
        )
