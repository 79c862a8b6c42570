"""
Plans: recurring billing templates used by subscriptions.
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


class PlanInterval(str, Enum):
    MONTH = "month"
    YEAR = "year"


class Plan(ApiResource):
    created: int
    amount: int
    currency: str
    interval: PlanInterval
    name: str | None = None
    trial_days: int | None = None
    billing_day: int | None = None
    metadata: Metadata | None = None


class CreatePlanParams(Params):
    """Parameters for creating a plan.

    `id` lets the caller choose the plan id; the server generates one if
    omitted.
    """

    amount: int
    currency: str
    interval: PlanInterval
    id: str | None = None
    name: str | None = None
    trial_days: int | None = None
    billing_day: int | None = None
    metadata: Metadata | None = None


class UpdatePlanParams(Params):
    name: str | None = None
    trial_days: int | None = None
    billing_day: int | None = None
    metadata: Metadata | None = None


class PlanService(Service):
    async def create(self, params: CreatePlanParams) -> Plan:
        return await self._post(resource_path("plans"), Plan, params)

    async def retrieve(self, plan_id: str) -> Plan:
        return await self._get(resource_path("plans", plan_id), Plan)

    async def update(self, plan_id: str, params: UpdatePlanParams) -> Plan:
        return await self._post(resource_path("plans", plan_id), Plan, params)

    async def delete(self, plan_id: str) -> DeletedObject:
        return await self._delete(resource_path("plans", plan_id))

    async def list(self, params: ListParams | None = None) -> ListResponse[Plan]:
        return await self._get(resource_path("plans"), ListResponse[Plan], params)
