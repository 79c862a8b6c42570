"""
3D Secure requests for cards stored on customers.

The flow: create a request for a card resource, send the cardholder to
`authentication_url`, then poll the request (or listen for events) until
its status leaves in_progress.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel

from .base import ApiResource, ListParams, ListResponse, Params, Service, resource_path


class ThreeDSecureStatus(str, Enum):
    IN_PROGRESS = "in_progress"
    VERIFIED = "verified"
    ATTEMPTED = "attempted"
    FAILED = "failed"
    ERROR = "error"
    ABORTED = "aborted"
    UNKNOWN = "unknown"


class ThreeDSecureResult(BaseModel):
    code: str | None = None
    message: str | None = None
    eci: str | None = None


class ThreeDSecureRequest(ApiResource):
    created: int
    resource_type: str | None = None
    resource_id: str | None = None
    status: ThreeDSecureStatus | None = None
    authentication_url: str | None = None
    tenant: str | None = None
    state: str | None = None
    result: ThreeDSecureResult | None = None


class CreateThreeDSecureRequestParams(Params):
    """`resource_id` is the id of the card to authenticate."""

    resource_id: str
    tenant: str | None = None


class ThreeDSecureRequestService(Service):
    async def create(self, params: CreateThreeDSecureRequestParams) -> ThreeDSecureRequest:
        return await self._post(
            resource_path("three_d_secure_requests"), ThreeDSecureRequest, params
        )

    async def retrieve(self, request_id: str) -> ThreeDSecureRequest:
        return await self._get(
            resource_path("three_d_secure_requests", request_id), ThreeDSecureRequest
        )

    async def list(
        self, params: ListParams | None = None
    ) -> ListResponse[ThreeDSecureRequest]:
        return await self._get(
            resource_path("three_d_secure_requests"),
            ListResponse[ThreeDSecureRequest],
            params,
        )
