"""
Customers and the per-customer handle.

`Customer.default_card` is expandable: the API returns the card id unless
the request asked for the card to be expanded, in which case the full Card
object is embedded.
"""

from __future__ import annotations

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
from .cards import Card, CardService
from .subscriptions import Subscription
from ..runtime.decoding import Expandable
from ..runtime.executor import RequestExecutor


class Customer(ApiResource):
    created: int
    default_card: Expandable[Card] | None = None
    email: str | None = None
    description: str | None = None
    metadata: Metadata | None = None
    cards: ListResponse[Card] | None = None
    subscriptions: ListResponse[Subscription] | None = None


class CreateCustomerParams(Params):
    """Parameters for creating a customer.

    `card` is a token id; the card becomes the customer's default card.
    """

    id: str | None = None
    email: str | None = None
    description: str | None = None
    card: str | None = None
    metadata: Metadata | None = None


class UpdateCustomerParams(Params):
    email: str | None = None
    description: str | None = None
    card: str | None = None
    default_card: str | None = None
    metadata: Metadata | None = None


class CustomerService(Service):
    async def create(self, params: CreateCustomerParams | None = None) -> Customer:
        return await self._post(resource_path("customers"), Customer, params)

    async def retrieve(self, customer_id: str) -> Customer:
        return await self._get(resource_path("customers", customer_id), Customer)

    async def update(self, customer_id: str, params: UpdateCustomerParams) -> Customer:
        return await self._post(resource_path("customers", customer_id), Customer, params)

    async def delete(self, customer_id: str) -> DeletedObject:
        return await self._delete(resource_path("customers", customer_id))

    async def list(self, params: ListParams | None = None) -> ListResponse[Customer]:
        return await self._get(resource_path("customers"), ListResponse[Customer], params)


class CustomerHandle:
    """Operations bound to one customer id, including its cards.

    Example:
        card = await client.customer("cus_123").cards.create(
            CreateCardParams(card="tok_abc")
        )
    """

    def __init__(self, executor: RequestExecutor, customer_id: str):
        self.id = customer_id
        self._service = CustomerService(executor)
        self.cards = CardService(executor, customer_id)

    async def retrieve(self) -> Customer:
        return await self._service.retrieve(self.id)

    async def update(self, params: UpdateCustomerParams) -> Customer:
        return await self._service.update(self.id, params)

    async def delete(self) -> DeletedObject:
        return await self._service.delete(self.id)
