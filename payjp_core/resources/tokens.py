"""
Card tokens.

Tokens are single-use handles for card details. Creating one is the only
operation available to publishable-key clients; the card details are sent
as nested form fields (card[number], card[exp_month], ...).
"""

from __future__ import annotations

from .base import ApiResource, Params, Service, resource_path
from .cards import Card


class Token(ApiResource):
    created: int
    used: bool
    card: Card


class CardDetails(Params):
    """Raw card details for token creation."""

    number: str
    exp_month: int
    exp_year: int
    cvc: str
    name: str | None = None
    address_line1: str | None = None
    address_line2: str | None = None
    address_city: str | None = None
    address_state: str | None = None
    address_zip: str | None = None
    country: str | None = None
    email: str | None = None
    phone: str | None = None


class CreateTokenParams(Params):
    card: CardDetails


class TokenService(Service):
    async def create(self, params: CreateTokenParams) -> Token:
        return await self._post(resource_path("tokens"), Token, params)

    async def retrieve(self, token_id: str) -> Token:
        return await self._get(resource_path("tokens", token_id), Token)

    async def tds_finish(self, token_id: str) -> Token:
        """Complete 3D Secure authentication for a token."""
        return await self._post(resource_path("tokens", token_id, "tds_finish"), Token)


class PublicTokenService(Service):
    """Token creation with a publishable key."""

    async def create(self, params: CreateTokenParams) -> Token:
        return await self._post(resource_path("tokens"), Token, params)
