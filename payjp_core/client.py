"""
Client facades.

PayjpClient authenticates with a secret key and exposes every resource
service. PayjpPublicClient authenticates with a publishable key and can
only create tokens.

Example:
    async with PayjpClient("sk_test_...") as client:
        charge = await client.charges.create(
            CreateChargeParams(amount=1000, card="tok_...")
        )
"""

from __future__ import annotations

from typing import Any

import httpx

from .config import Settings
from .resources.account import AccountService
from .resources.balances import BalanceService
from .resources.charges import ChargeService
from .resources.customers import CustomerHandle, CustomerService
from .resources.events import EventService
from .resources.plans import PlanService
from .resources.statements import StatementService
from .resources.subscriptions import SubscriptionService
from .resources.tenants import TenantService, TenantTransferService
from .resources.terms import TermService
from .resources.three_d_secure import ThreeDSecureRequestService
from .resources.tokens import PublicTokenService, TokenService
from .resources.transfers import TransferService
from .runtime.credentials import Credential
from .runtime.executor import DEFAULT_BASE_URL, RequestExecutor
from .runtime.retry import (
    DEFAULT_INITIAL_DELAY,
    DEFAULT_MAX_DELAY,
    DEFAULT_MAX_RETRIES,
    DEFAULT_TIMEOUT,
    RetryPolicy,
)


class _BaseClient:
    """Executor ownership and lifecycle shared by both facades."""

    def __init__(
        self,
        credential: Credential,
        *,
        timeout: float,
        max_retries: int,
        retry_initial_delay: float,
        retry_max_delay: float,
        base_url: str,
        http_client: httpx.AsyncClient | None,
    ):
        policy = RetryPolicy.from_max_retries(
            max_retries,
            initial_delay=retry_initial_delay,
            max_delay=retry_max_delay,
            timeout=timeout,
        )
        self._executor = RequestExecutor(
            credential,
            retry_policy=policy,
            base_url=base_url,
            http_client=http_client,
        )

    @property
    def retry_policy(self) -> RetryPolicy:
        return self._executor.retry_policy

    @property
    def base_url(self) -> str:
        return self._executor.base_url

    async def close(self) -> None:
        """Close the underlying HTTP client and release connections."""
        await self._executor.close()

    async def __aenter__(self):
        await self._executor.__aenter__()
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._executor.credential!r}, base_url={self.base_url!r})"


class PayjpClient(_BaseClient):
    """Secret-key client with the full resource surface.

    Args:
        api_key: Secret key (sk_test_... or sk_live_...). Surrounding
            whitespace is ignored.
        timeout: Per-attempt timeout in seconds.
        max_retries: Retries after the first attempt for 429 and transient
            network failures. 0 disables retrying.
        retry_initial_delay: Base backoff delay in seconds.
        retry_max_delay: Upper bound for any backoff delay in seconds.
        base_url: API root.
        http_client: Optional pre-built httpx.AsyncClient (not closed by
            close()).

    Raises:
        CredentialError: If the key is empty or not a secret key.
    """

    def __init__(
        self,
        api_key: str,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        max_retries: int = DEFAULT_MAX_RETRIES,
        retry_initial_delay: float = DEFAULT_INITIAL_DELAY,
        retry_max_delay: float = DEFAULT_MAX_DELAY,
        base_url: str = DEFAULT_BASE_URL,
        http_client: httpx.AsyncClient | None = None,
    ):
        super().__init__(
            Credential.secret(api_key),
            timeout=timeout,
            max_retries=max_retries,
            retry_initial_delay=retry_initial_delay,
            retry_max_delay=retry_max_delay,
            base_url=base_url,
            http_client=http_client,
        )
        executor = self._executor
        self.charges = ChargeService(executor)
        self.customers = CustomerService(executor)
        self.tokens = TokenService(executor)
        self.plans = PlanService(executor)
        self.subscriptions = SubscriptionService(executor)
        self.transfers = TransferService(executor)
        self.events = EventService(executor)
        self.account = AccountService(executor)
        self.statements = StatementService(executor)
        self.balances = BalanceService(executor)
        self.terms = TermService(executor)
        self.three_d_secure_requests = ThreeDSecureRequestService(executor)
        self.tenants = TenantService(executor)
        self.tenant_transfers = TenantTransferService(executor)

    def customer(self, customer_id: str) -> CustomerHandle:
        """Operations bound to one customer, including `.cards`."""
        return CustomerHandle(self._executor, customer_id)

    @classmethod
    def from_settings(cls, settings: Settings | None = None, **overrides: Any) -> "PayjpClient":
        """Build a client from environment settings.

        Args:
            settings: Settings to read. Defaults to a fresh Settings().
            **overrides: Constructor arguments that take precedence.
        """
        settings = settings or Settings()
        kwargs: dict[str, Any] = {
            "timeout": settings.PAYJP_TIMEOUT,
            "max_retries": settings.PAYJP_MAX_RETRIES,
            "retry_initial_delay": settings.PAYJP_RETRY_INITIAL_DELAY,
            "retry_max_delay": settings.PAYJP_RETRY_MAX_DELAY,
            "base_url": settings.PAYJP_API_BASE,
        }
        kwargs.update(overrides)
        return cls(settings.PAYJP_SECRET_KEY, **kwargs)


class PayjpPublicClient(_BaseClient):
    """Publishable-key client. Only token creation is available.

    Args:
        api_key: Publishable key (pk_test_... or pk_live_...).
        password: Optional secondary secret sent as the Basic auth password.

    Other arguments are as for PayjpClient.

    Raises:
        CredentialError: If the key is empty or not a publishable key.
    """

    def __init__(
        self,
        api_key: str,
        password: str = "",
        *,
        timeout: float = DEFAULT_TIMEOUT,
        max_retries: int = DEFAULT_MAX_RETRIES,
        retry_initial_delay: float = DEFAULT_INITIAL_DELAY,
        retry_max_delay: float = DEFAULT_MAX_DELAY,
        base_url: str = DEFAULT_BASE_URL,
        http_client: httpx.AsyncClient | None = None,
    ):
        super().__init__(
            Credential.public(api_key, password),
            timeout=timeout,
            max_retries=max_retries,
            retry_initial_delay=retry_initial_delay,
            retry_max_delay=retry_max_delay,
            base_url=base_url,
            http_client=http_client,
        )
        self.tokens = PublicTokenService(self._executor)

    @classmethod
    def from_settings(
        cls, settings: Settings | None = None, **overrides: Any
    ) -> "PayjpPublicClient":
        settings = settings or Settings()
        kwargs: dict[str, Any] = {
            "timeout": settings.PAYJP_TIMEOUT,
            "max_retries": settings.PAYJP_MAX_RETRIES,
            "retry_initial_delay": settings.PAYJP_RETRY_INITIAL_DELAY,
            "retry_max_delay": settings.PAYJP_RETRY_MAX_DELAY,
            "base_url": settings.PAYJP_API_BASE,
        }
        kwargs.update(overrides)
        return cls(settings.PAYJP_PUBLIC_KEY, settings.PAYJP_PUBLIC_PASSWORD, **kwargs)
