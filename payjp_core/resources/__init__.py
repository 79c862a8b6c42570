"""
Typed records, parameter models and services for PAY.JP resources.
"""

from .account import Account, AccountService
from .balances import Balance, BalanceService
from .base import DeletedObject, ListParams, ListResponse, Metadata
from .cards import Card, CardService, CardThreeDSecureStatus, CreateCardParams, UpdateCardParams
from .charges import (
    CaptureParams,
    Charge,
    ChargeService,
    CreateChargeParams,
    ListChargeParams,
    ReauthParams,
    RefundParams,
    UpdateChargeParams,
)
from .customers import (
    CreateCustomerParams,
    Customer,
    CustomerHandle,
    CustomerService,
    UpdateCustomerParams,
)
from .events import Event, EventData, EventService, EventType
from .plans import CreatePlanParams, Plan, PlanInterval, PlanService, UpdatePlanParams
from .statements import Statement, StatementService, StatementUrls
from .subscriptions import (
    CreateSubscriptionParams,
    ResumeSubscriptionParams,
    Subscription,
    SubscriptionService,
    SubscriptionStatus,
    UpdateSubscriptionParams,
)
from .tenants import (
    ApplicationUrls,
    BankAccount,
    CreateTenantParams,
    Tenant,
    TenantService,
    TenantTransfer,
    TenantTransferService,
    UpdateTenantParams,
)
from .terms import Term, TermService
from .three_d_secure import (
    CreateThreeDSecureRequestParams,
    ThreeDSecureRequest,
    ThreeDSecureRequestService,
    ThreeDSecureStatus,
)
from .tokens import CardDetails, CreateTokenParams, PublicTokenService, Token, TokenService
from .transfers import BankInfo, Transfer, TransferService

__all__ = [
    "Account",
    "AccountService",
    "ApplicationUrls",
    "Balance",
    "BalanceService",
    "BankAccount",
    "BankInfo",
    "CaptureParams",
    "Card",
    "CardDetails",
    "CardService",
    "CardThreeDSecureStatus",
    "Charge",
    "ChargeService",
    "CreateCardParams",
    "CreateChargeParams",
    "CreateCustomerParams",
    "CreatePlanParams",
    "CreateSubscriptionParams",
    "CreateTenantParams",
    "CreateThreeDSecureRequestParams",
    "CreateTokenParams",
    "Customer",
    "CustomerHandle",
    "CustomerService",
    "DeletedObject",
    "Event",
    "EventData",
    "EventService",
    "EventType",
    "ListChargeParams",
    "ListParams",
    "ListResponse",
    "Metadata",
    "Plan",
    "PlanInterval",
    "PlanService",
    "PublicTokenService",
    "ReauthParams",
    "RefundParams",
    "ResumeSubscriptionParams",
    "Statement",
    "StatementService",
    "StatementUrls",
    "Subscription",
    "SubscriptionService",
    "SubscriptionStatus",
    "Tenant",
    "TenantService",
    "TenantTransfer",
    "TenantTransferService",
    "Term",
    "TermService",
    "ThreeDSecureRequest",
    "ThreeDSecureRequestService",
    "ThreeDSecureStatus",
    "Token",
    "TokenService",
    "Transfer",
    "TransferService",
    "UpdateCardParams",
    "UpdateChargeParams",
    "UpdateCustomerParams",
    "UpdatePlanParams",
    "UpdateSubscriptionParams",
    "UpdateTenantParams",
]
