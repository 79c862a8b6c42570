"""
payjp-core: async client for the PAY.JP payment API.
"""

from .client import PayjpClient, PayjpPublicClient
from .runtime.errors import (
    ApiError,
    AuthError,
    CardError,
    CredentialError,
    ErrorKind,
    InvalidRequestError,
    NetworkError,
    PayjpError,
    RateLimitError,
    SerializationError,
)
from .runtime.decoding import Expandable, Expanded, Reference
from .version import __version__

__all__ = [
    "ApiError",
    "AuthError",
    "CardError",
    "CredentialError",
    "ErrorKind",
    "Expandable",
    "Expanded",
    "InvalidRequestError",
    "NetworkError",
    "PayjpClient",
    "PayjpError",
    "PayjpPublicClient",
    "RateLimitError",
    "Reference",
    "SerializationError",
    "__version__",
]
