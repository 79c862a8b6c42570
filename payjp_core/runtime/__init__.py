"""
Request execution runtime for payjp-core.

This package is the engine behind every resource call:
- Credential: Validated API key and Basic auth rendering
- encode / decode: Form encoding of parameters, typed decoding of responses
- PayjpError: Classified errors raised from every call
- RetryPolicy / RetryEngine: Jittered exponential backoff for transient failures
- RequestExecutor: Pooled async HTTP execution tying the above together
"""

from .credentials import Credential, KeyMode
from .decoding import ApiErrorBody, Expandable, Expanded, Reference, decode
from .encoding import encode, encode_form
from .errors import (
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
from .executor import DEFAULT_BASE_URL, RequestExecutor
from .request import HttpMethod, RequestDescriptor
from .retry import RetryEngine, RetryPolicy, RetryState

__all__ = [
    "ApiError",
    "ApiErrorBody",
    "AuthError",
    "CardError",
    "Credential",
    "CredentialError",
    "DEFAULT_BASE_URL",
    "ErrorKind",
    "Expandable",
    "Expanded",
    "HttpMethod",
    "InvalidRequestError",
    "KeyMode",
    "NetworkError",
    "PayjpError",
    "RateLimitError",
    "Reference",
    "RequestDescriptor",
    "RequestExecutor",
    "RetryEngine",
    "RetryPolicy",
    "RetryState",
    "SerializationError",
    "decode",
    "encode",
    "encode_form",
]
