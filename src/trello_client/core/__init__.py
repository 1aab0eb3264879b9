"""Core модули исполнителя запросов Trello."""

from .config import RetryConfig, TrelloClientConfig, TRELLO_BASE_URL
from .context import Attempt, RequestContext
from .error_handler import ErrorHandler
from .exceptions import (
    FailureKind,
    TrelloClientException,
    TemporaryError,
    NetworkError,
    TimeoutError,
    ServerError,
    FatalError,
    HTTPError,
    ClientError,
    InvalidResponseError,
    TransportError,
    ConfigurationError,
    ExhaustedRetriesError,
)
from .request_builder import EncodingMode, PreparedRequest, RequestSpec, build_request
from .retry_engine import RetryEngine
from .transport import AttemptTimeout, DecodedResponse, HTTPTransport

__all__ = [
    # Config
    "RetryConfig",
    "TrelloClientConfig",
    "TRELLO_BASE_URL",
    # Context
    "Attempt",
    "RequestContext",
    # Exceptions
    "FailureKind",
    "TrelloClientException",
    "TemporaryError",
    "NetworkError",
    "TimeoutError",
    "ServerError",
    "FatalError",
    "HTTPError",
    "ClientError",
    "InvalidResponseError",
    "TransportError",
    "ConfigurationError",
    "ExhaustedRetriesError",
    # Request pipeline
    "EncodingMode",
    "PreparedRequest",
    "RequestSpec",
    "build_request",
    "AttemptTimeout",
    "DecodedResponse",
    "HTTPTransport",
    "ErrorHandler",
    "RetryEngine",
]
