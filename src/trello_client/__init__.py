"""Trello Client - resilient async client for the Trello REST API."""

import logging
from importlib.metadata import version, PackageNotFoundError

from .async_client import AsyncTrelloHTTPClient
from .client import TrelloClient
from .core.config import TrelloClientConfig, RetryConfig
from .core.exceptions import (
    FailureKind,
    TrelloClientException,
    NetworkError,
    TimeoutError,
    ServerError,
    HTTPError,
    ClientError,
    InvalidResponseError,
    TransportError,
    ConfigurationError,
    ExhaustedRetriesError,
)
from .core.logging import LoggingConfig
from .plugins import LoggingPlugin, MonitoringPlugin, NullObserver, RequestObserver

# NullHandler чтобы библиотека молчала, пока пользователь не настроит logging
logging.getLogger('trello_client').addHandler(logging.NullHandler())

try:
    __version__ = version("trello-client-core")
except PackageNotFoundError:
    # Пакет не установлен (development mode)
    __version__ = "0.0.0-dev"

__all__ = [
    # Clients
    "TrelloClient",
    "AsyncTrelloHTTPClient",

    # Config
    "TrelloClientConfig",
    "RetryConfig",
    "LoggingConfig",

    # Exceptions
    "FailureKind",
    "TrelloClientException",
    "NetworkError",
    "TimeoutError",
    "ServerError",
    "HTTPError",
    "ClientError",
    "InvalidResponseError",
    "TransportError",
    "ConfigurationError",
    "ExhaustedRetriesError",

    # Observers
    "RequestObserver",
    "NullObserver",
    "LoggingPlugin",
    "MonitoringPlugin",

    "__version__",
]
