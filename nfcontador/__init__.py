"""Cliente Python da API NFContador."""

from nfcontador.api.client import NFContadorClient
from nfcontador.api.http import QueryParam
from nfcontador.api.responses import ApiResponse
from nfcontador.core.config import Ambiente, ApiVersion, ClientConfig
from nfcontador.core.exceptions import (
    ConfigurationError,
    NFContadorError,
    RemoteError,
    TransportError,
    ValidationError,
)

__version__ = "0.1.0"

__all__ = [
    "Ambiente",
    "ApiResponse",
    "ApiVersion",
    "ClientConfig",
    "ConfigurationError",
    "NFContadorClient",
    "NFContadorError",
    "QueryParam",
    "RemoteError",
    "TransportError",
    "ValidationError",
]
