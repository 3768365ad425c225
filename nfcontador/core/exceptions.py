"""Custom exceptions for the NFContador client."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from nfcontador.api.responses import ApiResponse


class NFContadorError(Exception):
    """Base exception for client errors."""


class ConfigurationError(NFContadorError):
    """Invalid or incomplete client configuration."""


class ValidationError(NFContadorError):
    """Payload rejected locally before any request was sent."""

    def __init__(self, mensagens: list[str]) -> None:
        self.mensagens = list(mensagens)
        super().__init__("\n".join(self.mensagens))


class RemoteError(NFContadorError):
    """The API answered with a non-200 status."""

    def __init__(
        self,
        http_code: int,
        mensagens: list[str],
        body: Any = None,
        resposta: "ApiResponse | None" = None,
    ) -> None:
        self.http_code = http_code
        self.mensagens = list(mensagens)
        self.body = body
        self.resposta = resposta
        super().__init__("\n".join(self.mensagens))


class TransportError(NFContadorError):
    """Connection level failure (DNS, TLS, timeout)."""

    def __init__(self, message: str, method: str = "", url: str = "") -> None:
        super().__init__(message)
        self.method = method
        self.url = url
