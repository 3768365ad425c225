"""Configuracao do cliente NFContador."""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import IntEnum

from nfcontador.core.constants import DEFAULT_HTTP_TIMEOUT_SEC
from nfcontador.core.exceptions import ConfigurationError


class Ambiente(IntEnum):
    """Ambientes disponiveis na versao 2 da API."""

    PRODUCAO = 1
    LOCAL = 2
    SANDBOX = 3
    DUSK = 4


class ApiVersion(IntEnum):
    """Geracoes da API.

    V1 usa URL fixa e autentica apenas com token; V2 escolhe a URL pelo
    ambiente e envia tambem o CNPJ da empresa.
    """

    V1 = 1
    V2 = 2


def _get_bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "y", "on"}


def parse_ambiente(valor: object) -> Ambiente | None:
    """Converte numero, nome ou membro em Ambiente; None se invalido."""
    if isinstance(valor, bool):
        return None
    if isinstance(valor, Ambiente):
        return valor
    if isinstance(valor, int):
        return Ambiente(valor) if valor in Ambiente._value2member_map_ else None
    if isinstance(valor, str):
        texto = valor.strip()
        if texto.isdigit():
            return parse_ambiente(int(texto))
        return Ambiente.__members__.get(texto.upper())
    return None


@dataclass
class ClientConfig:
    """Estado mutavel lido por todas as requisicoes de um cliente.

    Nao e sincronizado: cada instancia deve ter um unico escritor.
    """

    token: str = ""
    cnpj: str = ""
    ambiente: Ambiente | None = None
    upload: bool = False
    debug: bool = False
    decode: bool = True
    versao: ApiVersion = ApiVersion.V2
    timeout: float = DEFAULT_HTTP_TIMEOUT_SEC

    @classmethod
    def from_env(cls) -> "ClientConfig":
        """Monta a configuracao a partir das variaveis NFCONTADOR_*.

        Raises:
            ConfigurationError: Quando algum valor numerico e invalido.
        """
        config = cls(
            token=os.getenv("NFCONTADOR_TOKEN", ""),
            cnpj=os.getenv("NFCONTADOR_CNPJ", ""),
            debug=_get_bool_env("NFCONTADOR_DEBUG", False),
            decode=_get_bool_env("NFCONTADOR_DECODE", True),
        )

        ambiente = os.getenv("NFCONTADOR_AMBIENTE")
        if ambiente:
            config.ambiente = parse_ambiente(ambiente)
            if config.ambiente is None:
                raise ConfigurationError(f"NFCONTADOR_AMBIENTE invalido: {ambiente}")

        versao = os.getenv("NFCONTADOR_VERSAO")
        if versao:
            try:
                config.versao = ApiVersion(int(versao))
            except ValueError as exc:
                raise ConfigurationError(f"NFCONTADOR_VERSAO invalida: {versao}") from exc

        timeout = os.getenv("NFCONTADOR_TIMEOUT_SEC")
        if timeout:
            try:
                config.timeout = float(timeout)
            except ValueError as exc:
                raise ConfigurationError(f"NFCONTADOR_TIMEOUT_SEC nao e numerico: {timeout}") from exc
            if config.timeout <= 0:
                raise ConfigurationError(f"NFCONTADOR_TIMEOUT_SEC deve ser positivo: {timeout}")

        return config
