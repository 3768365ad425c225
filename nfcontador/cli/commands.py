"""Comandos CLI para consultas na API NFContador."""

from __future__ import annotations

import json
from typing import Any, Callable

from nfcontador.api.client import NFContadorClient
from nfcontador.api.responses import ApiResponse
from nfcontador.core.exceptions import (
    ConfigurationError,
    RemoteError,
    TransportError,
    ValidationError,
)
from nfcontador.core.logger import logger


def _json(dados: Any) -> str:
    return json.dumps(dados, indent=2, ensure_ascii=False, default=str)


def exibir_resultado(resultado: Any) -> None:
    """Exibe o corpo da resposta (ou a mensagem de sucesso) formatado."""
    if not isinstance(resultado, ApiResponse):
        logger.info(f"  {resultado}")
        return

    logger.info(f"  HTTP {resultado.http_code}")
    if isinstance(resultado.body, str):
        logger.info(resultado.body)
    else:
        logger.info(_json(resultado.body))

    if resultado.info:
        logger.info("\n[DEBUG]")
        logger.info(_json(resultado.info))


def executar_operacao(titulo: str, operacao: Callable[[], Any]) -> bool:
    """Executa uma operacao do cliente e exibe o resultado.

    Args:
        titulo: Titulo exibido antes do resultado.
        operacao: Chamada sem argumentos ao cliente.

    Returns:
        True quando a API respondeu com sucesso.
    """
    logger.info(f"\n[{titulo}]")
    logger.info("-" * 40)

    try:
        resultado = operacao()
    except ValidationError as e:
        logger.error(f"[ERRO] Dados inválidos:\n{e}")
        return False
    except RemoteError as e:
        logger.error(f"[ERRO] API retornou HTTP {e.http_code}:\n{e}")
        return False
    except (ConfigurationError, TransportError) as e:
        logger.error(f"[ERRO] {e}")
        return False

    exibir_resultado(resultado)
    return True


def exibir_configuracao(client: NFContadorClient) -> bool:
    """Exibe a configuracao efetiva do cliente, sem revelar o token."""
    config = client.config
    logger.info("\n[CONFIGURACAO]")
    logger.info("-" * 40)
    logger.info(f"  Versão da API: {int(config.versao)}")
    logger.info(f"  Ambiente: {config.ambiente.name if config.ambiente else 'não definido'}")
    logger.info(f"  Token: {'definido' if config.token else 'ausente'}")
    logger.info(f"  CNPJ: {config.cnpj or '-'}")
    logger.info(f"  Decode: {config.decode} | Debug: {config.debug} | Upload: {config.upload}")
    logger.info(f"  Timeout: {config.timeout}s")

    try:
        logger.info(f"  URL base: {client.base_url()}")
    except ConfigurationError as e:
        logger.error(f"  [ERRO] {e}")
        return False
    return True
