"""Validador de configurações do cliente."""

from __future__ import annotations

import os

from nfcontador.core.config import ApiVersion, parse_ambiente
from nfcontador.core.logger import logger


def validar_configuracao(exigir_ambiente: bool = True) -> bool:
    """Valida as variáveis de ambiente usadas pelo CLI.

    Args:
        exigir_ambiente: Falso quando o ambiente foi informado por outro meio

    Returns:
        True se todas as configurações obrigatórias estão válidas, False caso contrário
    """
    required_vars = {
        'NFCONTADOR_TOKEN': 'Token de acesso à API NFContador',
    }

    optional_vars = {
        'NFCONTADOR_CNPJ': 'CNPJ da empresa (cabeçalho da versão 2)',
        'NFCONTADOR_AMBIENTE': 'Ambiente (1=produção, 2=local, 3=sandbox, 4=dusk)',
        'NFCONTADOR_VERSAO': 'Versão da API (1 ou 2)',
        'NFCONTADOR_TIMEOUT_SEC': 'Timeout das requisições em segundos',
    }

    missing_vars = []

    for var, description in required_vars.items():
        value = os.getenv(var)
        if not value or value.strip() == '':
            missing_vars.append(f"  ❌ {var}: {description}")
            logger.error(f"Variável obrigatória ausente: {var}")

    if missing_vars:
        logger.error("=" * 60)
        logger.error("ERRO: Configurações obrigatórias ausentes")
        logger.error("=" * 60)
        for var in missing_vars:
            logger.error(var)
        logger.error("")
        logger.error("Configure as variáveis no arquivo config.env")
        logger.error("=" * 60)
        return False

    if exigir_ambiente and not validar_configuracao_ambiente():
        return False

    missing_optional = []
    for var, description in optional_vars.items():
        value = os.getenv(var)
        if not value or value.strip() == '':
            missing_optional.append(f"  ⚠️  {var}: {description}")

    if missing_optional:
        logger.warning("Variáveis opcionais não configuradas:")
        for var in missing_optional:
            logger.warning(var)

    logger.info("✅ Configurações obrigatórias validadas com sucesso")
    return True


def validar_configuracao_ambiente() -> bool:
    """Valida versão e ambiente informados.

    A versão 2 exige um ambiente válido, pois a URL base depende dele.

    Returns:
        True se a combinação versão/ambiente é utilizável
    """
    versao = os.getenv('NFCONTADOR_VERSAO', str(int(ApiVersion.V2))).strip()
    if versao not in {'1', '2'}:
        logger.error(f"NFCONTADOR_VERSAO inválida: {versao}")
        return False

    if versao == '1':
        return True

    ambiente = os.getenv('NFCONTADOR_AMBIENTE', '')
    if not ambiente:
        logger.error("NFCONTADOR_AMBIENTE é obrigatório na versão 2 da API")
        return False

    if parse_ambiente(ambiente) is None:
        logger.error(f"NFCONTADOR_AMBIENTE inválido: {ambiente}")
        return False

    return True
