"""Validacao local de payloads antes do envio."""

from __future__ import annotations

from typing import Any, Mapping

from nfcontador.core.exceptions import ValidationError


def vazio(valor: Any) -> bool:
    """None, strings em branco e colecoes vazias contam como vazio."""
    if valor is None:
        return True
    if isinstance(valor, str):
        return valor.strip() == ""
    if isinstance(valor, (bytes, list, tuple, dict, set)):
        return len(valor) == 0
    return False


def campos_obrigatorios(dados: Mapping[str, Any], regras: Mapping[str, str]) -> list[str]:
    """Mensagens dos campos ausentes ou vazios, na ordem das regras."""
    return [mensagem for campo, mensagem in regras.items() if vazio(dados.get(campo))]


def campos_nao_vazios(dados: Mapping[str, Any], regras: Mapping[str, str]) -> list[str]:
    """Mensagens dos campos enviados, mas vazios (atualizacoes parciais)."""
    return [mensagem for campo, mensagem in regras.items() if campo in dados and vazio(dados[campo])]


def garantir_sem_erros(erros: list[str]) -> None:
    if erros:
        raise ValidationError(erros)
