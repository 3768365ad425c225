"""Envelope de resposta e extracao de erros da API NFContador."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

from nfcontador.core.constants import HTTP_OK
from nfcontador.core.exceptions import RemoteError


def _texto(valor: Any) -> str:
    if isinstance(valor, str):
        return valor
    return json.dumps(valor, ensure_ascii=False, default=str)


def _como_lista(valor: Any) -> list[Any]:
    if isinstance(valor, (list, tuple)):
        return list(valor)
    return [valor]


@dataclass
class ApiResponse:
    """Resultado de qualquer chamada a API.

    Attributes:
        body: JSON decodificado ou texto bruto (apenas em sucesso com decode desligado).
        http_code: Status HTTP retornado.
        info: Diagnostico da requisicao, presente somente em modo debug.
    """

    body: Any
    http_code: int
    info: dict[str, Any] | None = None

    @property
    def sucesso(self) -> bool:
        return self.http_code == HTTP_OK

    def mensagens_erro(self) -> list[str]:
        """Extrai as mensagens estruturadas do corpo de erro.

        ``errors`` pode ser um mapa campo -> mensagem(ns) ou uma lista. Chaves
        que contem ``position`` tem suas mensagens unidas por ``"; "``. Sem
        ``errors``, usa ``message`` quando presente.

        Returns:
            Mensagens na ordem do corpo; lista vazia se nao houver estrutura.
        """
        if not isinstance(self.body, dict):
            return []

        erros = self.body.get("errors")
        mensagens: list[str] = []

        if isinstance(erros, dict):
            for chave, erro in erros.items():
                if "position" in str(chave):
                    mensagens.append("; ".join(_texto(e) for e in _como_lista(erro)))
                else:
                    mensagens.extend(_texto(e) for e in _como_lista(erro))
        elif isinstance(erros, (list, tuple)):
            for erro in erros:
                if isinstance(erro, dict) and "message" in erro:
                    mensagens.append(_texto(erro["message"]))
                else:
                    mensagens.append(_texto(erro))
        elif isinstance(erros, str) and erros:
            mensagens.append(erros)

        if not mensagens:
            mensagem = self.body.get("message")
            if isinstance(mensagem, str) and mensagem:
                mensagens.append(mensagem)

        return mensagens

    def to_dict(self) -> dict[str, Any]:
        dados: dict[str, Any] = {"body": self.body, "httpCode": self.http_code}
        if self.info is not None:
            dados["info"] = self.info
        return dados

    def erro_remoto(self) -> RemoteError:
        """Monta o RemoteError correspondente a esta resposta."""
        mensagens = self.mensagens_erro()
        if not mensagens:
            mensagens = [json.dumps(self.to_dict(), ensure_ascii=False, default=str)]
        return RemoteError(self.http_code, mensagens, body=self.body, resposta=self)
