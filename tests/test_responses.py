"""Tests for error extraction from API responses."""

from __future__ import annotations

import json

from nfcontador.api.responses import ApiResponse
from nfcontador.core.exceptions import RemoteError


def test_erros_position_unidos_por_ponto_e_virgula() -> None:
    resposta = ApiResponse(body={"errors": {"position_1": ["a", "b"], "other": "c"}}, http_code=422)

    erro = resposta.erro_remoto()

    assert isinstance(erro, RemoteError)
    assert erro.mensagens == ["a; b", "c"]
    assert str(erro) == "a; b\nc"
    assert erro.http_code == 422
    assert erro.resposta is resposta


def test_erros_em_mapa_com_listas() -> None:
    resposta = ApiResponse(
        body={"errors": {"email": ["O e-mail é inválido."], "name": ["Obrigatório.", "Muito curto."]}},
        http_code=422,
    )

    assert resposta.mensagens_erro() == ["O e-mail é inválido.", "Obrigatório.", "Muito curto."]


def test_erros_em_lista() -> None:
    resposta = ApiResponse(
        body={"errors": ["Token inválido", {"field": "cnpj", "message": "CNPJ não cadastrado"}]},
        http_code=400,
    )

    assert resposta.mensagens_erro() == ["Token inválido", "CNPJ não cadastrado"]


def test_sem_errors_usa_message() -> None:
    resposta = ApiResponse(body={"message": "Unauthenticated."}, http_code=401)

    assert str(resposta.erro_remoto()) == "Unauthenticated."


def test_sem_estrutura_serializa_resposta_completa() -> None:
    resposta = ApiResponse(body="<html>502</html>", http_code=502, info={"total_time": 0.5})

    erro = resposta.erro_remoto()

    assert json.loads(str(erro)) == {
        "body": "<html>502</html>",
        "httpCode": 502,
        "info": {"total_time": 0.5},
    }
    assert erro.body == "<html>502</html>"


def test_sucesso_apenas_em_200() -> None:
    assert ApiResponse(body={}, http_code=200).sucesso is True
    assert ApiResponse(body={}, http_code=201).sucesso is False
