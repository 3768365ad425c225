"""Tests for configuration accessors and company operations."""

from __future__ import annotations

import json
from typing import Any
from unittest.mock import MagicMock

import pytest

from nfcontador.api.client import NFContadorClient
from nfcontador.api.http import QueryParam
from nfcontador.core.config import Ambiente, ApiVersion, ClientConfig
from nfcontador.core.constants import API_URL_V1, API_URLS, MSG_EMPRESA_DELETADA
from nfcontador.core.exceptions import ConfigurationError, RemoteError, ValidationError


def _enviado(session: MagicMock) -> dict[str, Any]:
    return json.loads(session.request.call_args.kwargs["data"])


def test_setters_e_getters(client: NFContadorClient) -> None:
    client.set_upload(True)
    client.set_decode(False)
    client.set_cnpj("999")
    client.set_debug(True)
    client.set_token("novo")
    client.set_timeout(5)

    assert client.get_upload() is True
    assert client.get_decode() is False
    assert client.get_cnpj() == "999"
    assert client.get_timeout() == 5
    assert client.get_versao() == ApiVersion.V2
    assert client.config.debug is True
    assert client.config.token == "novo"
    assert not hasattr(client, "get_token")


@pytest.mark.parametrize("invalido", [0, 5, -1, "3", None, True])
def test_set_ambiente_ignora_valores_invalidos(client: NFContadorClient, invalido: Any) -> None:
    client.set_ambiente(Ambiente.PRODUCAO)

    client.set_ambiente(invalido)

    assert client.get_ambiente() == Ambiente.PRODUCAO


def test_set_ambiente_aceita_inteiros(client: NFContadorClient) -> None:
    client.set_ambiente(4)

    assert client.get_ambiente() is Ambiente.DUSK


def test_set_timeout_rejeita_nao_positivo(client: NFContadorClient) -> None:
    with pytest.raises(ValueError):
        client.set_timeout(0)


def test_cadastra_empresa_acumula_erros_sem_chamada(client: NFContadorClient, session: MagicMock) -> None:
    with pytest.raises(ValidationError) as exc_info:
        client.cadastra_empresa({"cpfcnpj": "", "name": None})

    assert exc_info.value.mensagens == [
        "É obrigatório o envio do CPF/CNPJ da empresa",
        "O Nome da empresa é obrigatório",
        "O E-mail da empresa é obrigatório",
    ]
    assert str(exc_info.value).count("\n") == 2
    session.request.assert_not_called()


def test_cadastra_empresa_tipo_padrao_e_envelope(client: NFContadorClient, session: MagicMock) -> None:
    dados = {"cpfcnpj": "12345678000199", "name": "ACME", "email": "acme@example.com"}

    resposta = client.cadastra_empresa(dados)

    assert _enviado(session)["type"] == 2
    assert "type" not in dados
    assert resposta.http_code == 200
    args, _ = session.request.call_args
    assert args == ("POST", API_URLS[3] + "/companies")


def test_cadastra_empresa_mantem_tipo_informado(client: NFContadorClient, session: MagicMock) -> None:
    client.cadastra_empresa({"cpfcnpj": "1", "name": "A", "email": "a@a", "type": 1})

    assert _enviado(session)["type"] == 1


def test_cadastra_empresa_erro_remoto(
    client: NFContadorClient, session: MagicMock, response_factory: Any
) -> None:
    session.request.return_value = response_factory(
        422, {"errors": {"position_0": ["CNPJ inválido", "linha 1"], "email": "E-mail já cadastrado"}}
    )

    with pytest.raises(RemoteError) as exc_info:
        client.cadastra_empresa({"cpfcnpj": "1", "name": "A", "email": "a@a"})

    assert str(exc_info.value) == "CNPJ inválido; linha 1\nE-mail já cadastrado"
    assert exc_info.value.http_code == 422


def test_resposta_200_retornada_sem_alteracao(
    client: NFContadorClient, session: MagicMock, response_factory: Any
) -> None:
    session.request.return_value = response_factory(200, {"data": [{"id": 1}]})

    resposta = client.consulta_empresa()

    assert resposta.body == {"data": [{"id": 1}]}
    assert resposta.http_code == 200


def test_consulta_empresa_substitui_cnpj_company(client: NFContadorClient, session: MagicMock) -> None:
    params = [QueryParam("cnpj_company", "111"), QueryParam("page", "2"), QueryParam("cnpj_company", "222")]

    client.consulta_empresa("333", params)

    args, _ = session.request.call_args
    assert args[1] == API_URLS[3] + "/companies?page=2&cnpj_company=333"


def test_atualiza_empresa_rejeita_campos_vazios(client: NFContadorClient, session: MagicMock) -> None:
    with pytest.raises(ValidationError) as exc_info:
        client.atualiza_empresa(10, {"name": " ", "email": ""})

    assert exc_info.value.mensagens == [
        "O Nome da empresa não pode ficar vazio",
        "O E-mail da empresa não pode ficar vazio",
    ]
    session.request.assert_not_called()


def test_atualiza_empresa_parcial(client: NFContadorClient, session: MagicMock) -> None:
    client.atualiza_empresa(10, {"name": "Novo nome", "type": None})

    args, kwargs = session.request.call_args
    assert args == ("PUT", API_URLS[3] + "/companies/10")
    assert json.loads(kwargs["data"]) == {"name": "Novo nome", "type": 2}


def test_deleta_empresa_mensagem_fixa(client: NFContadorClient, session: MagicMock) -> None:
    assert client.deleta_empresa(7) == MSG_EMPRESA_DELETADA

    args, _ = session.request.call_args
    assert args == ("DELETE", API_URLS[3] + "/companies/7")


def test_deleta_empresa_sem_id(client: NFContadorClient, session: MagicMock) -> None:
    with pytest.raises(ValidationError):
        client.deleta_empresa(0)

    session.request.assert_not_called()


def test_deleta_empresa_sem_errors_usa_resposta_serializada(
    client: NFContadorClient, session: MagicMock, response_factory: Any
) -> None:
    session.request.return_value = response_factory(500, text="")

    with pytest.raises(RemoteError) as exc_info:
        client.deleta_empresa(7)

    assert json.loads(str(exc_info.value)) == {"body": None, "httpCode": 500}


def test_versao_1_sem_cabecalho_cnpj(session: MagicMock) -> None:
    client = NFContadorClient(ClientConfig(token="tok", versao=ApiVersion.V1), session=session)

    client.consulta_empresa("123")

    args, kwargs = session.request.call_args
    assert args[1] == API_URL_V1 + "/companies?cnpj_company=123"
    assert "Company-Cnpj" not in kwargs["headers"]


def test_chamadas_repetidas_sao_independentes(client: NFContadorClient, session: MagicMock) -> None:
    client.consulta_empresa("1")
    client.consulta_empresa("1")

    assert session.request.call_count == 2


def test_context_manager_fecha_sessao(config: ClientConfig, session: MagicMock) -> None:
    with NFContadorClient(config, session=session):
        pass

    session.close.assert_called_once()


def test_base_url_publica(client: NFContadorClient, session: MagicMock) -> None:
    assert client.base_url() == API_URLS[3]

    sem_ambiente = NFContadorClient(ClientConfig(token="tok"), session=session)
    with pytest.raises(ConfigurationError):
        sem_ambiente.base_url()
