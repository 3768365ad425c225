"""Cliente da API NFContador."""

from __future__ import annotations

import functools
from typing import Any, Callable, Mapping, TypeVar
from urllib.parse import quote

import requests

from nfcontador.api.http import HeaderLines, NFContadorRestClient, QueryParams, substituir_param
from nfcontador.api.responses import ApiResponse
from nfcontador.api.validators import (
    campos_nao_vazios,
    campos_obrigatorios,
    garantir_sem_erros,
    vazio,
)
from nfcontador.core.config import Ambiente, ApiVersion, ClientConfig, parse_ambiente
from nfcontador.core.constants import (
    MSG_CLIENTE_SINCRONIZADO,
    MSG_DOCUMENTO_DELETADO,
    MSG_EMPRESA_DELETADA,
    MSG_SINCRONIZACAO_REMOVIDA,
    PARAM_CNPJ_COMPANY,
    TIPO_EMPRESA_PADRAO,
)
from nfcontador.core.exceptions import ConfigurationError
from nfcontador.core.logger import logger

F = TypeVar("F", bound=Callable[..., Any])

REGRAS_EMPRESA = {
    "cpfcnpj": "É obrigatório o envio do CPF/CNPJ da empresa",
    "name": "O Nome da empresa é obrigatório",
    "email": "O E-mail da empresa é obrigatório",
}

REGRAS_ATUALIZACAO_EMPRESA = {
    "cpfcnpj": "O CPF/CNPJ da empresa não pode ficar vazio",
    "name": "O Nome da empresa não pode ficar vazio",
    "email": "O E-mail da empresa não pode ficar vazio",
}

REGRAS_SINCRONIZACAO_CLIENTE = {
    "cpfcnpj": "É obrigatório o envio do CPF/CNPJ do cliente",
    "name": "O Nome do cliente é obrigatório",
}

REGRAS_DOCUMENTO = {
    "file": "É obrigatório o envio do arquivo do documento",
    "type": "O Tipo do documento é obrigatório",
}

REGRAS_SOLICITACAO_EMISSAO = {
    "cpfcnpj_taker": "É obrigatório o envio do CPF/CNPJ do tomador",
    "description": "A Descrição do serviço é obrigatória",
    "value": "O Valor da nota é obrigatório",
}


def requer_v2(func: F) -> F:
    """Bloqueia rotas que so existem na versao 2 da API."""

    @functools.wraps(func)
    def wrapper(self: "NFContadorClient", *args: Any, **kwargs: Any) -> Any:
        if self.config.versao != ApiVersion.V2:
            raise ConfigurationError(f"{func.__name__} está disponível apenas na versão 2 da API")
        return func(self, *args, **kwargs)

    return wrapper  # type: ignore[return-value]


def _segmento(valor: Any) -> str:
    return quote(str(valor), safe="")


class NFContadorClient:
    """Cliente da API NFContador.

    Cada operacao valida o payload localmente, chama a rota e devolve o
    ``ApiResponse`` em HTTP 200; qualquer outro status vira ``RemoteError``.

    Example:
        client = NFContadorClient()
        client.set_token("...")
        client.set_cnpj("12345678000199")
        client.set_ambiente(Ambiente.SANDBOX)
        resposta = client.consulta_empresa("12345678000199")
    """

    def __init__(self, config: ClientConfig | None = None, session: requests.Session | None = None) -> None:
        self.config = config if config is not None else ClientConfig()
        self._rest = NFContadorRestClient(self.config, session=session)

    @classmethod
    def from_env(cls) -> "NFContadorClient":
        """Cria o cliente a partir das variaveis NFCONTADOR_*."""
        return cls(ClientConfig.from_env())

    def __enter__(self) -> "NFContadorClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        self._rest.close()

    # ------------------------------------------------------------------
    # Configuracao
    # ------------------------------------------------------------------

    def set_token(self, token: str) -> None:
        self.config.token = token

    def set_cnpj(self, cnpj: str) -> None:
        self.config.cnpj = cnpj

    def set_upload(self, is_upload: bool) -> None:
        self.config.upload = is_upload

    def set_decode(self, decode: bool) -> None:
        self.config.decode = decode

    def set_debug(self, is_debug: bool) -> None:
        self.config.debug = is_debug

    def set_ambiente(self, ambiente: int | Ambiente) -> None:
        """Define o ambiente; valores fora de 1..4 sao ignorados."""
        valor = parse_ambiente(ambiente) if isinstance(ambiente, int) else None
        if valor is None:
            logger.debug("Ambiente ignorado: %r", ambiente)
            return
        self.config.ambiente = valor

    def set_timeout(self, segundos: float) -> None:
        if segundos <= 0:
            raise ValueError("O timeout deve ser positivo")
        self.config.timeout = segundos

    def get_upload(self) -> bool:
        return self.config.upload

    def get_decode(self) -> bool:
        return self.config.decode

    def get_cnpj(self) -> str:
        return self.config.cnpj

    def get_ambiente(self) -> Ambiente | None:
        return self.config.ambiente

    def get_timeout(self) -> float:
        return self.config.timeout

    def get_versao(self) -> ApiVersion:
        return self.config.versao

    def base_url(self) -> str:
        """URL base efetiva; ConfigurationError se a versao 2 estiver sem ambiente."""
        return self._rest.base_url()

    # ------------------------------------------------------------------
    # Verbos HTTP
    # ------------------------------------------------------------------

    def get(self, path: str, params: QueryParams | None = None, headers: HeaderLines | None = None) -> ApiResponse:
        return self._rest.get(path, params=params, headers=headers)

    def post(
        self,
        path: str,
        body: Mapping[str, Any] | None = None,
        params: QueryParams | None = None,
        headers: HeaderLines | None = None,
    ) -> ApiResponse:
        return self._rest.post(path, body=body, params=params, headers=headers)

    def put(
        self,
        path: str,
        body: Mapping[str, Any] | None = None,
        params: QueryParams | None = None,
        headers: HeaderLines | None = None,
    ) -> ApiResponse:
        return self._rest.put(path, body=body, params=params, headers=headers)

    def delete(self, path: str, params: QueryParams | None = None, headers: HeaderLines | None = None) -> ApiResponse:
        return self._rest.delete(path, params=params, headers=headers)

    def _resultado(self, resposta: ApiResponse, mensagem_sucesso: str | None = None) -> Any:
        if resposta.sucesso:
            return mensagem_sucesso if mensagem_sucesso is not None else resposta

        erro = resposta.erro_remoto()
        logger.warning("API NFContador retornou HTTP %s: %s", resposta.http_code, erro)
        raise erro

    # ------------------------------------------------------------------
    # Empresas
    # ------------------------------------------------------------------

    def consulta_empresa(self, cnpj: str = "", params: QueryParams | None = None) -> ApiResponse:
        """Consulta empresas cadastradas, opcionalmente filtrando pelo CNPJ."""
        params = substituir_param(params, PARAM_CNPJ_COMPANY, cnpj)
        return self._resultado(self.get("/companies", params))

    def cadastra_empresa(self, dados: Mapping[str, Any], params: QueryParams | None = None) -> ApiResponse:
        """Cadastra uma empresa nova.

        Args:
            dados: Payload com ``cpfcnpj``, ``name`` e ``email`` obrigatorios.
                ``type`` assume 2 quando ausente.
            params: Parametros de query adicionais.

        Raises:
            ValidationError: Campos obrigatorios ausentes (todos listados).
            RemoteError: A API recusou o cadastro.
        """
        dados = dict(dados)
        erros = campos_obrigatorios(dados, REGRAS_EMPRESA)
        if vazio(dados.get("type")) or dados.get("type") == 0:
            dados["type"] = TIPO_EMPRESA_PADRAO
        garantir_sem_erros(erros)

        return self._resultado(self.post("companies", dados, params))

    def atualiza_empresa(
        self,
        id_empresa: int | str,
        dados: Mapping[str, Any],
        params: QueryParams | None = None,
    ) -> ApiResponse:
        """Atualiza uma empresa; campos enviados nao podem estar vazios."""
        dados = dict(dados)
        erros = campos_nao_vazios(dados, REGRAS_ATUALIZACAO_EMPRESA)
        if "type" in dados and (vazio(dados["type"]) or dados["type"] == 0):
            dados["type"] = TIPO_EMPRESA_PADRAO
        garantir_sem_erros(erros)

        return self._resultado(self.put(f"companies/{_segmento(id_empresa)}", dados, params))

    def deleta_empresa(self, id_empresa: int | str, params: QueryParams | None = None) -> str:
        if vazio(id_empresa) or id_empresa == 0:
            garantir_sem_erros(["O ID NFContador da empresa é obrigatório para exclusão"])

        resposta = self.delete(f"companies/{_segmento(id_empresa)}", params)
        return self._resultado(resposta, MSG_EMPRESA_DELETADA)

    # ------------------------------------------------------------------
    # Clientes
    # ------------------------------------------------------------------

    @requer_v2
    def lista_clientes(self, cnpj: str = "", params: QueryParams | None = None) -> ApiResponse:
        params = substituir_param(params, PARAM_CNPJ_COMPANY, cnpj)
        return self._resultado(self.get("customers", params))

    @requer_v2
    def sincroniza_cliente(self, dados: Mapping[str, Any], params: QueryParams | None = None) -> str:
        """Sincroniza um cliente do escritorio com o NFContador.

        Returns:
            Mensagem fixa de sucesso.
        """
        garantir_sem_erros(campos_obrigatorios(dados, REGRAS_SINCRONIZACAO_CLIENTE))
        return self._resultado(self.post("customers/sync", dict(dados), params), MSG_CLIENTE_SINCRONIZADO)

    @requer_v2
    def remove_sincronizacao_cliente(self, cpfcnpj: str, params: QueryParams | None = None) -> str:
        if vazio(cpfcnpj):
            garantir_sem_erros(["É obrigatório o envio do CPF/CNPJ do cliente"])

        resposta = self.delete(f"customers/sync/{_segmento(cpfcnpj)}", params)
        return self._resultado(resposta, MSG_SINCRONIZACAO_REMOVIDA)

    @requer_v2
    def atualiza_resposta_sincronizacao(
        self,
        id_sincronizacao: int | str,
        dados: Mapping[str, Any],
        params: QueryParams | None = None,
    ) -> ApiResponse:
        """Registra a resposta do escritorio para uma sincronizacao pendente."""
        erros = []
        if vazio(id_sincronizacao) or id_sincronizacao == 0:
            erros.append("O ID da sincronização é obrigatório")
        erros.extend(campos_obrigatorios(dados, {"status": "O Status da resposta é obrigatório"}))
        garantir_sem_erros(erros)

        path = f"customers/sync/{_segmento(id_sincronizacao)}/response"
        return self._resultado(self.put(path, dict(dados), params))

    # ------------------------------------------------------------------
    # Documentos
    # ------------------------------------------------------------------

    @requer_v2
    def lista_documentos(self, cnpj: str = "", params: QueryParams | None = None) -> ApiResponse:
        params = substituir_param(params, PARAM_CNPJ_COMPANY, cnpj)
        return self._resultado(self.get("customers/documents", params))

    @requer_v2
    def envia_documento(self, dados: Mapping[str, Any], params: QueryParams | None = None) -> ApiResponse:
        """Envia um documento contabil.

        Para arquivos binarios ative ``set_upload(True)`` antes: o payload
        passa a ser enviado como multipart.
        """
        garantir_sem_erros(campos_obrigatorios(dados, REGRAS_DOCUMENTO))
        return self._resultado(self.post("customers/documents", dict(dados), params))

    def _exigir_id_documento(self, id_documento: int | str) -> None:
        if vazio(id_documento) or id_documento == 0:
            garantir_sem_erros(["O ID do documento é obrigatório"])

    @requer_v2
    def consulta_documento(self, id_documento: int | str, params: QueryParams | None = None) -> ApiResponse:
        self._exigir_id_documento(id_documento)
        return self._resultado(self.get(f"customers/documents/{_segmento(id_documento)}", params))

    @requer_v2
    def audita_solicitante_documento(self, id_documento: int | str, params: QueryParams | None = None) -> ApiResponse:
        """Consulta quem solicitou o documento e quando."""
        self._exigir_id_documento(id_documento)
        path = f"customers/documents/{_segmento(id_documento)}/requester"
        return self._resultado(self.get(path, params))

    @requer_v2
    def deleta_documento(self, id_documento: int | str, params: QueryParams | None = None) -> str:
        self._exigir_id_documento(id_documento)
        resposta = self.delete(f"customers/documents/{_segmento(id_documento)}", params)
        return self._resultado(resposta, MSG_DOCUMENTO_DELETADO)

    # ------------------------------------------------------------------
    # Solicitacoes de emissao de nota
    # ------------------------------------------------------------------

    @requer_v2
    def envia_solicitacao_emissao(self, dados: Mapping[str, Any], params: QueryParams | None = None) -> ApiResponse:
        """Solicita ao escritorio a emissao de uma nota fiscal de servico."""
        garantir_sem_erros(campos_obrigatorios(dados, REGRAS_SOLICITACAO_EMISSAO))
        return self._resultado(self.post("invoices/emission-requests", dict(dados), params))

    @requer_v2
    def consulta_solicitacao_emissao(self, id_solicitacao: int | str, params: QueryParams | None = None) -> ApiResponse:
        if vazio(id_solicitacao) or id_solicitacao == 0:
            garantir_sem_erros(["O ID da solicitação de emissão é obrigatório"])
        path = f"invoices/emission-requests/{_segmento(id_solicitacao)}"
        return self._resultado(self.get(path, params))
