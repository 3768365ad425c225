"""Camada HTTP da API NFContador: cabecalhos, query string e executor."""

from __future__ import annotations

import json
import time
from typing import Any, Iterable, Mapping, NamedTuple, Sequence, Union
from urllib.parse import quote_plus

import requests
from requests.adapters import HTTPAdapter
from requests.structures import CaseInsensitiveDict

from nfcontador.api.responses import ApiResponse
from nfcontador.core.config import ApiVersion, ClientConfig
from nfcontador.core.constants import (
    API_URL_V1,
    API_URLS,
    CONTENT_TYPE_JSON,
    CONTENT_TYPE_MULTIPART,
    HEADER_ACCEPT,
    HEADER_AUTHORIZATION,
    HEADER_CNPJ_COMPANY,
    HEADER_CONTENT_TYPE,
    HTTP_OK,
    HTTP_POOL_CONNECTIONS,
    HTTP_POOL_MAXSIZE,
)
from nfcontador.core.exceptions import ConfigurationError, TransportError
from nfcontador.core.logger import logger


class QueryParam(NamedTuple):
    """Par nome/valor de query string."""

    name: str
    value: Any


QueryParams = Sequence[Union[QueryParam, Mapping[str, Any]]]
HeaderLines = list[tuple[str, str]]


def _par(param: QueryParam | Mapping[str, Any]) -> tuple[Any, Any]:
    if isinstance(param, Mapping):
        return param.get("name"), param.get("value")
    return param[0], param[1]


def _vazio(valor: Any) -> bool:
    return valor is None or valor is False or str(valor) == ""


def _valor_query(valor: Any) -> str:
    if valor is True:
        return "1"
    return str(valor)


def codificar_query(params: QueryParams | None) -> str:
    """Codifica os parametros preservando a ordem.

    Pares com nome ou valor vazio (incluindo ``False``) sao descartados;
    ``True`` vira ``1``. Sem pares restantes, retorna string vazia (sem ``?``).
    """
    pares = []
    for param in params or ():
        nome, valor = _par(param)
        if _vazio(nome) or _vazio(valor):
            continue
        pares.append(f"{quote_plus(str(nome))}={quote_plus(_valor_query(valor))}")

    if not pares:
        return ""
    return "?" + "&".join(pares)


def substituir_param(params: QueryParams | None, nome: str, valor: Any) -> list[QueryParam]:
    """Remove todas as ocorrencias de ``nome`` e readiciona com ``valor``.

    Quando ``valor`` e vazio o parametro apenas some da lista.
    """
    resultado = [QueryParam(*_par(p)) for p in params or () if _par(p)[0] != nome]
    if not _vazio(valor):
        resultado.append(QueryParam(nome, valor))
    return resultado


def montar_headers(config: ClientConfig, extras: Iterable[tuple[str, str]] | None = None) -> HeaderLines:
    """Cabecalhos padrao seguidos dos extras da chamada, sem mesclar."""
    headers: HeaderLines = [
        (HEADER_AUTHORIZATION, f"Bearer {config.token}"),
        (HEADER_ACCEPT, CONTENT_TYPE_JSON),
    ]

    if config.versao == ApiVersion.V2:
        headers.append((HEADER_CNPJ_COMPANY, config.cnpj or ""))

    if config.upload:
        headers.append((HEADER_CONTENT_TYPE, CONTENT_TYPE_MULTIPART))
    else:
        headers.append((HEADER_CONTENT_TYPE, CONTENT_TYPE_JSON))

    if extras:
        headers.extend(extras)
    return headers


def combinar_headers(linhas: Iterable[tuple[str, str]]) -> CaseInsensitiveDict:
    """Cabecalhos de envio; nomes repetidos viram um valor unico separado por virgula."""
    headers: CaseInsensitiveDict = CaseInsensitiveDict()
    for nome, valor in linhas:
        if nome in headers:
            headers[nome] = f"{headers[nome]}, {valor}"
        else:
            headers[nome] = valor
    return headers


def _multipart(body: Mapping[str, Any]) -> list[tuple[str, Any]]:
    """Converte o payload em partes de formulario multipart."""
    partes: list[tuple[str, Any]] = []
    for nome, valor in body.items():
        for item in valor if isinstance(valor, list) else [valor]:
            if isinstance(item, tuple) or hasattr(item, "read") or isinstance(item, bytes):
                partes.append((nome, item))
            elif item is None:
                partes.append((nome, (None, "")))
            else:
                partes.append((nome, (None, str(item))))
    return partes


class NFContadorRestClient:
    """Executor unico de todas as chamadas a API."""

    def __init__(self, config: ClientConfig, session: requests.Session | None = None) -> None:
        self.config = config
        self.session = session if session is not None else self._setup_session()

    @staticmethod
    def _setup_session() -> requests.Session:
        """Configura a sessao HTTP com pool de conexoes e sem retries."""
        session = requests.Session()
        adapter = HTTPAdapter(
            max_retries=0,
            pool_connections=HTTP_POOL_CONNECTIONS,
            pool_maxsize=HTTP_POOL_MAXSIZE,
        )
        session.mount("http://", adapter)
        session.mount("https://", adapter)
        return session

    def base_url(self) -> str:
        """URL base conforme versao e ambiente.

        Raises:
            ConfigurationError: Versao 2 sem ambiente definido.
        """
        if self.config.versao == ApiVersion.V1:
            return API_URL_V1
        if self.config.ambiente is None:
            raise ConfigurationError(
                "Ambiente nao definido: use set_ambiente() (1=producao, 2=local, 3=sandbox, 4=dusk)"
            )
        return API_URLS[int(self.config.ambiente)]

    def montar_url(self, path: str, params: QueryParams | None = None) -> str:
        if not path.startswith("/"):
            path = "/" + path
        return self.base_url() + path + codificar_query(params)

    def get(self, path: str, params: QueryParams | None = None, headers: HeaderLines | None = None) -> ApiResponse:
        return self.execute("GET", path, params=params, headers=headers)

    def post(
        self,
        path: str,
        body: Mapping[str, Any] | None = None,
        params: QueryParams | None = None,
        headers: HeaderLines | None = None,
    ) -> ApiResponse:
        return self.execute("POST", path, params=params, headers=headers, body=body or {})

    def put(
        self,
        path: str,
        body: Mapping[str, Any] | None = None,
        params: QueryParams | None = None,
        headers: HeaderLines | None = None,
    ) -> ApiResponse:
        return self.execute("PUT", path, params=params, headers=headers, body=body or {})

    def delete(self, path: str, params: QueryParams | None = None, headers: HeaderLines | None = None) -> ApiResponse:
        return self.execute("DELETE", path, params=params, headers=headers)

    def execute(
        self,
        method: str,
        path: str,
        params: QueryParams | None = None,
        headers: HeaderLines | None = None,
        body: Mapping[str, Any] | None = None,
    ) -> ApiResponse:
        """Realiza a requisicao e devolve o envelope normalizado.

        Status diferente de 200 nao gera excecao aqui; a interpretacao fica
        com cada operacao do cliente.

        Args:
            method: Verbo HTTP.
            path: Rota relativa a URL base (a barra inicial e opcional).
            params: Parametros de query.
            headers: Cabecalhos adicionais, acrescentados apos os padrao.
            body: Payload de POST/PUT.

        Returns:
            ApiResponse com corpo, status e, em debug, diagnostico.

        Raises:
            ConfigurationError: Ambiente nao definido na versao 2.
            TransportError: Falha de conexao, DNS, TLS ou timeout.
        """
        url = self.montar_url(path, params)
        multipart = body is not None and self.config.upload

        padrao = montar_headers(self.config)
        if multipart:
            # requests gera o Content-Type com o boundary do multipart.
            padrao = [(nome, valor) for nome, valor in padrao if nome != HEADER_CONTENT_TYPE]
        request_headers = combinar_headers(padrao + list(headers or []))

        kwargs: dict[str, Any] = {}
        if body is not None:
            if multipart:
                kwargs["files"] = _multipart(body)
            else:
                kwargs["data"] = json.dumps(body)

        inicio = time.perf_counter()
        try:
            response = self.session.request(
                method,
                url,
                headers=request_headers,
                timeout=self.config.timeout,
                **kwargs,
            )
        except requests.RequestException as exc:
            logger.error("Falha de transporte em %s %s: %s", method, url, exc)
            raise TransportError(
                f"Falha de comunicacao com a API NFContador: {exc}",
                method=method,
                url=url,
            ) from exc
        total_time = time.perf_counter() - inicio

        logger.debug("%s %s -> %s (%.3fs)", method, url, response.status_code, total_time)

        resposta = ApiResponse(body=self._decodificar(response), http_code=response.status_code)
        if self.config.debug:
            resposta.info = self._diagnostico(method, url, request_headers, response, total_time)
        return resposta

    def _decodificar(self, response: requests.Response) -> Any:
        # Corpo bruto so e devolvido em sucesso confirmado; erros sempre decodificam.
        if not self.config.decode and response.status_code == HTTP_OK:
            return response.text

        texto = response.text
        if not texto or not texto.strip():
            return None
        try:
            return json.loads(texto)
        except ValueError:
            logger.warning("Resposta HTTP %s nao e JSON valido; mantendo texto bruto", response.status_code)
            return texto

    @staticmethod
    def _diagnostico(
        method: str,
        url: str,
        request_headers: Mapping[str, str],
        response: requests.Response,
        total_time: float,
    ) -> dict[str, Any]:
        enviados = dict(request_headers)
        for nome in list(enviados):
            if nome.lower() == HEADER_AUTHORIZATION.lower():
                enviados[nome] = "Bearer ***"

        return {
            "method": method,
            "url": response.url or url,
            "http_code": response.status_code,
            "total_time": total_time,
            "content_type": response.headers.get(HEADER_CONTENT_TYPE),
            "reason": response.reason,
            "request_headers": enviados,
            "response_headers": dict(response.headers),
        }

    def close(self) -> None:
        self.session.close()
