"""Constantes compartilhadas pelo cliente NFContador."""

from __future__ import annotations

import os

from dotenv import load_dotenv

# Arquivo de variaveis carregado antes de ler configuracoes.
# Em producao, prefira variaveis do ambiente.
ENV_CONFIG_FILE = os.getenv("NFCONTADOR_ENV_FILE", "config.env")

USE_DOTENV = os.getenv("USE_DOTENV", "true").strip().lower() in {"1", "true", "yes", "y", "on"}
if USE_DOTENV:
    load_dotenv(ENV_CONFIG_FILE, override=False)

APP_NAME = "nfcontador"

# =============================================================================
# URLS DA API
# =============================================================================
# Versao 1 da API: URL fixa, sem selecao de ambiente.
API_URL_V1 = "http://api.nfcontador-sandbox.nfservice.com.br/api/systems"

# Versao 2: URL escolhida pelo ambiente (1=producao, 2=local, 3=sandbox, 4=dusk).
API_URLS = {
    1: os.getenv("NFCONTADOR_URL_PRODUCAO", "https://api.nfcontador.com.br/api/systems"),
    2: os.getenv("NFCONTADOR_URL_LOCAL", "http://api.nfcontador.local/api/systems"),
    3: os.getenv("NFCONTADOR_URL_SANDBOX", "http://api.nfcontador-sandbox.nfservice.com.br/api/systems"),
    4: os.getenv("NFCONTADOR_URL_DUSK", "http://api.nfcontador.dusk/api/systems"),
}

# =============================================================================
# CABECALHOS
# =============================================================================
HEADER_AUTHORIZATION = "Authorization"
HEADER_ACCEPT = "Accept"
HEADER_CONTENT_TYPE = "Content-Type"
HEADER_CNPJ_COMPANY = "Company-Cnpj"

CONTENT_TYPE_JSON = "application/json"
CONTENT_TYPE_MULTIPART = "multipart/form-data"

# Parametro de query que identifica a empresa nas consultas.
PARAM_CNPJ_COMPANY = "cnpj_company"

# =============================================================================
# TIMEOUTS E POOL HTTP
# =============================================================================
DEFAULT_HTTP_TIMEOUT_SEC = 30
HTTP_POOL_CONNECTIONS = 10
HTTP_POOL_MAXSIZE = 10

# Status que confirma sucesso em todas as rotas da API.
HTTP_OK = 200

# =============================================================================
# MENSAGENS DE SUCESSO
# =============================================================================
MSG_EMPRESA_DELETADA = "Empresa deletada com sucesso"
MSG_CLIENTE_SINCRONIZADO = "Cliente sincronizado com sucesso"
MSG_SINCRONIZACAO_REMOVIDA = "Sincronização removida com sucesso"
MSG_DOCUMENTO_DELETADO = "Documento deletado com sucesso"

# Tipo padrao de empresa quando nao informado.
TIPO_EMPRESA_PADRAO = 2
