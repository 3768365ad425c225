"""Shared pytest fixtures."""

from __future__ import annotations

import json
from typing import Any
from unittest.mock import MagicMock

import pytest

from nfcontador.api.client import NFContadorClient
from nfcontador.core.config import Ambiente, ClientConfig


def make_response(
    status_code: int = 200,
    body: Any = None,
    text: str | None = None,
    headers: dict[str, str] | None = None,
) -> MagicMock:
    """Build a fake requests.Response with the attributes the executor reads."""
    response = MagicMock()
    response.status_code = status_code
    if text is None:
        text = "" if body is None else json.dumps(body)
    response.text = text
    response.headers = headers if headers is not None else {"Content-Type": "application/json"}
    response.url = "http://api.test/api/systems"
    response.reason = "OK" if status_code == 200 else "Error"
    return response


@pytest.fixture()
def session() -> MagicMock:
    """Mocked requests.Session answering 200 with an empty JSON object."""
    fake = MagicMock()
    fake.request.return_value = make_response(200, {})
    return fake


@pytest.fixture()
def config() -> ClientConfig:
    return ClientConfig(token="secret-token", cnpj="12345678000199", ambiente=Ambiente.SANDBOX)


@pytest.fixture()
def client(config: ClientConfig, session: MagicMock) -> NFContadorClient:
    return NFContadorClient(config, session=session)


@pytest.fixture(autouse=True)
def _sem_variaveis_nfcontador(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep NFCONTADOR_* variables from the host out of the tests."""
    for name in (
        "NFCONTADOR_TOKEN",
        "NFCONTADOR_CNPJ",
        "NFCONTADOR_AMBIENTE",
        "NFCONTADOR_VERSAO",
        "NFCONTADOR_DEBUG",
        "NFCONTADOR_DECODE",
        "NFCONTADOR_TIMEOUT_SEC",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture()
def response_factory() -> Any:
    """Expose make_response to tests without importing conftest."""
    return make_response
