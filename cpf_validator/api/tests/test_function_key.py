import pytest
import httpx
import logging
from cpf_validator.api.app import app, ROUTE
from cpf_validator.auth import function_key

logger = logging.getLogger("test_function_key")
logging.basicConfig(level=logging.INFO)

CPF = "111.444.777-35"


@pytest.fixture
def keys_file(monkeypatch, tmp_path):
    path = tmp_path / "function_keys.txt"
    path.write_text(
        "# chaves da função\n"
        "\n"
        "default:chave-principal\n"
        "linha-sem-separador\n"
        "secundaria:outra:chave\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("FUNCTION_AUTH_LEVEL", "function")
    monkeypatch.setenv("FUNCTION_KEYS_FILE", str(path))
    monkeypatch.delenv("FUNCTION_KEY", raising=False)
    return path


def _client() -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://testserver")


def test_load_keys_parses_file(keys_file):
    function_key._load_keys(str(keys_file))
    assert function_key._keys_cache == {"default": "chave-principal", "secundaria": "outra:chave"}


def test_load_keys_missing_file(tmp_path):
    function_key._load_keys(str(tmp_path / "inexistente.txt"))
    assert function_key._keys_cache == {}


@pytest.mark.asyncio
async def test_missing_key_rejected(keys_file):
    async with _client() as client:
        response = await client.post(ROUTE, content=CPF)
        logger.info(f"[PASS/FAIL] test_missing_key_rejected: status={response.status_code}, body={response.text}")
        assert response.status_code == 401
        assert response.text == "Chave de função inválida ou ausente"


@pytest.mark.asyncio
async def test_wrong_key_rejected(keys_file):
    async with _client() as client:
        response = await client.post(ROUTE, headers={"x-functions-key": "errada"}, content=CPF)
        assert response.status_code == 401


@pytest.mark.asyncio
async def test_header_key_accepted(keys_file):
    async with _client() as client:
        response = await client.post(ROUTE, headers={"x-functions-key": "chave-principal"}, content=CPF)
        assert response.status_code == 200


@pytest.mark.asyncio
async def test_query_code_accepted(keys_file):
    async with _client() as client:
        response = await client.post(ROUTE, params={"code": "outra:chave"}, content=CPF)
        assert response.status_code == 200


@pytest.mark.asyncio
async def test_env_key_accepted(keys_file, monkeypatch):
    monkeypatch.setenv("FUNCTION_KEY", "chave-do-ambiente")
    async with _client() as client:
        response = await client.post(ROUTE, headers={"x-functions-key": "chave-do-ambiente"}, content=CPF)
        assert response.status_code == 200


@pytest.mark.asyncio
async def test_anonymous_level_skips_key(monkeypatch, tmp_path):
    monkeypatch.setenv("FUNCTION_AUTH_LEVEL", "anonymous")
    monkeypatch.setenv("FUNCTION_KEYS_FILE", str(tmp_path / "inexistente.txt"))
    async with _client() as client:
        response = await client.post(ROUTE, content=CPF)
        assert response.status_code == 200


@pytest.mark.asyncio
async def test_key_checked_before_body(keys_file):
    async with _client() as client:
        response = await client.post(ROUTE, content="1" * 500)
        assert response.status_code == 401
