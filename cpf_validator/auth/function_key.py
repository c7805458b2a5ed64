from typing import Dict, Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import APIKeyHeader, APIKeyQuery
import logging
import os
import secrets

header_scheme = APIKeyHeader(name="x-functions-key", auto_error=False)
query_scheme = APIKeyQuery(name="code", auto_error=False)
_keys_cache: Dict[str, str] = {}
_cache_file_path: str = ""

logger = logging.getLogger(__name__)


def _load_keys(file_path: str) -> None:
	global _keys_cache, _cache_file_path
	if file_path == _cache_file_path and _keys_cache:
		return
	keys: Dict[str, str] = {}
	try:
		with open(file_path, "r", encoding="utf-8") as f:
			for line in f:
				line = line.strip()
				if not line or line.startswith("#"):
					continue
				if ":" not in line:
					continue
				name, key = line.split(":", 1)
				if key:
					keys[name] = key
	except FileNotFoundError:
		logger.warning(f"Arquivo de chaves não encontrado: {file_path}")
	_keys_cache = keys
	_cache_file_path = file_path


def _match_key(provided: str, keys: Dict[str, str]) -> Optional[str]:
	provided_bytes = provided.encode("utf-8")
	for name, expected in keys.items():
		if secrets.compare_digest(expected.encode("utf-8"), provided_bytes):
			return name
	return None


async def function_key_auth(
	header_key: Optional[str] = Depends(header_scheme),
	query_key: Optional[str] = Depends(query_scheme),
) -> str:
	auth_level = os.getenv("FUNCTION_AUTH_LEVEL", "function").strip().lower()
	if auth_level == "anonymous":
		return "anonymous"

	keys_file = os.getenv("FUNCTION_KEYS_FILE", "cpf_validator/credentials/function_keys.txt")
	_load_keys(keys_file)
	keys = dict(_keys_cache)
	env_key = os.getenv("FUNCTION_KEY")
	if env_key:
		keys["default"] = env_key

	provided = header_key or query_key
	name = _match_key(provided, keys) if provided else None
	if name is None:
		logger.warning("Requisição rejeitada: chave de função ausente ou inválida")
		raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Chave de função inválida ou ausente")
	return name
