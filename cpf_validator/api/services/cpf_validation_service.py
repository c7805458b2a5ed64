"""
Serviço de validação de CPF: encapsula a leitura do corpo da requisição,
o limite de tamanho e o mapeamento do resultado para a resposta HTTP.
O algoritmo em si fica em CPFUtils.
"""
from typing import Optional
from fastapi import HTTPException, Request, status
from cpf_validator.utils.cpf_utils import CPFUtils

INVALID_BODY_MESSAGE = "Corpo da requisição é invalido!"
VALID_CPF_MESSAGE = "CPF Valido!"
INVALID_CPF_MESSAGE = "CPF Invalido!"


def body_too_large_message(max_body_bytes: int) -> str:
    return f"Corpo da requisição superior a {max_body_bytes} bytes, abortando requisição"


class CpfValidationService:
    def __init__(self, max_body_bytes: int, logger=None):
        """
        Inicializa o serviço de validação.
        Parâmetros:
            max_body_bytes (int): tamanho máximo aceito para o corpo, em bytes
            logger (logging.Logger, opcional): Logger para logs
        """
        self.max_body_bytes = max_body_bytes
        if logger is None:
            import logging
            logger = logging.getLogger("cpf_validation_service")
            logger.setLevel(logging.INFO)
            handler = logging.StreamHandler()
            handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(message)s"))
            if not logger.hasHandlers():
                logger.addHandler(handler)
        self.logger = logger

    def _reject(self, message: str) -> HTTPException:
        self.logger.info(message)
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=message)

    def _declared_length(self, request: Request) -> Optional[int]:
        raw = request.headers.get("content-length")
        if raw is None:
            return None
        try:
            return int(raw)
        except ValueError:
            self.logger.warning(f"Content-Length inválido ignorado: {raw!r}")
            return None

    async def read_payload(self, request: Request) -> str:
        """
        Lê o corpo da requisição como texto, respeitando o limite de tamanho.
        O Content-Length declarado é verificado antes de qualquer leitura; sem ele,
        a leitura do stream é interrompida assim que o limite é ultrapassado.
        Parâmetros:
            request (Request): requisição recebida
        Retorno:
            str: corpo decodificado em UTF-8
        """
        declared = self._declared_length(request)
        if declared is not None and declared > self.max_body_bytes:
            raise self._reject(body_too_large_message(self.max_body_bytes))

        body = bytearray()
        async for chunk in request.stream():
            body.extend(chunk)
            if len(body) > self.max_body_bytes:
                raise self._reject(body_too_large_message(self.max_body_bytes))
        return body.decode("utf-8", errors="replace")

    def validate_payload(self, payload: str) -> str:
        """
        Valida o texto recebido como CPF.
        Parâmetros:
            payload (str): corpo da requisição
        Retorno:
            str: mensagem de sucesso (CPF válido)
        Exceções:
            HTTPException 400: corpo vazio ou CPF inválido
        """
        if not payload or not payload.strip():
            raise self._reject(INVALID_BODY_MESSAGE)

        is_valid = CPFUtils.is_valid_cpf(payload)
        self.logger.info(f"CPF é: {'Valido' if is_valid else 'Invalido'}")
        if not is_valid:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=INVALID_CPF_MESSAGE)
        return VALID_CPF_MESSAGE

    async def validate_request(self, request: Request) -> str:
        """
        Fluxo completo: leitura limitada do corpo e validação do CPF.
        Parâmetros:
            request (Request): requisição recebida
        Retorno:
            str: mensagem de sucesso
        """
        payload = await self.read_payload(request)
        return self.validate_payload(payload)
