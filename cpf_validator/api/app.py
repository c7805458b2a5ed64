from fastapi import FastAPI, Depends, Request
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging
import uvicorn
from cpf_validator.auth.function_key import function_key_auth
from cpf_validator.api.services.cpf_validation_service import CpfValidationService
import os

app = FastAPI(title="CPF Validator API", version="1.0.0")

# Limite de tamanho do corpo da requisição (bytes)
MAX_BODY_BYTES = int(os.getenv("CPF_MAX_BODY_BYTES", "200"))
ROUTE = "/api/ValidarCpf"

cpf_validation_service = CpfValidationService(MAX_BODY_BYTES)


# Todas as respostas de erro são texto puro, sem JSON
@app.exception_handler(StarletteHTTPException)
async def plain_text_http_exception(request: Request, exc: StarletteHTTPException) -> PlainTextResponse:
    """
    Converte HTTPException em resposta de texto puro.
    Parâmetros:
        request (Request): requisição de origem
        exc (HTTPException): exceção levantada
    Retorno:
        PlainTextResponse: mensagem do erro com o status original
    """
    return PlainTextResponse(str(exc.detail), status_code=exc.status_code, headers=getattr(exc, "headers", None))


#########
@app.post(ROUTE, response_class=PlainTextResponse)
async def validar_cpf(request: Request, _: str = Depends(function_key_auth)) -> PlainTextResponse:
    """
    Valida o CPF enviado no corpo da requisição (texto puro).
    Parâmetros:
        request (Request): requisição com o CPF no corpo
        _: chave de função
    Retorno:
        PlainTextResponse: 200 se o CPF for válido
    """
    logger.info("Validando CPF")
    message = await cpf_validation_service.validate_request(request)
    return PlainTextResponse(message)



######### ------------------------------ #########
logger = logging.getLogger(__name__)

if __name__ == "__main__":
    """
    Inicializa o servidor Uvicorn para rodar a API.
    """
    port = int(os.getenv("PORT", "3000"))
    logger.info(f"Starting Uvicorn server on 0.0.0.0:{port}")
    uvicorn.run(app, host="0.0.0.0", port=port)
