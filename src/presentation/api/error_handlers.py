"""
Mapeamento das exceções de domínio para respostas HTTP.

Toda resposta de erro usa o envelope {success, data, message, error, request_id}.
"""
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.application.dtos import ErrorResponseDTO
from src.domain.exceptions import (
    AuthenticationRequiredError,
    CollaboratorError,
    DomainException,
    ResourceNotFoundError,
)

# Exceções de domínio sem entrada específica resultam em 400
STATUS_BY_EXCEPTION = (
    (AuthenticationRequiredError, status.HTTP_401_UNAUTHORIZED),
    (ResourceNotFoundError, status.HTTP_404_NOT_FOUND),
    (CollaboratorError, status.HTTP_503_SERVICE_UNAVAILABLE),
)


def _request_id(request: Request) -> Optional[str]:
    return getattr(request.state, "request_id", None)


def error_response(
    request: Request,
    status_code: int,
    message: str,
    error: str
) -> JSONResponse:
    body = ErrorResponseDTO(message=message, error=error, request_id=_request_id(request))
    return JSONResponse(status_code=status_code, content=body.model_dump())


def status_for(exc: DomainException) -> int:
    for exc_type, status_code in STATUS_BY_EXCEPTION:
        if isinstance(exc, exc_type):
            return status_code
    return status.HTTP_400_BAD_REQUEST


async def domain_exception_handler(request: Request, exc: DomainException) -> JSONResponse:
    status_code = status_for(exc)
    log = logger.error if status_code >= 500 else logger.warning
    log(
        f"❌ {type(exc).__name__}: {exc}",
        extra={"request_id": _request_id(request), "path": request.url.path}
    )
    return error_response(request, status_code, str(exc), type(exc).__name__)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
        for error in exc.errors()
    )
    logger.warning(f"❌ Request validation failed: {errors}", extra={"request_id": _request_id(request)})
    return error_response(request, status.HTTP_400_BAD_REQUEST, errors, "ValidationError")


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return error_response(request, exc.status_code, str(exc.detail), "HTTPException")


async def rate_limit_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    logger.warning(f"Rate limit exceeded: {request.url.path}", extra={"request_id": _request_id(request)})
    return error_response(
        request,
        status.HTTP_429_TOO_MANY_REQUESTS,
        f"Rate limit exceeded: {exc.detail}",
        "RateLimitExceeded"
    )


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handler global para exceções não tratadas."""
    logger.opt(exception=exc).error(f"Unhandled exception: {str(exc)}")
    return error_response(
        request,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "An unexpected error occurred",
        "InternalServerError"
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DomainException, domain_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RateLimitExceeded, rate_limit_handler)
    app.add_exception_handler(Exception, global_exception_handler)
