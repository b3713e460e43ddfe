"""
Middleware de logging e correlação de requisições.

Cada requisição recebe um request ID (o X-Request-ID do gateway, ou um
uuid4 novo), exposto em `request.state.request_id`, nos logs emitidos
durante a requisição e no header da resposta.
"""
import time
import uuid
from typing import Callable

from fastapi import Request, Response
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware

REQUEST_ID_HEADER = "X-Request-ID"
PROCESS_TIME_HEADER = "X-Process-Time"

# Health checks do orquestrador são registrados só em DEBUG
QUIET_PATHS = ("/health", "/health/ready", "/health/live")


class LoggingMiddleware(BaseHTTPMiddleware):
    """Registra início, fim e falhas de cada requisição HTTP."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.state.request_id = request_id

        route = f"{request.method} {request.url.path}"
        client_host = request.client.host if request.client else "unknown"
        level = "DEBUG" if request.url.path in QUIET_PATHS else "INFO"
        started = time.perf_counter()

        with logger.contextualize(request_id=request_id):
            logger.log(level, f"➡️ {route} from {client_host}")

            try:
                response = await call_next(request)
            except Exception as e:
                logger.error(f"💥 {route} raised {type(e).__name__}: {e} ({_elapsed(started):.3f}s)")
                raise

            elapsed = _elapsed(started)
            logger.log(level, f"⬅️ {route} status={response.status_code} time={elapsed:.3f}s")

        response.headers[PROCESS_TIME_HEADER] = f"{elapsed:.4f}"
        response.headers[REQUEST_ID_HEADER] = request_id
        return response


def _elapsed(started: float) -> float:
    return time.perf_counter() - started
