"""
Rotas de sistema.
Health, readiness e liveness, compartilhadas pelos dois serviços HTTP.
"""
import time
from typing import Dict

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from loguru import logger
from slowapi import Limiter
from slowapi.util import get_remote_address

from src.application.dtos import HealthCheckDTO, ReadinessCheckDTO
from src.config import settings

router = APIRouter(tags=["System"])

# Tempo de início da aplicação
_start_time = time.time()

limiter = Limiter(key_func=get_remote_address)


@router.get(
    "/health",
    response_model=HealthCheckDTO,
    summary="Health check",
    description="Returns the service status, version and uptime"
)
@limiter.limit("30/minute")
async def health_check(request: Request) -> HealthCheckDTO:
    return HealthCheckDTO(
        status="healthy",
        service=request.app.title,
        version=settings.app_version,
        uptime_seconds=round(time.time() - _start_time, 2),
    )


@router.get(
    "/health/ready",
    response_model=ReadinessCheckDTO,
    summary="Readiness check",
    description="Readiness check - validates critical dependencies",
    responses={503: {"model": ReadinessCheckDTO, "description": "One or more dependencies failed"}},
)
@limiter.limit("60/minute")
async def readiness_check(request: Request):
    """
    Verifica se as dependências críticas respondem.

    Returns:
        200: Todas as dependências saudáveis
        503: Uma ou mais dependências falharam
    """
    checks: Dict[str, bool] = await request.app.state.container.readiness_checks()
    ready = all(checks.values())
    result = ReadinessCheckDTO(status="ready" if ready else "not_ready", checks=checks)

    if not ready:
        failed = [name for name, ok in checks.items() if not ok]
        logger.warning(f"⚠️ Readiness check failed: {failed}")
        return JSONResponse(status_code=503, content=result.model_dump())

    return result


@router.get(
    "/health/live",
    summary="Liveness check",
    description="Liveness check - process is up and serving requests"
)
async def liveness_check() -> Dict[str, str]:
    return {"status": "alive"}
