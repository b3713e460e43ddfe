"""
FastAPI Application - Notification Service.

Envio e consulta de notificações. As entregas disparadas pelo pipeline de
vídeo chegam pela fila `notifications` e são processadas pelos workers.
"""
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from src.config import settings
from src.infrastructure.container import build_notification_container
from src.infrastructure.monitoring import setup_logging
from src.presentation.api.error_handlers import register_exception_handlers
from src.presentation.api.middlewares import LoggingMiddleware
from src.presentation.api.routes import notifications, system


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(
        level=settings.log_level,
        log_file=settings.log_file,
        json_format=settings.log_format == "json",
    )
    logger.info(f"Starting {settings.notifications_app_name} v{settings.app_version}")

    container = build_notification_container(settings)
    await container.startup()
    app.state.container = container

    yield

    logger.info("Shutting down notification service...")
    await container.shutdown()


app = FastAPI(
    title=settings.notifications_app_name,
    version=settings.app_version,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

if settings.enable_cors:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

app.add_middleware(LoggingMiddleware)
register_exception_handlers(app)

app.include_router(system.router)
app.include_router(notifications.router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "src.presentation.api.notifications_main:app",
        host=settings.host,
        port=settings.notifications_port,
        reload=settings.app_environment == "development",
        log_level=settings.log_level.lower()
    )
