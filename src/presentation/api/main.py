"""
FastAPI Application - Video Processing Service.

Upload de vídeos, solicitação de extração de frames e consulta de status.
O processamento em si roda nos workers Celery (fila video_processing).
"""
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from src.config import settings
from src.infrastructure.container import build_video_container
from src.infrastructure.monitoring import setup_logging
from src.presentation.api.error_handlers import register_exception_handlers
from src.presentation.api.middlewares import LoggingMiddleware
from src.presentation.api.routes import system, videos


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Gerencia o ciclo de vida da aplicação.
    Monta o container no startup e libera conexões no shutdown.
    """
    setup_logging(
        level=settings.log_level,
        log_file=settings.log_file,
        json_format=settings.log_format == "json",
    )

    logger.info("=" * 60)
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Environment: {settings.app_environment}")
    logger.info(f"Upload Directory: {settings.upload_dir}")
    logger.info(f"Object Store Bucket: {settings.s3_bucket}")
    logger.info("=" * 60)

    container = build_video_container(settings)
    await container.startup()
    app.state.container = container

    yield

    logger.info("Shutting down video processing service...")
    await container.shutdown()


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="""
    ## Video Processing Service

    * 📤 Upload de vídeos com validação de tipo e tamanho
    * 🎞️ Extração de frames em background (FFmpeg + Celery)
    * 📦 Pacote de frames publicado no object store com URL temporária
    * 🔔 Notificação por e-mail/push ao término
    """,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# Configurar CORS
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
app.include_router(videos.router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "src.presentation.api.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.app_environment == "development",
        log_level=settings.log_level.lower()
    )
