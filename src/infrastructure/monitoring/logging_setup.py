"""
Configuração de logging (loguru) compartilhada pelas APIs e workers.
"""
import sys
from pathlib import Path
from typing import Optional

from loguru import logger

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    json_format: bool = False
) -> None:
    """
    Configura os sinks do loguru.

    Args:
        level: Nível de log (DEBUG, INFO, WARNING, ERROR)
        log_file: Arquivo de log com rotação (opcional)
        json_format: Se True, serializa os registros em JSON
    """
    logger.remove()

    if json_format:
        logger.add(sys.stderr, level=level, serialize=True)
    else:
        logger.add(sys.stderr, format=CONSOLE_FORMAT, level=level)

    if not log_file:
        return

    try:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_file,
            rotation="100 MB",
            retention="10 days",
            compression="zip",
            level=level,
            format=FILE_FORMAT,
            serialize=json_format,
        )
        logger.info(f"File logging configured: {log_file}")
    except OSError as e:
        logger.error(f"Failed to configure file logging: {e}")
