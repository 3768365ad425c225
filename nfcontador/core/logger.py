"""Logging do cliente NFContador."""

from __future__ import annotations

import logging
import logging.handlers
import sys
from pathlib import Path

from nfcontador.core.constants import APP_NAME

CONSOLE_FORMAT = "%(asctime)s | %(levelname)-8s | %(message)s"
FILE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s:%(funcName)s:%(lineno)d | %(message)s"


def setup_logging(level: str = "INFO", log_dir: str | None = None) -> logging.Logger:
    """Liga a saida do logger do pacote para uso em linha de comando.

    Args:
        level: Nivel minimo (DEBUG mostra cada requisicao enviada).
        log_dir: Quando informado, grava tambem ``nfcontador.log`` com rotacao diaria.

    Returns:
        O logger ``nfcontador`` configurado.
    """
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    if any(not isinstance(h, logging.NullHandler) for h in logger.handlers):
        return logger

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt="%H:%M:%S"))
    logger.addHandler(console_handler)

    if log_dir:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.TimedRotatingFileHandler(
            log_path / f"{APP_NAME}.log",
            when="midnight",
            backupCount=30,
            encoding="utf-8",
        )
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(file_handler)

    return logger


# A biblioteca so emite pelo logger do pacote; handlers vem de setup_logging().
logger = logging.getLogger(APP_NAME)
logger.addHandler(logging.NullHandler())
