"""Logging estructurado (structlog) del import.

Todo va a stderr: stdout queda reservado para el JSON que emite el pipeline.
Nivel y formato salen de FIO_BCO_LOG_LEVEL / FIO_BCO_LOG_JSON salvo que se pasen explícitos.
"""

import logging
import sys
from typing import Optional

import structlog

from .config import get_settings


def setup_logging(log_level: Optional[str] = None, json_output: Optional[bool] = None) -> None:
    settings = get_settings()
    level = (log_level or settings.log_level).upper()
    as_json = settings.log_json if json_output is None else json_output

    renderer = structlog.processors.JSONRenderer() if as_json else structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
    )

    # force: cada llamada re-apunta el handler al sys.stderr actual
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, level, logging.DEBUG),
        force=True,
    )
