# app/core/logging.py
from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logging(level: str = "INFO") -> None:
    """Configura el logger raíz una sola vez (idempotente si uvicorn recarga)."""
    root = logging.getLogger()
    if any(getattr(h, "_survey_intake", False) for h in root.handlers):
        root.setLevel(level.upper())
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._survey_intake = True  # marca para no duplicar handlers
    root.addHandler(handler)
    root.setLevel(level.upper())

    # SQLAlchemy hace mucho ruido en INFO
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
