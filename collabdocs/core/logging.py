import logging
import sys
from typing import Optional

from collabdocs.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logging(level: Optional[str] = None) -> None:
    """Настройка логгера приложения"""
    level = (level or settings.log_level).upper()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    app_logger = logging.getLogger("collabdocs")
    app_logger.handlers = [handler]
    app_logger.setLevel(level)
    app_logger.propagate = False

    # SQL эхо управляется отдельно через settings.sql_echo
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
