from __future__ import annotations

import logging

from dynamicplaylist.core.config import settings

LOG_FORMAT = "%(asctime)s %(name)s [%(levelname)s] %(message)s"


def configure_logging() -> None:
    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT, force=True)
