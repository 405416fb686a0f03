"""
Logging Configuration
=====================

Configures the root logger once per process. Modules log through
`logging.getLogger(__name__)`.

- development/test: human readable lines
- production: single-line key=value records for log aggregation
"""
import logging
import sys

from app.core.config import get_settings

DEV_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
PROD_FORMAT = "ts=%(asctime)s level=%(levelname)s logger=%(name)s msg=\"%(message)s\""

_configured = False


def setup_logging() -> None:
    """Configure root logging from settings. Safe to call more than once."""
    global _configured
    if _configured:
        return

    settings = get_settings()
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(PROD_FORMAT if settings.is_production else DEV_FORMAT))

    root = logging.getLogger()
    root.addHandler(handler)
    root.setLevel(settings.log_level)

    # pymongo logs every heartbeat at DEBUG
    logging.getLogger("pymongo").setLevel(logging.WARNING)

    _configured = True
