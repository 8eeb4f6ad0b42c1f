"""Dashboard configuration constants and environment parsing."""
import logging
import os
from typing import Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# Ensure environment variables are loaded immediately upon import
load_dotenv()


def _float_env(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning("Invalid %s=%r, using default %s", name, raw, default)
        return default


def _timeout_env(name: str, default: float) -> Optional[float]:
    # 0 disables the timeout
    return _float_env(name, default) or None


# ============================================================================
# API GATEWAY
# ============================================================================

DEFAULT_REQUEST_TIMEOUT = 30.0

API_URL = os.environ.get('DABS_API_URL', 'http://localhost:8000').rstrip('/')
API_KEY = os.environ.get('DABS_API_KEY', '')
REQUEST_TIMEOUT = _timeout_env('DABS_REQUEST_TIMEOUT', DEFAULT_REQUEST_TIMEOUT)

# ============================================================================
# VIEWS
# ============================================================================

PAGE_SIZE = 20
CATEGORY_CHART_LIMIT = 10

LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO').upper()
