from __future__ import annotations

from slowapi import Limiter
from slowapi.util import get_remote_address

from claire.config import settings

limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[settings.RATE_LIMIT_DEFAULT],
    storage_uri=settings.RATE_LIMIT_STORAGE_URI,
)
