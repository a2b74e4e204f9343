import os
from functools import lru_cache

from src.platform.config.core_setting import settings


@lru_cache(maxsize=1)
def get_service_context() -> str:
    """'reading-room-service@local_dev:4242', tells uvicorn workers apart in the log stream"""
    return f'{settings.SERVICE_NAME}@{settings.DEPLOY_ENV}:{os.getpid()}'
