import os
from functools import lru_cache
import socket

from eventhub.platform.config.core_setting import settings


@lru_cache(maxsize=1)
def get_service_context() -> str:
    """`service@env:instance`, so log lines from several API replicas can be told apart"""
    # Containers get a random hostname; locally the pid is more useful
    hostname = os.getenv('HOSTNAME', '')
    instance = hostname[:12] if hostname else f'{socket.gethostname()}:{os.getpid()}'
    return f'{settings.SERVICE_NAME}@{settings.DEPLOY_ENV}:{instance}'
