"""
Service context extraction for logging.

Identifies which service instance wrote a log line, so logs from several
workers (e.g. uvicorn/granian processes behind a load balancer) can be told apart.
"""

import os
from functools import lru_cache
import socket

from src.platform.config.core_setting import settings


@lru_cache(maxsize=1)
def get_service_context() -> str:
    service_name = os.getenv('SERVICE_NAME', settings.SERVICE_NAME)
    deploy_env = os.getenv('DEPLOY_ENV', 'local_dev')

    # Containers get a short hostname; local runs fall back to the PID
    hostname = os.getenv('HOSTNAME') or socket.gethostname()
    instance = hostname[:12] if deploy_env != 'local_dev' else str(os.getpid())

    return f'{service_name}@{deploy_env}:{instance}'
