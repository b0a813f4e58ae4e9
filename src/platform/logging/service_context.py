"""
Service context extraction for log lines.

Identifies the emitting process so interleaved logs from several workers
(uvicorn --workers, container replicas) can be told apart.
"""

from functools import lru_cache
import os
import socket


@lru_cache(maxsize=1)
def get_service_context() -> str:
    service_name = os.getenv('SERVICE_NAME', 'event-ticketing')
    deploy_env = os.getenv('DEPLOY_ENV', 'local_dev')

    # Container hostnames are short random ids; fall back to the PID locally
    instance = os.getenv('HOSTNAME') or socket.gethostname() or ''
    instance_id = instance[:12] if deploy_env != 'local_dev' and instance else str(os.getpid())

    return f'{service_name}@{deploy_env}:{instance_id}'
