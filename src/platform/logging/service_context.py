"""
Service context for log records.

Several stateless instances share one store, so every record carries
which instance wrote it.
"""

from functools import lru_cache
import os
import socket


@lru_cache(maxsize=1)
def get_service_context() -> str:
    service_name = os.getenv('SERVICE_NAME', 'cloakroom')
    deploy_env = os.getenv('DEPLOY_ENV', 'local_dev')

    # Container hostnames are unique per instance; fall back to PID locally
    instance_id = os.getenv('HOSTNAME') or socket.gethostname() or str(os.getpid())
    return f'{service_name}@{deploy_env}:{instance_id[:12]}:{os.getpid()}'
