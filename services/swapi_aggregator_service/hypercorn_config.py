"""Hypercorn settings for serving the aggregator.

Usage: ``hypercorn --config python:services.swapi_aggregator_service.hypercorn_config
services.swapi_aggregator_service.app:app``
"""

import os

from services.swapi_aggregator_service.config import settings

bind = f"{settings.HOST}:{settings.PORT}"
workers = int(os.getenv("WEB_CONCURRENCY", 1))
worker_class = "asyncio"

loglevel = settings.LOG_LEVEL.lower()
accesslog = "-"
errorlog = "-"
access_log_format = '%(h)s %(l)s %(u)s %(t)s "%(r)s" %(s)s %(b)s %(L)ss'

# Pagination runs can take several upstream round trips
graceful_timeout = int(os.getenv("GRACEFUL_TIMEOUT", 60))
keepalive_timeout = int(os.getenv("KEEP_ALIVE_TIMEOUT", 5))
