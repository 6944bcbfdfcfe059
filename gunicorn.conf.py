"""
Gunicorn configuration for production deployment.

    gunicorn -c gunicorn.conf.py main:app
"""
import multiprocessing
import os
from pathlib import Path

# LOG_DIR comes from .env via framework.config
from framework.config import settings

LOG_DIR = Path(settings.LOG_DIR)
LOG_DIR.mkdir(parents=True, exist_ok=True)

# Server
bind = f"0.0.0.0:{os.getenv('PORT', '8000')}"
backlog = 2048

# Workers: each keeps its own SQL pool and Redis client
workers = int(os.getenv("WEB_CONCURRENCY", min(multiprocessing.cpu_count() * 2 + 1, 8)))
worker_class = "uvicorn.workers.UvicornWorker"
worker_connections = 1000
max_requests = 1000
max_requests_jitter = 50
timeout = 60
keepalive = 5

proc_name = (settings.GUNICORN_PROC_NAME or settings.APP_NAME.lower().replace(" ", "-"))[:32]

# Logging
accesslog = str(LOG_DIR / "gunicorn_access.log")
errorlog = str(LOG_DIR / "gunicorn_error.log")
loglevel = "debug" if settings.DEBUG else "info"
access_log_format = '%(h)s %(l)s %(u)s %(t)s "%(r)s" %(s)s %(b)s "%(f)s" "%(a)s" %(D)s'

# Process management (systemd supervises the master)
daemon = False
pidfile = str(LOG_DIR / "gunicorn.pid")
umask = 0o007

# Engines are created lazily per worker, so preloading is safe
preload_app = True
worker_tmp_dir = "/dev/shm"
graceful_timeout = 30

limit_request_line = 4094
limit_request_fields = 100
limit_request_field_size = 8190

# Clients behind the load balancer; rate limiting keys on X-Forwarded-For
forwarded_allow_ips = os.getenv("FORWARDED_ALLOW_IPS", "127.0.0.1")


def when_ready(server):
    server.log.info("%s (%s) is ready. Listening on %s", settings.APP_NAME, settings.APP_ENV, server.address)


def on_exit(server):
    server.log.info("%s is shutting down.", settings.APP_NAME)


def post_fork(server, worker):
    server.log.info("Worker spawned (pid: %s)", worker.pid)


def worker_abort(worker):
    worker.log.info("Worker received SIGABRT signal")
