"""Gunicorn configuration for production deployment."""
import multiprocessing
import os

# Server Socket
bind = os.getenv("BIND", "0.0.0.0:5002")
backlog = 2048

# Worker Processes
workers = int(os.getenv("WEB_CONCURRENCY", multiprocessing.cpu_count() * 2 + 1))
worker_class = "uvicorn.workers.UvicornWorker"
worker_connections = 1000
max_requests = 1000
max_requests_jitter = 50
timeout = 120
keepalive = 5

# Logging
accesslog = "-"  # Log to stdout
errorlog = "-"   # Log to stderr
loglevel = os.getenv("LOG_LEVEL", "info").lower()
access_log_format = '%(h)s %(l)s %(u)s %(t)s "%(r)s" %(s)s %(b)s "%(f)s" "%(a)s" %(D)s'

# Process Naming
proc_name = "work-hours-tracker"

# Server Mechanics
daemon = False
pidfile = None

preload_app = True
graceful_timeout = 30


def when_ready(server):
    """Called just after the server is started."""
    server.log.info("Work Hours Tracker ready. Listening on: %s", bind)


def post_fork(server, worker):
    server.log.info("Worker spawned (pid: %s)", worker.pid)


def worker_abort(worker):
    """Called when a worker is killed on timeout."""
    worker.log.warning("Worker received SIGABRT signal (pid: %s)", worker.pid)
