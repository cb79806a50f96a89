import os

bind = os.getenv('GUNICORN_BIND', 'unix:/run/contact-backend/gunicorn.sock')
workers = int(os.getenv('GUNICORN_WORKERS', 2))
worker_class = "sync"
worker_tmp_dir = "/dev/shm"
max_requests = 1000
max_requests_jitter = 100
# Must exceed CONTACT_WEBHOOK_TIMEOUT so webhook failures reach the client as 502
timeout = int(os.getenv('GUNICORN_TIMEOUT', 30))
keepalive = 5

# Logging
accesslog = os.getenv('GUNICORN_ACCESS_LOG', '-')
errorlog = os.getenv('GUNICORN_ERROR_LOG', '-')
loglevel = os.getenv('GUNICORN_LOG_LEVEL', 'info')

# Process naming
proc_name = "contact-backend"

wsgi_app = "core.wsgi:application"


def when_ready(server):
    """Called just after the server is started."""
    server.log.info("Contact backend ready. Spawning workers")


def worker_abort(worker):
    """Called when a worker receives the SIGABRT signal (usually a timeout)."""
    worker.log.info("Worker aborted, probably stuck on the contact webhook")
