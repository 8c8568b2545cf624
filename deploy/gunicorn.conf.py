# Gunicorn configuration
# Run with: gunicorn -c deploy/gunicorn.conf.py "cfcoach:create_app('production')"
#
# The SuggestionEngine keeps its state in process memory, so exactly one
# worker process serves every request; concurrency comes from threads.
import multiprocessing

bind = "127.0.0.1:8000"
workers = 1
worker_class = "gthread"
threads = multiprocessing.cpu_count() * 2 + 1
# Must exceed LLM_TIMEOUT so a slow provider call is not killed mid-request.
timeout = 120
keepalive = 5
errorlog = "/var/log/cf-coach/gunicorn-error.log"
accesslog = "/var/log/cf-coach/gunicorn-access.log"
loglevel = "info"
