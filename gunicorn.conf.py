"""Gunicorn configuration for customlists production deployment."""

# Server socket
bind = '127.0.0.1:8080'

# Worker processes: each worker holds its own filter store and update timer
workers = 1
worker_class = 'gthread'
threads = 8

# Timeout
timeout = 120

# Logging
accesslog = '-'
errorlog = '-'
loglevel = 'info'
