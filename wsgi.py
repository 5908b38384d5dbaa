"""WSGI entrypoint for Gunicorn.

The draw state lives in one process, so run a single worker:
  gunicorn -w 1 --threads 50 -b 0.0.0.0:3000 wsgi:app
"""

from luckydraw import create_app

app = create_app()
