"""
WSGI entry point for the payment/QR API.

  gunicorn wsgi:app
"""

from api import create_app
from infrastructure.observability import setup_observability

setup_observability()
app = create_app()
