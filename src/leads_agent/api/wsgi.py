"""Entrypoint WSGI: gunicorn leads_agent.api.wsgi:app"""
from .app import create_app

app = create_app()
