"""
asgi.py -- ASGI entry point for the inventory API.

Run with:  uvicorn asgi:app --reload
           python main.py
"""

from api.main import app

__all__ = ["app"]
