"""
HTTP API layer.

Exposes the comparison service over FastAPI:
- POST /api/comparar
- GET /api/health
"""

from .app import create_app

__all__ = ["create_app"]
