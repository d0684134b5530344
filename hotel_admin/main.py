"""
Name: ASGI Entrypoint (hotel_admin.main)

Re-exporta la app FastAPI para uvicorn: `uvicorn hotel_admin.main:app`.
Sin configuración ni IO acá.
"""

from .api.main import app

__all__ = ["app"]
