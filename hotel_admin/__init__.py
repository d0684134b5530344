"""Backend de administración de usuarios del sistema hotelero."""

__version__ = "0.1.0"
