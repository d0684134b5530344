"""
===============================================================================
TARJETA CRC — infrastructure/db/errors.py
===============================================================================

Componente:
  Errores tipados del ciclo de vida del pool

Responsabilidades:
  - Distinguir "no inicializado" de "ya inicializado" en lugar de RuntimeError genéricos.
===============================================================================
"""


class DatabasePoolError(RuntimeError):
    """Base de errores de pool de base de datos."""


class PoolAlreadyInitializedError(DatabasePoolError):
    """Se intentó inicializar el pool más de una vez."""


class PoolNotInitializedError(DatabasePoolError):
    """Se intentó usar el pool sin init_pool()."""
