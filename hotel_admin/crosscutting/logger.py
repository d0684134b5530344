"""
===============================================================================
MÓDULO: Logger estructurado (JSON) con contexto de request
===============================================================================

Componente:
  JSONFormatter + setup_logger()

Responsabilidades:
  - Formatear logs como JSON (una línea por evento)
  - Enriquecer con contexto (request_id, method, path)
  - Redactar secretos (senha, hashes, tokens) y enmascarar PII de huéspedes
    (email, cpf) en los campos `extra`

Colaboradores:
  - hotel_admin/context.py (ContextVars)
  - crosscutting/config.py (log_level / log_json)
===============================================================================
"""

from __future__ import annotations

import json
import logging
import os
import sys
import traceback
from datetime import datetime, timezone
from typing import Any

# Atributos estándar del LogRecord (no son "extra").
_RECORD_KEYS: frozenset[str] = frozenset(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__
) | {"message", "taskName"}

REDACTED = "***REDACTADO***"

SECRET_KEYS: frozenset[str] = frozenset(
    {
        "senha",
        "password",
        "password_hash",
        "secret",
        "token",
        "authorization",
        "jwt_secret",
        "database_url",
    }
)


def mask_email(value: str) -> str:
    """maria@hotel.com -> m***@hotel.com"""
    local, sep, domain = value.partition("@")
    if not sep:
        return REDACTED
    return f"{local[:1]}***@{domain}"


def mask_cpf(value: str) -> str:
    """52998224725 -> *********25"""
    return "*" * max(len(value) - 2, 0) + value[-2:]


_PII_MASKS = {"email": mask_email, "cpf": mask_cpf}


def scrub(value: Any, key: str | None = None) -> Any:
    """Aplica redacción/enmascarado por nombre de clave, recorriendo dicts y listas."""
    name = (key or "").lower()
    if name in SECRET_KEYS:
        return REDACTED
    if name in _PII_MASKS and isinstance(value, str):
        return _PII_MASKS[name](value)
    if isinstance(value, dict):
        return {str(k): scrub(v, str(k)) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [scrub(v, key) for v in value]
    return value


class JSONFormatter(logging.Formatter):
    """LogRecord -> JSON con contexto de request y `extra` ya saneado."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "line": record.lineno,
            "pid": os.getpid(),
        }

        from ..context import get_context_dict

        payload.update(get_context_dict())

        for k, v in record.__dict__.items():
            if k not in _RECORD_KEYS:
                payload[k] = scrub(v, k)

        if record.exc_info and record.exc_info[0]:
            payload["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "stacktrace": traceback.format_exception(*record.exc_info),
            }

        return json.dumps(
            payload, ensure_ascii=False, default=str, separators=(",", ":")
        )


def setup_logger(name: str = "hotel-admin") -> logging.Logger:
    """
    Crea y configura el logger global.

    - Evita duplicación de handlers en reimport
    - Respeta log_level / log_json desde Settings cuando estén disponibles
    """
    log = logging.getLogger(name)

    level = "INFO"
    use_json = True

    # Settings puede fallar al importar (env incompleto): el logger igual tiene que existir.
    try:
        from .config import get_settings

        s = get_settings()
        level = (s.log_level or "INFO").upper()
        use_json = bool(s.log_json)
    except Exception:
        pass

    log.setLevel(getattr(logging, level, logging.INFO))

    if not log.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(
            JSONFormatter()
            if use_json
            else logging.Formatter("%(levelname)s %(message)s")
        )
        log.addHandler(handler)

    return log


logger = setup_logger()
