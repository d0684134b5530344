# hotel_admin/crosscutting/pagination.py
"""
===============================================================================
MÓDULO: Utilidades de paginación (page / limit)
===============================================================================

Objetivo
--------
Paginación simple y consistente para los listados de usuarios:
- normalización tolerante de `page` / `limit` (nunca falla)
- metadata total / totalPages para el frontend

-------------------------------------------------------------------------------
CRC (Component Card)
-------------------------------------------------------------------------------
Componente:
  normalize_pagination + PageParams + PaginationInfo

Responsabilidades:
  - Clampear page >= 1 y 1 <= limit <= max
  - Calcular offset y total_pages (ceil(total / limit))
===============================================================================
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Final

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_PAGE: Final[int] = 1
DEFAULT_LIMIT: Final[int] = 10
MAX_LIMIT: Final[int] = 100


@dataclass(frozen=True, slots=True)
class PageParams:
    """Parámetros ya normalizados."""

    page: int
    limit: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


class PaginationInfo(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    page: int
    limit: int
    total: int
    total_pages: int = Field(serialization_alias="totalPages")


def _to_int(value: object) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        return None


def normalize_pagination(
    page: object = None,
    limit: object = None,
    *,
    default_limit: int = DEFAULT_LIMIT,
    max_limit: int = MAX_LIMIT,
) -> PageParams:
    """
    Normaliza page/limit crudos (query string).

    Reglas:
      - ausente / no numérico => page=1, limit=default_limit
      - page < 1 => 1
      - limit < 1 => 1 ; limit > max_limit => max_limit
    """
    raw_page = _to_int(page)
    raw_limit = _to_int(limit)

    normalized_page = DEFAULT_PAGE if raw_page is None else max(1, raw_page)
    normalized_limit = (
        default_limit if raw_limit is None else min(max(1, raw_limit), max_limit)
    )
    return PageParams(page=normalized_page, limit=normalized_limit)


def total_pages(total: int, limit: int) -> int:
    """ceil(total / limit); 0 cuando no hay registros."""
    if total <= 0:
        return 0
    return math.ceil(total / max(1, limit))


def pagination_info(params: PageParams, total: int) -> PaginationInfo:
    return PaginationInfo(
        page=params.page,
        limit=params.limit,
        total=total,
        total_pages=total_pages(total, params.limit),
    )
