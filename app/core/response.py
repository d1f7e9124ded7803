"""Standardized JSON response envelope helpers.

Every successful response carries ``success: true``; errors are rendered by
:mod:`app.core.exceptions`.
"""


import math

from pydantic import BaseModel

from app.core.pagination import PageMeta


class Envelope(BaseModel):
    """Base envelope: `{ success, message }`"""

    success: bool = True
    message: str | None = None


class SyncEnvelope(Envelope):
    """Envelope for operations with a best-effort vehicle status side effect."""

    vehicle_status_sync_warning: str | None = None


def page_meta(total: int, page: int, limit: int) -> PageMeta:
    total_pages = math.ceil(total / limit) if limit else 1
    return PageMeta(
        page=page,
        limit=limit,
        total=total,
        total_pages=total_pages,
        has_next_page=page < total_pages,
        has_prev_page=page > 1,
    )
