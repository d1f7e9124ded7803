from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from app.domain.audit import AuditTrail


class AuditRepository:
    """Append-only writer for AuditTrail rows (never updated or deleted)."""

    def __init__(self, session: AsyncSession, user_id: str):
        self._session = session
        self._user_id = user_id

    def record(
        self,
        action: str,
        entity_type: str,
        entity_id: str | None,
        *,
        old_value: Any = None,
        new_value: Any = None,
        description: str | None = None,
    ) -> AuditTrail:
        row = AuditTrail(
            user_id=self._user_id,
            action=action,
            entity_type=entity_type,
            entity_id=entity_id,
            old_value=old_value,
            new_value=new_value,
            description=description,
        )
        self._session.add(row)
        return row
