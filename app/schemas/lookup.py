from pydantic import BaseModel

from app.schemas.common import OrmModel


class StatusOut(OrmModel):
    id: str
    name: str
    code: str | None = None
    color: str | None = None
    description: str | None = None
    is_active: bool


class StatusListResponse(BaseModel):
    success: bool = True
    statuses: list[StatusOut]
