from pydantic import BaseModel
from typing import Optional


class StatusLabel(BaseModel):
    code: int
    name: str
    label: str


class ModerationResult(BaseModel):
    """Outcome of a moderation request on one record."""
    id: int
    status: int
    status_label: str
    moderated_by: Optional[int] = None
