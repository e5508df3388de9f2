from pydantic import BaseModel, computed_field
from typing import Optional
from datetime import datetime

from ..status import Status


class PostBase(BaseModel):
    title: str
    content: str


class PostCreate(PostBase):
    pass


class PostUpdate(BaseModel):
    title: Optional[str] = None
    content: Optional[str] = None


class PostResponse(PostBase):
    id: int
    user_id: int
    status: int
    moderated_by: Optional[int] = None
    created_at: datetime

    @computed_field
    @property
    def status_label(self) -> str:
        return Status.coerce(self.status).label

    class Config:
        from_attributes = True


class CommentCreate(BaseModel):
    body: str


class CommentResponse(BaseModel):
    id: int
    post_id: int
    user_id: int
    body: str
    state: int
    moderator_id: Optional[int] = None
    created_at: datetime

    @computed_field
    @property
    def status_label(self) -> str:
        return Status.coerce(self.state).label

    class Config:
        from_attributes = True
