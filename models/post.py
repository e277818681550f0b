import uuid
from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, Field


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Like(BaseModel):
    user: str


class Comment(BaseModel):
    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    text: str
    name: str
    avatar: Optional[str] = None
    user: str
    date: datetime = Field(default_factory=utcnow)


class Post(BaseModel):
    id: Optional[str] = None
    text: str
    name: str
    avatar: Optional[str] = None
    user: str
    likes: List[Like] = []
    comments: List[Comment] = []
    date: datetime = Field(default_factory=utcnow)

    def liked_by(self, user_id: str) -> bool:
        return any(like.user == user_id for like in self.likes)


class PostCreate(BaseModel):
    text: str


class CommentCreate(BaseModel):
    text: str


class Message(BaseModel):
    msg: str
