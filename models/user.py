from typing import Optional

from pydantic import BaseModel


class User(BaseModel):
    """The authenticated caller, as resolved from a Firebase token"""
    user_id: str
    email: Optional[str] = None


class UserProfile(BaseModel):
    """Display fields copied onto posts and comments"""
    name: str
    avatar: Optional[str] = None
