"""
schemas.py — Typed request bodies and response projections.
Services build these from ORM rows so routes never hand out raw rows.
"""
from datetime import date, datetime
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, field_validator


# ── Projections ───────────────────────────────────────────────────
class AuthorOut(BaseModel):
    id: int
    name: str
    avatar: str


class PublicProfile(BaseModel):
    id: int
    name: str
    avatar: Optional[str] = None
    department: Optional[str] = None


class UserOut(BaseModel):
    id: int
    email: str
    name: Optional[str] = None
    birthdate: Optional[str] = None
    department: Optional[str] = None
    gender: Optional[str] = None
    marital_status: Optional[str] = None
    bio: Optional[str] = None
    avatar: Optional[str] = None
    profile_completed: bool = False

    model_config = {"from_attributes": True}


class PostView(BaseModel):
    id: int
    user_id: int
    content: str
    images: List[str] = []
    likes_count: int = 0
    comments_count: int = 0
    created_at: datetime
    author: Optional[AuthorOut] = None


class CommentView(BaseModel):
    id: int
    user_id: int
    post_id: int
    content: str
    created_at: datetime
    author: Optional[AuthorOut] = None


class CommentResult(BaseModel):
    comment: CommentView
    comments_count: int


class LikeResult(BaseModel):
    likes_count: int
    has_liked: bool


class LikeStatus(BaseModel):
    count: int
    has_liked: bool


class FriendshipOut(BaseModel):
    id: int
    user_id: int
    friend_id: int
    status: str
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class FriendshipView(FriendshipOut):
    friend: Optional[PublicProfile] = None


class SuggestionView(BaseModel):
    id: int
    name: str
    avatar: Optional[str] = None
    department: Optional[str] = None
    bio: Optional[str] = None
    friendship_status: Optional[str] = None
    is_requester: bool = False


# ── Request bodies ────────────────────────────────────────────────
class RegisterRequest(BaseModel):
    email: str
    password: str
    name: Optional[str] = None


class LoginRequest(BaseModel):
    email: str
    password: str


class ProfileCompletion(BaseModel):
    name: str
    birthdate: str
    department: str
    gender: Literal["male", "female", "other"]
    marital_status: Literal["single", "married"]
    bio: Optional[str] = None
    avatar: Optional[str] = None

    @field_validator("name")
    @classmethod
    def name_long_enough(cls, v: str) -> str:
        v = v.strip()
        if len(v) < 2:
            raise ValueError("Full name must be at least 2 characters")
        return v

    @field_validator("department")
    @classmethod
    def department_present(cls, v: str) -> str:
        v = v.strip()
        if len(v) < 2:
            raise ValueError("Department is required")
        return v

    @field_validator("birthdate")
    @classmethod
    def birthdate_in_past(cls, v: str) -> str:
        try:
            born = date.fromisoformat(v.strip()[:10])
        except ValueError:
            raise ValueError("Birthdate must be a date in YYYY-MM-DD format")
        if born >= date.today():
            raise ValueError("Birthdate must be in the past")
        return born.isoformat()


class PostCreate(BaseModel):
    content: Optional[str] = ""
    images: Optional[Union[List[str], str]] = None


class CommentCreate(BaseModel):
    content: str


class FriendRequestBody(BaseModel):
    friend_id: int


class FriendResponseBody(BaseModel):
    status: str
