"""
projection.py — Public views of a user row.
Shared by the feed, comment list, friend list and suggestions.
"""

from config import DEFAULT_AVATAR
from models.user import User
from schemas import AuthorOut, PublicProfile


def display_name(user: User) -> str:
    """Name when set, else the local part of the email, else 'User'."""
    if user.name and user.name.strip():
        return user.name
    if user.email and "@" in user.email:
        local = user.email.split("@", 1)[0]
        if local:
            return local
    return "User"


def author_of(user: User | None) -> AuthorOut | None:
    if user is None:
        return None
    return AuthorOut(id=user.id, name=display_name(user), avatar=user.avatar or DEFAULT_AVATAR)


def public_profile(user: User | None) -> PublicProfile | None:
    if user is None:
        return None
    return PublicProfile(
        id=user.id,
        name=display_name(user),
        avatar=user.avatar,
        department=user.department,
    )
