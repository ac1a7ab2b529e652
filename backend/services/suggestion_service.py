"""
suggestion_service.py — People you may know
Candidates share the current user's email domain. Users already on a
friendship row with the current user (any status, either direction) are left out.
"""

import logging

from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from config import MAX_SUGGESTION_LIMIT
from errors import NotFoundError, ValidationError
from models.friendship import Friendship
from models.user import User
from schemas import SuggestionView
from services.projection import display_name

logger = logging.getLogger(__name__)


class SuggestionService:
    @staticmethod
    def suggest_users(
        db: Session,
        current_user_id: int,
        limit: int = 10,
        include_connected: bool = False,
    ) -> list[SuggestionView]:
        if limit < 1:
            raise ValidationError("Limit must be at least 1")
        limit = min(limit, MAX_SUGGESTION_LIMIT)

        me = db.get(User, current_user_id)
        if me is None:
            raise NotFoundError("User not found")
        domain = me.domain.lower()
        if not domain:
            return []

        # "%" and "_" in the domain must match literally
        escaped = domain.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
        query = db.query(User).filter(
            User.email.ilike(f"%@{escaped}", escape="\\"),
            User.id != current_user_id,
        )
        if not include_connected:
            requested = select(Friendship.friend_id).where(Friendship.user_id == current_user_id)
            requesters = select(Friendship.user_id).where(Friendship.friend_id == current_user_id)
            query = query.filter(User.id.notin_(requested), User.id.notin_(requesters))

        # Stable id order keeps "show more" (a larger limit) a strict extension
        candidates = query.order_by(User.id.asc()).limit(limit).all()

        friendships = {}
        if include_connected and candidates:
            rows = db.query(Friendship).filter(
                or_(Friendship.user_id == current_user_id, Friendship.friend_id == current_user_id)
            ).all()
            friendships = {f.other_party(current_user_id): f for f in rows}

        suggestions = []
        for u in candidates:
            f = friendships.get(u.id)
            suggestions.append(SuggestionView(
                id=u.id,
                name=display_name(u),
                avatar=u.avatar,
                department=u.department,
                bio=u.bio,
                friendship_status=f.status if f else None,
                is_requester=bool(f and f.user_id == current_user_id),
            ))
        return suggestions
