"""
friendship_service.py — Relationship Store
One friendship row per unordered pair of users. The requester creates it as
pending; only the recipient may move it to accepted or rejected, once.
"""

import logging

from sqlalchemy import or_, and_, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from errors import ConflictError, NotFoundError, ValidationError
from models.friendship import Friendship, PENDING, ACCEPTED, REJECTED
from models.user import User
from schemas import FriendshipOut, FriendshipView
from services.projection import public_profile

logger = logging.getLogger(__name__)

DECISIONS = (ACCEPTED, REJECTED)


def _between(a: int, b: int):
    return or_(
        and_(Friendship.user_id == a, Friendship.friend_id == b),
        and_(Friendship.user_id == b, Friendship.friend_id == a),
    )


def _involving(user_id: int):
    return or_(Friendship.user_id == user_id, Friendship.friend_id == user_id)


class FriendshipService:
    @staticmethod
    def find_between(db: Session, a: int, b: int) -> Friendship | None:
        """Look the pair up in both directions."""
        return db.query(Friendship).filter(_between(a, b)).first()

    @staticmethod
    def request(db: Session, requester_id: int, recipient_id: int) -> FriendshipOut:
        if requester_id == recipient_id:
            raise ValidationError("You cannot send a friend request to yourself")
        if db.get(User, recipient_id) is None:
            raise NotFoundError("User not found")

        existing = FriendshipService.find_between(db, requester_id, recipient_id)
        if existing:
            raise ConflictError("Existing relationship", status=existing.status)

        friendship = Friendship(user_id=requester_id, friend_id=recipient_id, status=PENDING)
        db.add(friendship)
        try:
            db.commit()
        except IntegrityError:
            # Another request for the same pair committed first
            db.rollback()
            existing = FriendshipService.find_between(db, requester_id, recipient_id)
            raise ConflictError(
                "Existing relationship",
                status=existing.status if existing else None,
            )

        db.refresh(friendship)
        logger.info(f"Friend request {friendship.id}: {requester_id} -> {recipient_id}")
        return FriendshipOut.model_validate(friendship)

    @staticmethod
    def respond(db: Session, friendship_id: int, responder_id: int, decision: str) -> FriendshipOut:
        if decision not in DECISIONS:
            raise ValidationError("Invalid status")

        result = db.execute(
            update(Friendship)
            .where(
                Friendship.id == friendship_id,
                Friendship.friend_id == responder_id,
                Friendship.status == PENDING,
            )
            .values(status=decision)
        )
        if result.rowcount != 1:
            db.rollback()
            raise NotFoundError("Request not found")
        db.commit()

        friendship = db.get(Friendship, friendship_id, populate_existing=True)
        logger.info(f"Friend request {friendship_id} {decision} by {responder_id}")
        return FriendshipOut.model_validate(friendship)

    @staticmethod
    def _annotate(db: Session, user_id: int, rows: list[Friendship]) -> list[FriendshipView]:
        other_ids = {f.other_party(user_id) for f in rows}
        users = {}
        if other_ids:
            users = {u.id: u for u in db.query(User).filter(User.id.in_(other_ids)).all()}

        return [
            FriendshipView(
                **FriendshipOut.model_validate(f).model_dump(),
                friend=public_profile(users.get(f.other_party(user_id))),
            )
            for f in rows
        ]

    @staticmethod
    def list_for_user(db: Session, user_id: int) -> list[FriendshipView]:
        """Every row the user is on either side of, with the other party's profile."""
        rows = db.query(Friendship).filter(_involving(user_id)).order_by(Friendship.id.asc()).all()
        return FriendshipService._annotate(db, user_id, rows)

    @staticmethod
    def list_friends(db: Session, user_id: int) -> list[FriendshipView]:
        rows = (
            db.query(Friendship)
            .filter(_involving(user_id), Friendship.status == ACCEPTED)
            .order_by(Friendship.id.asc())
            .all()
        )
        return FriendshipService._annotate(db, user_id, rows)

    @staticmethod
    def list_pending_requests(db: Session, user_id: int) -> list[FriendshipView]:
        """Pending requests addressed to the user."""
        rows = (
            db.query(Friendship)
            .filter(Friendship.friend_id == user_id, Friendship.status == PENDING)
            .order_by(Friendship.id.asc())
            .all()
        )
        return FriendshipService._annotate(db, user_id, rows)
