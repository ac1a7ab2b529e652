from datetime import datetime, timezone
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, UniqueConstraint, CheckConstraint
from database import Base

PENDING = "pending"
ACCEPTED = "accepted"
REJECTED = "rejected"


class Friendship(Base):
    __tablename__ = "friends"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)  # requester
    friend_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)  # recipient
    status = Column(String(20), nullable=False, default=PENDING)  # pending/accepted/rejected
    # Canonical unordered pair: one row per pair whichever side asked first
    user_min = Column(Integer, nullable=False)
    user_max = Column(Integer, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))

    __table_args__ = (
        UniqueConstraint("user_min", "user_max", name="uq_friend_pair"),
        CheckConstraint("user_id <> friend_id", name="ck_friend_distinct"),
        CheckConstraint("user_min < user_max", name="ck_friend_min_lt_max"),
    )

    def __init__(self, **kwargs):
        user_id = kwargs.get("user_id")
        friend_id = kwargs.get("friend_id")
        if user_id is not None and friend_id is not None:
            kwargs.setdefault("user_min", min(user_id, friend_id))
            kwargs.setdefault("user_max", max(user_id, friend_id))
        super().__init__(**kwargs)

    def other_party(self, user_id: int) -> int:
        return self.friend_id if self.user_id == user_id else self.user_id

    def __repr__(self):
        return f"<Friendship(id={self.id}, {self.user_id}->{self.friend_id}, {self.status})>"
