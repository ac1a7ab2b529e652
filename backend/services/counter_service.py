"""
counter_service.py — Counter Maintainer
Keeps posts.likes_count and posts.comments_count in step with the like and
comment rows. Each mutation and its counter update commit together.
"""

import logging

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from errors import ConflictError, NotFoundError, ValidationError
from models.comment import Comment
from models.like import Like
from models.post import Post
from models.user import User
from schemas import CommentResult, LikeResult, LikeStatus
from services.feed_service import to_comment_view
from services.projection import author_of

logger = logging.getLogger(__name__)


def _lock_post(db: Session, post_id: int) -> Post:
    """Load the post with a row lock so writers on the same post queue up."""
    post = db.query(Post).filter(Post.id == post_id).with_for_update().first()
    if post is None:
        db.rollback()
        raise NotFoundError("Post not found")
    return post


def _require_user(db: Session, user_id: int) -> User:
    user = db.get(User, user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user


def _find_like(db: Session, user_id: int, post_id: int) -> Like | None:
    return db.query(Like).filter_by(user_id=user_id, post_id=post_id).first()


class CounterService:
    @staticmethod
    def count_likes(db: Session, post_id: int) -> int:
        return db.query(func.count(Like.id)).filter(Like.post_id == post_id).scalar() or 0

    @staticmethod
    def toggle_like(db: Session, user_id: int, post_id: int) -> LikeResult:
        _require_user(db, user_id)
        post = _lock_post(db, post_id)

        existing = _find_like(db, user_id, post_id)
        try:
            if existing:
                db.delete(existing)
            else:
                db.add(Like(user_id=user_id, post_id=post_id))
            db.flush()

            # Recount from the rows instead of trusting the stored counter
            post.likes_count = CounterService.count_likes(db, post_id)
            db.commit()
        except IntegrityError:
            db.rollback()
            raise ConflictError("Like already recorded")

        logger.info(f"User {user_id} {'unliked' if existing else 'liked'} post {post_id}")
        return LikeResult(likes_count=post.likes_count, has_liked=existing is None)

    @staticmethod
    def like_status(db: Session, post_id: int, user_id: int | None = None) -> LikeStatus:
        has_liked = False
        if user_id is not None:
            has_liked = db.query(Like.id).filter_by(user_id=user_id, post_id=post_id).first() is not None
        return LikeStatus(count=CounterService.count_likes(db, post_id), has_liked=has_liked)

    @staticmethod
    def add_comment(db: Session, user_id: int, post_id: int, content: str | None) -> CommentResult:
        content = (content or "").strip()
        if not content:
            raise ValidationError("Comment content required")

        author = _require_user(db, user_id)
        post = _lock_post(db, post_id)
        comment = Comment(user_id=user_id, post_id=post_id, content=content)
        db.add(comment)
        # Incremented in SQL; the attribute is expired on flush and reloaded below
        post.comments_count = Post.comments_count + 1
        db.flush()
        comments_count = post.comments_count
        db.commit()

        logger.info(f"Comment {comment.id} added to post {post_id} by user {user_id}")
        return CommentResult(
            comment=to_comment_view(comment, author_of(author)),
            comments_count=comments_count,
        )
