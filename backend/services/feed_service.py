"""
feed_service.py — Feed Assembler
Posts and comments joined with a minimal author projection, newest first.
Also owns post creation and author-only deletion.
"""

import logging

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from errors import ForbiddenError, NotFoundError, ValidationError
from models.comment import Comment
from models.post import Post
from models.user import User
from schemas import AuthorOut, CommentView, PostView
from services.media_service import parse_images, prepare_images, serialize_images
from services.projection import author_of

logger = logging.getLogger(__name__)


def _authors(db: Session, user_ids) -> dict[int, AuthorOut | None]:
    """One lookup per distinct author; a failed lookup only blanks that author."""
    authors = {}
    for uid in sorted(set(user_ids)):
        try:
            # Savepoint per lookup: a failure must not abort the surrounding transaction
            with db.begin_nested():
                authors[uid] = author_of(db.get(User, uid))
        except SQLAlchemyError as e:
            logger.warning(f"Author lookup failed for user {uid}: {e}")
            authors[uid] = None
    return authors


def to_post_view(post: Post, author: AuthorOut | None) -> PostView:
    return PostView(
        id=post.id,
        user_id=post.user_id,
        content=post.content or "",
        images=parse_images(post.images),
        likes_count=post.likes_count or 0,
        comments_count=post.comments_count or 0,
        created_at=post.created_at,
        author=author,
    )


def to_comment_view(comment: Comment, author: AuthorOut | None) -> CommentView:
    return CommentView(
        id=comment.id,
        user_id=comment.user_id,
        post_id=comment.post_id,
        content=comment.content,
        created_at=comment.created_at,
        author=author,
    )


class FeedService:
    @staticmethod
    def create_post(db: Session, author_id: int, content: str | None, images=None) -> PostView:
        content = (content or "").strip()
        prepared = prepare_images(images)
        if not content and not prepared:
            raise ValidationError("Post must have content or images")

        post = Post(user_id=author_id, content=content, images=serialize_images(prepared))
        db.add(post)
        db.commit()
        db.refresh(post)
        logger.info(f"Post {post.id} created by user {author_id} with {len(prepared)} image(s)")
        return to_post_view(post, _authors(db, [author_id]).get(author_id))

    @staticmethod
    def get_post(db: Session, post_id: int) -> PostView:
        post = db.get(Post, post_id)
        if post is None:
            raise NotFoundError("Post not found")
        return to_post_view(post, _authors(db, [post.user_id]).get(post.user_id))

    @staticmethod
    def delete_post(db: Session, post_id: int, requester_id: int):
        post = db.get(Post, post_id)
        if post is None:
            raise NotFoundError("Post not found")
        if post.user_id != requester_id:
            raise ForbiddenError("Not authorized")

        # Likes and comments go with the post (delete-orphan cascade)
        db.delete(post)
        db.commit()
        logger.info(f"Post {post_id} deleted by user {requester_id}")

    @staticmethod
    def _list(db: Session, query) -> list[PostView]:
        posts = query.order_by(Post.created_at.desc(), Post.id.desc()).all()
        authors = _authors(db, [p.user_id for p in posts])
        return [to_post_view(p, authors.get(p.user_id)) for p in posts]

    @staticmethod
    def list_posts(db: Session) -> list[PostView]:
        return FeedService._list(db, db.query(Post))

    @staticmethod
    def list_posts_by_user(db: Session, user_id: int) -> list[PostView]:
        return FeedService._list(db, db.query(Post).filter(Post.user_id == user_id))

    @staticmethod
    def list_comments(db: Session, post_id: int) -> list[CommentView]:
        comments = (
            db.query(Comment)
            .filter(Comment.post_id == post_id)
            .order_by(Comment.created_at.desc(), Comment.id.desc())
            .all()
        )
        authors = _authors(db, [c.user_id for c in comments])
        return [to_comment_view(c, authors.get(c.user_id)) for c in comments]

    @staticmethod
    def count_comments(db: Session, post_id: int) -> int:
        return db.query(func.count(Comment.id)).filter(Comment.post_id == post_id).scalar() or 0

