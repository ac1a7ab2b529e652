from typing import List

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from auth import get_current_user
from database import get_db
from schemas import CommentCreate, CommentResult, CommentView, LikeResult, LikeStatus, PostCreate, PostView
from services.counter_service import CounterService
from services.feed_service import FeedService

router = APIRouter(prefix="/api/v1/posts", tags=["Posts"])


async def optional_user(request: Request) -> int | None:
    """Like get_current_user, but anonymous callers get None instead of a 401."""
    if not request.headers.get("Authorization"):
        return None
    return await get_current_user(request)


@router.get("", response_model=List[PostView])
def list_posts(db: Session = Depends(get_db)):
    """The feed, newest first."""
    return FeedService.list_posts(db)


@router.post("", response_model=PostView, status_code=201)
def create_post(
    body: PostCreate,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user),
):
    return FeedService.create_post(db, user_id, body.content, body.images)


@router.get("/{post_id}", response_model=PostView)
def get_post(post_id: int, db: Session = Depends(get_db)):
    return FeedService.get_post(db, post_id)


@router.delete("/{post_id}")
def delete_post(post_id: int, db: Session = Depends(get_db), user_id: int = Depends(get_current_user)):
    FeedService.delete_post(db, post_id, user_id)
    return {"success": True}


@router.post("/{post_id}/like", response_model=LikeResult)
def toggle_like(post_id: int, db: Session = Depends(get_db), user_id: int = Depends(get_current_user)):
    return CounterService.toggle_like(db, user_id, post_id)


@router.get("/{post_id}/likes", response_model=LikeStatus)
def like_status(post_id: int, db: Session = Depends(get_db), user_id: int | None = Depends(optional_user)):
    return CounterService.like_status(db, post_id, user_id)


@router.get("/{post_id}/comments", response_model=List[CommentView])
def list_comments(post_id: int, db: Session = Depends(get_db)):
    return FeedService.list_comments(db, post_id)


@router.post("/{post_id}/comments", response_model=CommentResult, status_code=201)
def add_comment(
    post_id: int,
    body: CommentCreate,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user),
):
    return CounterService.add_comment(db, user_id, post_id, body.content)


@router.get("/{post_id}/comments/count")
def comment_count(post_id: int, db: Session = Depends(get_db)):
    return {"count": FeedService.count_comments(db, post_id)}
