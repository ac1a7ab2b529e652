from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from auth import get_current_user
from database import get_db
from schemas import PostView, ProfileCompletion, SuggestionView, UserOut
from services.feed_service import FeedService
from services.suggestion_service import SuggestionService
from services.user_service import UserService

router = APIRouter(prefix="/api/v1/users", tags=["Users"])


@router.post("/complete-profile", response_model=UserOut)
def complete_profile(
    body: ProfileCompletion,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user),
):
    return UserService.complete_profile(db, user_id, body)


@router.get("/suggestions", response_model=List[SuggestionView])
def suggestions(
    limit: int = Query(default=10),
    include_connected: bool = Query(default=False),
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user),
):
    """Same-domain users without an existing friendship row, id ascending."""
    return SuggestionService.suggest_users(db, user_id, limit, include_connected)


@router.get("/{target_id}/posts", response_model=List[PostView])
def posts_by_user(target_id: int, db: Session = Depends(get_db)):
    return FeedService.list_posts_by_user(db, target_id)
