from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from auth import get_current_user
from database import get_db
from schemas import FriendRequestBody, FriendResponseBody, FriendshipOut, FriendshipView
from services.friendship_service import FriendshipService

router = APIRouter(prefix="/api/v1/friends", tags=["Friends"])


@router.get("", response_model=List[FriendshipView])
def list_friendships(db: Session = Depends(get_db), current_user_id: int = Depends(get_current_user)):
    """Every friendship row involving the current user, in any status."""
    return FriendshipService.list_for_user(db, current_user_id)


@router.get("/accepted", response_model=List[FriendshipView])
def list_friends(db: Session = Depends(get_db), current_user_id: int = Depends(get_current_user)):
    return FriendshipService.list_friends(db, current_user_id)


@router.get("/pending", response_model=List[FriendshipView])
def list_pending(db: Session = Depends(get_db), current_user_id: int = Depends(get_current_user)):
    """Requests waiting on the current user's answer."""
    return FriendshipService.list_pending_requests(db, current_user_id)


@router.post("/request", response_model=FriendshipOut, status_code=201)
def send_request(
    body: FriendRequestBody,
    db: Session = Depends(get_db),
    current_user_id: int = Depends(get_current_user),
):
    return FriendshipService.request(db, current_user_id, body.friend_id)


@router.patch("/{friendship_id}", response_model=FriendshipOut)
def respond(
    friendship_id: int,
    body: FriendResponseBody,
    db: Session = Depends(get_db),
    current_user_id: int = Depends(get_current_user),
):
    return FriendshipService.respond(db, friendship_id, current_user_id, body.status)
