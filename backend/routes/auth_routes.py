# ---------- routes/auth_routes.py ----------
"""
Auth routes: registration with an institutional email, login, current user.
Tokens are stateless JWTs; the client discards them to log out.
"""
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from auth import create_token, get_current_user
from database import get_db
from schemas import LoginRequest, RegisterRequest, UserOut
from services.user_service import UserService

router = APIRouter(prefix="/api/v1/auth", tags=["Auth"])


def _session_payload(user) -> dict:
    token = create_token(user.id, {"email": user.email})
    return {
        "status": "success",
        "data": {"token": token, "user": UserOut.model_validate(user).model_dump()},
    }


@router.post("/register", status_code=201)
def register(body: RegisterRequest, db: Session = Depends(get_db)):
    """Create an account and log it in."""
    user = UserService.register(db, body.email, body.password, body.name)
    return _session_payload(user)


@router.post("/login")
def login(body: LoginRequest, db: Session = Depends(get_db)):
    user = UserService.authenticate(db, body.email, body.password)
    if user is None:
        raise HTTPException(status_code=401, detail="Invalid email or password")
    return _session_payload(user)


@router.get("/me", response_model=UserOut)
def me(db: Session = Depends(get_db), user_id: int = Depends(get_current_user)):
    """Return the current user's profile from the token."""
    return UserService.get_user(db, user_id)


@router.post("/logout")
async def logout(user_id: int = Depends(get_current_user)):
    """Logout — client should discard the token."""
    return {"status": "success", "data": {"message": "Logged out"}}
