"""
user_service.py — Accounts and profiles
Registration is limited to institutional email suffixes. Profile completion
fills in the remaining fields and flips profile_completed.
"""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from auth import hash_password, verify_password
from config import ALLOWED_EMAIL_SUFFIXES, MIN_PASSWORD_LENGTH
from errors import ConflictError, NotFoundError, ValidationError
from models.user import User
from schemas import ProfileCompletion
from services.media_service import upload_image

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


def is_institutional(email: str) -> bool:
    return any(email.endswith(suffix) for suffix in ALLOWED_EMAIL_SUFFIXES)


class UserService:
    @staticmethod
    def get_user(db: Session, user_id: int) -> User:
        user = db.get(User, user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    @staticmethod
    def get_by_email(db: Session, email: str) -> User | None:
        return db.query(User).filter(User.email == normalize_email(email)).first()

    @staticmethod
    def register(db: Session, email: str, password: str, name: str | None = None) -> User:
        email = normalize_email(email)
        local, _, domain = email.partition("@")
        if not local or not domain:
            raise ValidationError("Invalid email address")
        if not is_institutional(email):
            allowed = ", ".join(ALLOWED_EMAIL_SUFFIXES)
            raise ValidationError(f"Only {allowed} email addresses are allowed")
        if not password or len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
        if UserService.get_by_email(db, email):
            raise ConflictError("Email already registered")

        user = User(
            email=email,
            password=hash_password(password),
            name=(name or "").strip() or None,
        )
        db.add(user)
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            raise ConflictError("Email already registered")
        db.refresh(user)
        logger.info(f"Registered user {user.id} ({domain})")
        return user

    @staticmethod
    def authenticate(db: Session, email: str, password: str) -> User | None:
        user = UserService.get_by_email(db, email)
        if user is None or not verify_password(password, user.password):
            return None
        return user

    @staticmethod
    def complete_profile(db: Session, user_id: int, profile: ProfileCompletion) -> User:
        user = UserService.get_user(db, user_id)

        avatar = profile.avatar
        if avatar and avatar.startswith("data:image"):
            try:
                avatar = upload_image(avatar)
            except ValidationError as e:
                # Keep the rest of the profile; the avatar is optional
                logger.warning(f"Avatar upload failed for user {user_id}: {e.message}")
                avatar = None

        user.name = profile.name
        user.birthdate = profile.birthdate
        user.department = profile.department
        user.gender = profile.gender
        user.marital_status = profile.marital_status
        user.bio = profile.bio
        user.avatar = avatar
        user.profile_completed = True
        db.commit()
        db.refresh(user)
        logger.info(f"Profile completed for user {user_id}")
        return user
