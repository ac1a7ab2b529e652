from datetime import date, timedelta

import pytest
from pydantic import ValidationError as SchemaError

from errors import ConflictError, ValidationError
from schemas import ProfileCompletion
from services.user_service import UserService


def profile(**overrides) -> ProfileCompletion:
    data = {
        "name": "Ayesha Khan",
        "birthdate": "2001-04-09",
        "department": "Computer Science",
        "gender": "female",
        "marital_status": "single",
    }
    data.update(overrides)
    return ProfileCompletion(**data)


def test_register_and_authenticate(db):
    user = UserService.register(db, "  Ayesha@UNI.edu.pk ", "password123")

    assert user.email == "ayesha@uni.edu.pk"
    assert user.password != "password123"
    assert user.profile_completed is False
    assert UserService.authenticate(db, "ayesha@uni.edu.pk", "password123").id == user.id
    assert UserService.authenticate(db, "ayesha@uni.edu.pk", "wrong-password") is None
    assert UserService.authenticate(db, "nobody@uni.edu.pk", "password123") is None


@pytest.mark.parametrize("email", ["someone@gmail.com", "no-at-sign.edu.pk", "@uni.edu.pk"])
def test_register_rejects_non_institutional_email(db, email):
    with pytest.raises(ValidationError):
        UserService.register(db, email, "password123")


def test_register_rejects_short_password(db):
    with pytest.raises(ValidationError):
        UserService.register(db, "a@uni.edu.pk", "short")


def test_register_duplicate_email(db):
    UserService.register(db, "a@uni.edu.pk", "password123")
    with pytest.raises(ConflictError):
        UserService.register(db, "A@uni.edu.pk", "password456")


def test_complete_profile(db, make_user):
    user = make_user("a@uni.edu.pk")

    updated = UserService.complete_profile(db, user.id, profile(avatar="data:image/png;base64,AA"))

    assert updated.profile_completed is True
    assert updated.name == "Ayesha Khan"
    assert updated.department == "Computer Science"
    assert updated.avatar.startswith("https://placeholder.com/")


def test_profile_keeps_plain_avatar_url(db, make_user):
    user = make_user("a@uni.edu.pk")
    updated = UserService.complete_profile(db, user.id, profile(avatar="https://cdn.example/me.png"))
    assert updated.avatar == "https://cdn.example/me.png"


def test_profile_validation():
    tomorrow = (date.today() + timedelta(days=1)).isoformat()
    with pytest.raises(SchemaError):
        profile(birthdate=tomorrow)
    with pytest.raises(SchemaError):
        profile(name="A")
    with pytest.raises(SchemaError):
        profile(gender="unknown")
    with pytest.raises(SchemaError):
        profile(marital_status="complicated")
