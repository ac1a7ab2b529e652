import pytest

from errors import NotFoundError, ValidationError
from services.friendship_service import FriendshipService
from services.suggestion_service import SuggestionService


def ids(suggestions):
    return [s.id for s in suggestions]


def test_same_domain_user_is_suggested_until_requested(db, make_user):
    a = make_user("a@uni.edu.pk")
    b = make_user("b@uni.edu.pk")

    assert b.id in ids(SuggestionService.suggest_users(db, a.id, 10))

    FriendshipService.request(db, a.id, b.id)

    assert b.id not in ids(SuggestionService.suggest_users(db, a.id, 10))
    assert a.id not in ids(SuggestionService.suggest_users(db, b.id, 10))


def test_only_exact_domain_matches(db, make_user):
    a = make_user("a@uni.edu.pk")
    same = make_user("same@UNI.edu.pk")
    make_user("other@other.edu.pk")
    make_user("sub@cs.uni.edu.pk")

    assert ids(SuggestionService.suggest_users(db, a.id, 10)) == [same.id]


def test_excludes_self_and_every_status(db, make_user):
    a = make_user("a@uni.edu.pk")
    pending = make_user("p@uni.edu.pk")
    accepted = make_user("ac@uni.edu.pk")
    rejected = make_user("r@uni.edu.pk")
    free = make_user("f@uni.edu.pk")

    FriendshipService.request(db, a.id, pending.id)
    f = FriendshipService.request(db, accepted.id, a.id)
    FriendshipService.respond(db, f.id, a.id, "accepted")
    f = FriendshipService.request(db, a.id, rejected.id)
    FriendshipService.respond(db, f.id, rejected.id, "rejected")

    suggestions = SuggestionService.suggest_users(db, a.id, 10)

    assert ids(suggestions) == [free.id]
    assert suggestions[0].friendship_status is None
    assert suggestions[0].is_requester is False


def test_growing_limit_extends_previous_page(db, make_user):
    a = make_user("a@uni.edu.pk")
    others = [make_user(f"user{i}@uni.edu.pk") for i in range(5)]

    short = ids(SuggestionService.suggest_users(db, a.id, 2))
    longer = ids(SuggestionService.suggest_users(db, a.id, 4))

    assert short == [u.id for u in others[:2]]
    assert longer[:2] == short
    assert len(longer) == 4


def test_include_connected_annotates_status(db, make_user):
    a = make_user("a@uni.edu.pk")
    b = make_user("b@uni.edu.pk", "Bee")
    FriendshipService.request(db, a.id, b.id)

    from_a = SuggestionService.suggest_users(db, a.id, 10, include_connected=True)
    from_b = SuggestionService.suggest_users(db, b.id, 10, include_connected=True)

    assert from_a[0].id == b.id
    assert from_a[0].name == "Bee"
    assert from_a[0].friendship_status == "pending"
    assert from_a[0].is_requester is True
    assert from_b[0].friendship_status == "pending"
    assert from_b[0].is_requester is False


def test_limit_must_be_positive(db, make_user):
    a = make_user("a@uni.edu.pk")
    with pytest.raises(ValidationError):
        SuggestionService.suggest_users(db, a.id, 0)


def test_unknown_user(db):
    with pytest.raises(NotFoundError):
        SuggestionService.suggest_users(db, 77, 10)
