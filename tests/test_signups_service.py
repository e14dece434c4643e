from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timedelta, timezone

import pytest

from signup_api.errors import ConflictError, ValidationError
from signup_api.models import Signup
from signup_api.schemas import SignupIn
from signup_api.services.signups import create_signup as create_signup_module
from signup_api.services.signups.create_signup import create_signup
from signup_api.services.signups.list_signups import list_signups


def _count(database) -> int:
    with database.session() as db:
        return db.query(Signup).count()


def test_distinct_emails_get_unique_ids(database):
    ids = []
    with database.session() as db:
        for i in range(5):
            s = create_signup(db, data=SignupIn(name=f"User {i}", email=f"user{i}@example.com"))
            ids.append(s.id)
    assert len(set(ids)) == 5
    assert _count(database) == 5


def test_stores_trimmed_values_and_keeps_role_case(database):
    with database.session() as db:
        s = create_signup(db, data=SignupIn(name="  Ana Pop ", email="Ana@Example.com", role="DRIVER"))
    assert s.name == "Ana Pop"
    assert s.email == "Ana@Example.com"
    assert s.role == "DRIVER"
    assert s.created_at is not None


@pytest.mark.parametrize("role", [None, ""])
def test_absent_role_is_stored_as_null(database, role):
    with database.session() as db:
        s = create_signup(db, data=SignupIn(name="Ana", email="ana@example.com", role=role))
    assert s.role is None


def test_case_only_duplicate_is_conflict(database):
    with database.session() as db:
        create_signup(db, data=SignupIn(name="Ana", email="ana@example.com"))
        with pytest.raises(ConflictError) as exc:
            create_signup(db, data=SignupIn(name="Ana 2", email="ANA@Example.COM"))
    assert exc.value.status_code == 409
    assert exc.value.detail == "email already registered"
    assert _count(database) == 1


def test_validation_failure_writes_nothing(database):
    with database.session() as db:
        with pytest.raises(ValidationError):
            create_signup(db, data=SignupIn(name="", email="ana@example.com"))
        with pytest.raises(ValidationError):
            create_signup(db, data=SignupIn(name="Ana", email="ana@example.com", role="pilot"))
    assert _count(database) == 0


def test_insert_race_is_translated_to_conflict(database, monkeypatch):
    with database.session() as db:
        create_signup(db, data=SignupIn(name="Ana", email="ana@example.com"))

    # al doilea request "trece" de pre-check ca într-un race real
    monkeypatch.setattr(create_signup_module, "find_signup_id_by_email", lambda db, email: None)

    with database.session() as db:
        with pytest.raises(ConflictError):
            create_signup(db, data=SignupIn(name="Ana", email="Ana@example.com"))
    assert _count(database) == 1


def test_concurrent_identical_emails_only_one_wins(database):
    def attempt(i):
        with database.session() as db:
            try:
                create_signup(db, data=SignupIn(name=f"Racer {i}", email="race@example.com"))
                return "created"
            except ConflictError:
                return "conflict"

    with ThreadPoolExecutor(max_workers=4) as pool:
        results = list(pool.map(attempt, range(4)))

    assert results.count("created") == 1
    assert results.count("conflict") == 3
    assert _count(database) == 1


def test_list_is_most_recent_first(database):
    t1 = datetime(2026, 1, 1, 10, 0, 0, tzinfo=timezone.utc)
    t2 = t1 + timedelta(seconds=1)
    t3 = t1 + timedelta(seconds=2)

    with database.session() as db:
        # inserate în altă ordine decât cea cronologică
        db.add(Signup(name="B", email="b@example.com", created_at=t2))
        db.add(Signup(name="C", email="c@example.com", created_at=t3))
        db.add(Signup(name="A", email="a@example.com", created_at=t1))
        db.commit()

        emails = [s.email for s in list_signups(db)]

    assert emails == ["c@example.com", "b@example.com", "a@example.com"]


def test_list_empty(database):
    with database.session() as db:
        assert list_signups(db) == []
