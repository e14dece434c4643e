import os
import signal
from types import SimpleNamespace

import pytest

from signup_api.config import Settings
from signup_api.database import Database
from signup_api.errors import DatastoreUnavailableError
from signup_api.services.signups.check_database import check_database
from signup_api.services.signups.verify_database import verify_database


def test_pool_exhaustion_times_out(make_db):
    db = make_db(pool_max=1, connect_timeout_ms=200)
    try:
        with db.session():
            with pytest.raises(DatastoreUnavailableError) as exc:
                with db.session():
                    pass
        assert exc.value.status_code == 503
        assert exc.value.detail == "connection timeout"

        # conexiunea a revenit în pool
        with db.session():
            pass
    finally:
        db.dispose()


def test_connection_released_on_error(make_db):
    db = make_db(pool_max=1, connect_timeout_ms=200)
    try:
        with pytest.raises(RuntimeError):
            with db.session():
                raise RuntimeError("boom")
        db.ping()
    finally:
        db.dispose()


def test_has_table_and_create_all(make_db):
    db = make_db()
    try:
        assert not db.has_table("signups")
        assert verify_database(db) is False
        db.create_all()
        assert db.has_table("signups")
        assert verify_database(db) is True
    finally:
        db.dispose()


def test_check_database_connected(database):
    out = check_database(database)
    assert out.success is True
    assert out.database == "connected"


def test_check_database_disconnected(unreachable_database):
    out = check_database(unreachable_database)
    assert out.success is False
    assert out.database == "disconnected"
    assert verify_database(unreachable_database) is False


def test_unreachable_session_is_503(unreachable_database):
    with pytest.raises(DatastoreUnavailableError):
        with unreachable_database.session():
            pass


def test_fatal_hook_not_called_for_refused_connect(unreachable_database):
    calls = []
    db = Database(unreachable_database.url, on_fatal=calls.append)
    try:
        with pytest.raises(DatastoreUnavailableError):
            db.ping()
    finally:
        db.dispose()
    assert calls == []


def test_settings_build_postgres_url():
    cfg = Settings(database_url="", db_host="db", db_port=5433, db_name="signups", db_user="app", db_password="secret")
    assert cfg.sqlalchemy_url == "postgresql+psycopg://app:secret@db:5433/signups"


def test_database_url_has_priority():
    cfg = Settings(database_url="sqlite:///./x.db", db_host="db")
    assert cfg.sqlalchemy_url == "sqlite:///./x.db"


def test_cors_origin_list():
    cfg = Settings(cors_origins="https://a.ro, https://b.ro,")
    assert cfg.cors_origin_list == ["https://a.ro", "https://b.ro"]


def _disconnect_context(**overrides):
    ctx = dict(
        is_disconnect=True,
        connection=object(),
        is_pre_ping=False,
        original_exception=RuntimeError("server closed the connection unexpectedly"),
    )
    ctx.update(overrides)
    return SimpleNamespace(**ctx)


def test_fatal_hook_called_for_dropped_connection(make_db):
    calls = []
    db = make_db(on_fatal=calls.append)
    try:
        ctx = _disconnect_context()
        db._handle_error(ctx)
        assert calls == [ctx.original_exception]

        # connect refuzat / pre-ping / eroare obișnuită => nu e fatal
        db._handle_error(_disconnect_context(connection=None))
        db._handle_error(_disconnect_context(is_pre_ping=True))
        db._handle_error(_disconnect_context(is_disconnect=False))
        assert len(calls) == 1
    finally:
        db.dispose()


@pytest.mark.parametrize("exit_on_error, expected", [(True, [signal.SIGTERM]), (False, [])])
def test_pool_fatal_handler_sigterm(monkeypatch, exit_on_error, expected):
    from signup_api import main

    sent = []
    monkeypatch.setattr(main.os, "kill", lambda pid, sig: sent.append((pid, sig)))

    handler = main._pool_fatal_handler(Settings(db_exit_on_pool_error=exit_on_error))
    handler(RuntimeError("connection lost"))

    assert [sig for _, sig in sent] == expected
    assert all(pid == os.getpid() for pid, _ in sent)
