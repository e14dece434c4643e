import pytest
from fastapi.testclient import TestClient

from signup_api.config import Settings
from signup_api.database import Database
from signup_api.main import create_app


def make_database(tmp_path, name="signups.db", **kwargs) -> Database:
    kwargs.setdefault("pool_max", 5)
    kwargs.setdefault("connect_timeout_ms", 1000)
    return Database(f"sqlite:///{tmp_path / name}", **kwargs)


def make_client(database: Database) -> TestClient:
    cfg = Settings(database_url=database.url, db_auto_create=False, debug=False)
    return TestClient(create_app(cfg, database=database))


@pytest.fixture
def database(tmp_path):
    db = make_database(tmp_path)
    db.create_all()
    yield db
    db.dispose()


@pytest.fixture
def client(database):
    with make_client(database) as c:
        yield c


@pytest.fixture
def unreachable_database(tmp_path):
    # directorul nu există => sqlite nu poate deschide fișierul
    db = Database(f"sqlite:///{tmp_path / 'missing' / 'nope.db'}", pool_max=2, connect_timeout_ms=200)
    yield db
    db.dispose()


@pytest.fixture
def make_db(tmp_path):
    def factory(**kwargs) -> Database:
        return make_database(tmp_path, **kwargs)

    return factory


@pytest.fixture
def client_for():
    return make_client
