import pytest

from memdb.diag import disable_log
from memdb.store import MemDB


@pytest.fixture()
def db():
    return MemDB()


@pytest.fixture()
def users(db):
    db.insert("users", [
        {"id": 1, "name": "alice", "age": 30, "role": "admin"},
        {"id": 2, "name": "bob", "age": 25, "role": "user"},
        {"id": 3, "name": "carol", "age": 30, "role": "user"},
    ])
    return db.use("users")


@pytest.fixture(autouse=True)
def _no_file_log():
    yield
    disable_log()


@pytest.fixture()
def clean_env(monkeypatch):
    for key in ("MEMDB_PRIMARY_KEY", "MEMDB_EQUALITY", "MEMDB_UNIQUE_KEYS"):
        monkeypatch.delenv(key, raising=False)
    return monkeypatch
