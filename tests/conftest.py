# tests/conftest.py
# ---------------------------------------------------------------------
# Ground rules:
# - Every test gets its own temp-file SQLite DB (schema + default users)
# - conn.row_factory = sqlite3.Row, same as the app
# - INVENTORY_DB_PATH points the Streamlit app at that same file
# ---------------------------------------------------------------------

from __future__ import annotations

import pytest

import db
from auth import Identity
from console import ProductConsole


@pytest.fixture()
def db_path(tmp_path, monkeypatch):
    path = tmp_path / "inventory.db"
    monkeypatch.setenv("INVENTORY_DB_PATH", str(path))
    return path


@pytest.fixture()
def conn(db_path):
    c = db.connect(db_path)
    try:
        yield c
    finally:
        c.close()


@pytest.fixture()
def admin():
    return Identity(role="admin", username="admin")


@pytest.fixture()
def viewer():
    return Identity(role="user", username="user")


@pytest.fixture()
def console(conn, admin):
    c = ProductConsole(conn, admin)
    c.list()
    return c


@pytest.fixture()
def backend_calls(monkeypatch):
    """Record every mutating call that reaches the db module."""
    calls: list[tuple] = []

    def spy(name):
        real = getattr(db, name)

        def wrapper(*args, **kwargs):
            calls.append((name, args[1:], kwargs))
            return real(*args, **kwargs)

        monkeypatch.setattr(db, name, wrapper)

    for fn in ("insert_product", "update_product", "delete_product"):
        spy(fn)
    return calls
