import sqlite3
import threading
from contextlib import closing
from dataclasses import dataclass
from pathlib import Path

import streamlit as st

import config
from logging_utils import get_logger

log = get_logger("db")

# ────────────────────────────────────────────────────────────────────────────────
# 1. Schema
# ────────────────────────────────────────────────────────────────────────────────

CREATE_USERS = """
CREATE TABLE IF NOT EXISTS users (
    id       INTEGER PRIMARY KEY AUTOINCREMENT,
    username TEXT NOT NULL,
    password TEXT NOT NULL,
    role     TEXT NOT NULL
);
"""

CREATE_PRODUCTS = """
CREATE TABLE IF NOT EXISTS products (
    id         INTEGER PRIMARY KEY AUTOINCREMENT,
    name       TEXT NOT NULL,
    unit_price REAL NOT NULL,
    quantity   INTEGER NOT NULL
);
"""


@dataclass(frozen=True)
class Product:
    id: int
    name: str
    unit_price: float
    quantity: int


def init_db(conn: sqlite3.Connection, seed_users: bool = True) -> None:
    """Create both tables; put the default accounts into an empty `users`."""
    conn.executescript(CREATE_USERS + CREATE_PRODUCTS)
    if seed_users:
        total = conn.execute("SELECT COUNT(*) FROM users").fetchone()[0]
        if total == 0:
            conn.executemany(
                "INSERT INTO users (username, password, role) VALUES (?,?,?)",
                [(u["username"], u["password"], u["role"]) for u in config.DEFAULT_USERS],
            )
            log.info("Seeded %d default users", len(config.DEFAULT_USERS))
    conn.commit()


def connect(db_path: Path | str) -> sqlite3.Connection:
    conn = sqlite3.connect(str(db_path), check_same_thread=False)
    conn.row_factory = sqlite3.Row
    init_db(conn)
    return conn


@st.cache_resource(show_spinner=False)
def get_connection(db_path: str) -> sqlite3.Connection:
    """One shared connection per database file."""
    log.info("Opening database %s", db_path)
    return connect(db_path)


# ────────────────────────────────────────────────────────────────────────────────
# 2. users (read-only)
# ────────────────────────────────────────────────────────────────────────────────

def find_users(conn: sqlite3.Connection, username: str, password: str) -> list[dict]:
    """Every row whose username AND password match verbatim."""
    rows = conn.execute(
        "SELECT username, password, role FROM users WHERE username = ? AND password = ?",
        (username, password),
    ).fetchall()
    return [dict(r) for r in rows]


# ────────────────────────────────────────────────────────────────────────────────
# 3. products (full CRUD)
# ────────────────────────────────────────────────────────────────────────────────

# Sessions share one connection; a write and its commit/rollback must not interleave.
_write_lock = threading.Lock()


def select_products(conn: sqlite3.Connection) -> list[Product]:
    rows = conn.execute(
        "SELECT id, name, unit_price, quantity FROM products ORDER BY id"
    ).fetchall()
    return [Product(**dict(r)) for r in rows]


def insert_product(conn: sqlite3.Connection, name: str, unit_price: float, quantity: int) -> int:
    with _write_lock:
        try:
            with closing(conn.cursor()) as cur:
                cur.execute(
                    "INSERT INTO products (name, unit_price, quantity) VALUES (?,?,?)",
                    (name, unit_price, quantity),
                )
                product_id = cur.lastrowid
            conn.commit()
            return int(product_id)
        except Exception:
            conn.rollback()
            raise


def update_product(
    conn: sqlite3.Connection,
    product_id: int,
    name: str,
    unit_price: float,
    quantity: int,
) -> None:
    with _write_lock:
        try:
            conn.execute(
                "UPDATE products SET name = ?, unit_price = ?, quantity = ? WHERE id = ?",
                (name, unit_price, quantity, product_id),
            )
            conn.commit()
        except Exception:
            conn.rollback()
            raise


def delete_product(conn: sqlite3.Connection, product_id: int) -> None:
    # Unknown ids delete nothing; not an error.
    with _write_lock:
        try:
            conn.execute("DELETE FROM products WHERE id = ?", (product_id,))
            conn.commit()
        except Exception:
            conn.rollback()
            raise
