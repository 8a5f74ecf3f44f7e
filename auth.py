# auth.py ---------------------------------------------------------------
"""Plaintext credential check against the `users` table.
   No hashing, no tokens: the identity lives in the server-side session."""
import sqlite3
from dataclasses import dataclass

import config
import db
from errors import AuthError
from logging_utils import get_logger

log = get_logger("auth")


@dataclass(frozen=True)
class Identity:
    role: str
    username: str

    @property
    def is_admin(self) -> bool:
        return self.role == config.ADMIN_ROLE


def authenticate(conn: sqlite3.Connection, username: str, password: str) -> Identity:
    """Return the identity of the single matching user or raise AuthError."""
    try:
        matches = db.find_users(conn, username, password)
    except sqlite3.Error:
        log.exception("User lookup failed for %r", username)
        raise AuthError.invalid_credentials() from None

    if len(matches) != 1:
        log.info("Login rejected for %r (%d matches)", username, len(matches))
        raise AuthError.invalid_credentials()

    user = matches[0]
    log.info("Login ok for %r (role=%s)", user["username"], user["role"])
    return Identity(role=user["role"], username=user["username"])
