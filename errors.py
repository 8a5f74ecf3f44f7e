"""Errors the views can surface as a single message."""
from __future__ import annotations

import config


class ConsoleError(Exception):
    """Base class: `kind` for code paths, `message` for the UI."""

    def __init__(self, kind: str, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message


class AuthError(ConsoleError):
    INVALID_CREDENTIALS = "InvalidCredentials"

    @classmethod
    def invalid_credentials(cls) -> "AuthError":
        return cls(cls.INVALID_CREDENTIALS, config.MSG_INVALID_CREDENTIALS)


class ValidationError(ConsoleError):
    MISSING_FIELD = "MissingField"
    INVALID_NUMBER = "InvalidNumber"

    @classmethod
    def missing_field(cls) -> "ValidationError":
        return cls(cls.MISSING_FIELD, config.MSG_MISSING_FIELD)

    @classmethod
    def invalid_number(cls) -> "ValidationError":
        return cls(cls.INVALID_NUMBER, config.MSG_INVALID_NUMBER)


class PersistenceError(ConsoleError):
    INSERT_FAILED = "InsertFailed"
    UPDATE_FAILED = "UpdateFailed"

    _MESSAGES = {
        INSERT_FAILED: config.MSG_INSERT_FAILED,
        UPDATE_FAILED: config.MSG_UPDATE_FAILED,
    }

    @classmethod
    def of(cls, kind: str) -> "PersistenceError":
        return cls(kind, cls._MESSAGES[kind])


class AuthorizationError(ConsoleError):
    NOT_ADMIN = "NotAdmin"

    @classmethod
    def not_admin(cls) -> "AuthorizationError":
        return cls(cls.NOT_ADMIN, config.MSG_NOT_ADMIN)
