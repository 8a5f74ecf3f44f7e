"""
Product Console · state behind the dashboard
──────────────────────────────────────────────
Holds the local product list, the form sub-machine (idle / editing) and the
last message shown to the user. Every mutation is followed by a full reload
of `products`, so the local list never drifts from the backend.

The console is kept in `st.session_state` between reruns, but it never
touches Streamlit itself: views read its fields and call its operations.
"""
from __future__ import annotations

import math
import sqlite3
from dataclasses import dataclass, field
from typing import Optional

import config
import db
from auth import Identity
from db import Product
from errors import AuthorizationError, ConsoleError, PersistenceError, ValidationError
from logging_utils import get_logger

log = get_logger("console")

IDLE = "idle"
EDITING = "editing"


@dataclass
class FormState:
    """Raw form strings plus the record being edited (None → idle)."""
    name: str = ""
    unit_price: str = ""
    quantity: str = ""
    edit_target: Optional[int] = None

    @property
    def mode(self) -> str:
        return IDLE if self.edit_target is None else EDITING


SQLITE_INT_MIN = -(2 ** 63)
SQLITE_INT_MAX = 2 ** 63 - 1


def _to_quantity(raw: str) -> int:
    """Exact int parse first; "3.0"-style input goes through float."""
    text = str(raw).strip()
    try:
        qty = int(text)
    except ValueError:
        try:
            qty_f = float(text)
        except ValueError:
            raise ValidationError.invalid_number() from None
        if not qty_f.is_integer():
            raise ValidationError.invalid_number()
        qty = int(qty_f)
    if not SQLITE_INT_MIN <= qty <= SQLITE_INT_MAX:
        raise ValidationError.invalid_number()
    return qty


def coerce_numbers(unit_price: str, quantity: str, blank_as_zero: bool = False) -> tuple[float, int]:
    """Numeric coercion only; with `blank_as_zero` empty strings read as 0."""
    if blank_as_zero:
        unit_price = str(unit_price).strip() or "0"
        quantity = str(quantity).strip() or "0"
    try:
        price = float(unit_price)
    except (TypeError, ValueError):
        raise ValidationError.invalid_number() from None
    if not math.isfinite(price):
        raise ValidationError.invalid_number()
    return price, _to_quantity(quantity)


def parse_fields(name: str, unit_price: str, quantity: str) -> tuple[str, float, int]:
    """Presence check on all three fields, then numeric coercion."""
    if not all(str(v).strip() for v in (name, unit_price, quantity)):
        raise ValidationError.missing_field()
    price, qty = coerce_numbers(unit_price, quantity)
    return name, price, qty


@dataclass
class ProductConsole:
    conn: sqlite3.Connection
    identity: Identity
    products: list[Product] = field(default_factory=list)
    form: FormState = field(default_factory=FormState)
    message: str = ""
    error: str = ""

    # ----------------------------- read -----------------------------

    def list(self) -> list[Product]:
        """Replace the local list with the backend's full set."""
        try:
            self.products = db.select_products(self.conn)
        except sqlite3.Error:
            log.exception("Loading products failed")
            self.products = []

        target = self.form.edit_target
        if target is not None and all(p.id != target for p in self.products):
            log.info("Edited product %s vanished; back to idle", target)
            self.clear_form()
        return self.products

    def get(self, product_id: int) -> Product | None:
        return next((p for p in self.products if p.id == product_id), None)

    # ----------------------------- form -----------------------------

    def select(self, product_id: int) -> None:
        """idle → editing(id): copy the record into the form."""
        product = self.get(product_id)
        if product is None:
            return
        self.form = FormState(
            name=product.name,
            unit_price=_fmt_number(product.unit_price),
            quantity=str(product.quantity),
            edit_target=product.id,
        )
        self.message = self.error = ""

    def clear_form(self) -> None:
        self.form = FormState()

    # ----------------------------- mutations -----------------------------

    def create(self, name: str, unit_price: str, quantity: str) -> int:
        self._require_admin()
        self.form = FormState(name, unit_price, quantity, self.form.edit_target)
        name, price, qty = parse_fields(name, unit_price, quantity)
        try:
            new_id = db.insert_product(self.conn, name, price, qty)
        except (sqlite3.Error, OverflowError) as exc:
            log.exception("Insert failed for %r", name)
            raise PersistenceError.of(PersistenceError.INSERT_FAILED) from exc

        log.info("Product %s created by %s", new_id, self.identity.username)
        self.message, self.error = config.MSG_INSERTED, ""
        self.clear_form()
        self.list()
        return new_id

    def update(self, name: str, unit_price: str, quantity: str) -> bool:
        """Save the form over the edit target; no target → no-op (False).

        Fields are not checked for presence here, only coerced: blank
        numbers read as 0 and a blank name is saved as-is.
        """
        target = self.form.edit_target
        if target is None:
            return False
        self._require_admin()
        self.form = FormState(name, unit_price, quantity, target)
        price, qty = coerce_numbers(unit_price, quantity, blank_as_zero=True)
        try:
            db.update_product(self.conn, target, name, price, qty)
        except (sqlite3.Error, OverflowError) as exc:
            log.exception("Update failed for product %s", target)
            raise PersistenceError.of(PersistenceError.UPDATE_FAILED) from exc

        log.info("Product %s updated by %s", target, self.identity.username)
        self.message, self.error = config.MSG_UPDATED, ""
        self.clear_form()
        self.list()
        return True

    def delete(self, product_id: int) -> None:
        """Delete and reload; a backend failure is logged and dropped."""
        self._require_admin()
        try:
            db.delete_product(self.conn, product_id)
        except sqlite3.Error:
            log.exception("Delete failed for product %s", product_id)
        else:
            log.info("Product %s deleted by %s", product_id, self.identity.username)

        # reload regardless of the outcome
        self.list()

    def submit(self, name: str, unit_price: str, quantity: str) -> bool:
        """Create or update depending on mode; errors land in `self.error`."""
        try:
            if self.form.mode == EDITING:
                return self.update(name, unit_price, quantity)
            self.create(name, unit_price, quantity)
            return True
        except ConsoleError as exc:
            self.error, self.message = exc.message, ""
            return False

    def remove(self, product_id: int) -> bool:
        """`delete` for the views: a refused mutation goes to `self.error`."""
        try:
            self.delete(product_id)
            return True
        except ConsoleError as exc:
            self.error, self.message = exc.message, ""
            return False

    # ----------------------------- internals -----------------------------

    def _require_admin(self) -> None:
        if not self.identity.is_admin:
            log.warning("Mutation refused for %s (role=%s)", self.identity.username, self.identity.role)
            raise AuthorizationError.not_admin()


def _fmt_number(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)
