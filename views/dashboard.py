"""
Inventory Portal · Dashboard
──────────────────────────────────────────
Product list for every signed-in user; the add / edit / delete panel is
rendered only for the admin role (the console enforces the same rule).

• **Edit** on a row → form switches to edit mode for that product.
• **Hapus** deletes immediately (no confirmation).
• Every save or delete reloads the whole list from the database.
"""
import sqlite3

import pandas as pd
import streamlit as st

from auth import Identity
from console import EDITING, ProductConsole
from db import Product

FORM_KEYS = {
    "name": "product_name",
    "unit_price": "product_unit_price",
    "quantity": "product_quantity",
}


# ──────────────────────────────────────────────────────────────────────
# 0. Helpers
# ──────────────────────────────────────────────────────────────────────

def format_rupiah(value: float) -> str:
    if float(value).is_integer():
        return f"Rp {value:,.0f}"
    return f"Rp {value:,.2f}"


def products_frame(products: list[Product]) -> pd.DataFrame:
    df = pd.DataFrame(
        [(p.name, p.unit_price, p.quantity) for p in products],
        columns=["Nama Produk", "Harga", "Qty"],
    )
    df["Harga"] = df["Harga"].map(format_rupiah)
    return df


def get_console(conn: sqlite3.Connection, identity: Identity) -> ProductConsole:
    """One console per session; rebuilt when the identity changes."""
    console = st.session_state.get("console")
    if console is None or console.identity != identity:
        console = ProductConsole(conn, identity)
        console.list()
        st.session_state["console"] = console
        st.session_state["sync_form"] = True
    return console


def _sync_form_widgets(console: ProductConsole):
    """Copy the console's form into the widget keys BEFORE widgets exist."""
    if st.session_state.pop("sync_form", False):
        for attr, key in FORM_KEYS.items():
            st.session_state[key] = getattr(console.form, attr)


# ──────────────────────────────────────────────────────────────────────
# 1. Admin panel
# ──────────────────────────────────────────────────────────────────────

def _render_form(console: ProductConsole):
    editing = console.form.mode == EDITING
    st.subheader("Edit Produk" if editing else "Tambah Produk")

    with st.form("product_form"):
        c1, c2, c3 = st.columns(3)
        name = c1.text_input("Nama Produk", key=FORM_KEYS["name"])
        unit_price = c2.text_input("Harga Satuan", key=FORM_KEYS["unit_price"])
        quantity = c3.text_input("Quantity", key=FORM_KEYS["quantity"])
        submitted = st.form_submit_button("Update" if editing else "Tambah", type="primary")

    if editing and st.button("Batal", key="cancel_edit"):
        console.clear_form()
        console.message = console.error = ""
        st.session_state["sync_form"] = True
        st.rerun()

    if submitted:
        if console.submit(name, unit_price, quantity):
            st.session_state["sync_form"] = True
            st.rerun()

    if console.error:
        st.error(f"⚠️ {console.error}")
    if console.message:
        st.success(f"✅ {console.message}")


def _render_actions(console: ProductConsole):
    st.markdown("#### Aksi")
    for product in console.products:
        name_col, edit_col, del_col = st.columns([4, 1, 1])
        name_col.write(f"**{product.name}** · {format_rupiah(product.unit_price)} · {product.quantity}")

        if edit_col.button("Edit", key=f"edit_{product.id}"):
            console.select(product.id)
            st.session_state["sync_form"] = True
            st.rerun()

        if del_col.button("Hapus", key=f"del_{product.id}"):
            console.remove(product.id)
            st.session_state["sync_form"] = True
            st.rerun()


# ──────────────────────────────────────────────────────────────────────
# 2. Page
# ──────────────────────────────────────────────────────────────────────

def render(conn: sqlite3.Connection, identity: Identity):
    console = get_console(conn, identity)
    _sync_form_widgets(console)

    st.title(f"Dashboard ({identity.role})")
    st.caption(f"Welcome, {identity.username}")

    if identity.is_admin:
        _render_form(console)
        st.divider()

    head_col, refresh_col = st.columns([4, 1])
    head_col.subheader("Daftar Produk")
    if refresh_col.button("🔄 Refresh", key="refresh_products"):
        console.list()
        st.session_state["sync_form"] = True
        st.rerun()

    if not console.products:
        st.info("Belum ada produk.")
        return

    st.dataframe(products_frame(console.products), use_container_width=True, hide_index=True)

    if identity.is_admin:
        _render_actions(console)
