"""End-to-end runs of main.py through Streamlit's AppTest harness."""
from pathlib import Path

import pytest
from streamlit.testing.v1 import AppTest

import db
from views.dashboard import format_rupiah, products_frame

MAIN = str(Path(__file__).resolve().parents[1] / "main.py")


def _button(at, label):
    return next(b for b in at.button if b.label == label)


def _login(at, username, password):
    at.text_input(key="login_username").input(username)
    at.text_input(key="login_password").input(password)
    _button(at, "Login").click().run()


@pytest.fixture()
def app(db_path):
    at = AppTest.from_file(MAIN, default_timeout=30)
    at.run()
    return at


def test_starts_on_sign_in(app):
    assert not app.exception
    assert app.session_state["logged_in"] is False
    assert [b.label for b in app.button] == ["Login"]


def test_wrong_password_shows_generic_error(app):
    _login(app, "admin", "wrongpass")
    assert app.session_state["logged_in"] is False
    assert "Username atau password salah." in app.error[0].value


def test_admin_lands_on_dashboard_with_form(app):
    _login(app, "admin", "adminpass")
    assert not app.exception
    assert app.title[0].value == "Dashboard (admin)"
    assert app.session_state["identity"].username == "admin"
    assert app.text_input(key="product_name").value == ""
    assert any(i.value == "Belum ada produk." for i in app.info)


def test_admin_adds_product(app, db_path):
    _login(app, "admin", "adminpass")
    app.text_input(key="product_name").input("Pen")
    app.text_input(key="product_unit_price").input("1000")
    app.text_input(key="product_quantity").input("5")
    _button(app, "Tambah").click().run()

    assert not app.exception
    assert "Produk berhasil ditambah!" in app.success[0].value
    assert app.text_input(key="product_name").value == ""

    table = app.dataframe[0].value
    assert table["Nama Produk"].tolist() == ["Pen"]
    assert table["Harga"].tolist() == ["Rp 1,000"]

    conn = db.connect(db_path)
    try:
        assert [(p.name, p.unit_price, p.quantity) for p in db.select_products(conn)] == [("Pen", 1000, 5)]
    finally:
        conn.close()


def test_admin_empty_form_shows_validation_error(app):
    _login(app, "admin", "adminpass")
    _button(app, "Tambah").click().run()
    assert "Semua input harus diisi." in app.error[0].value


def test_admin_edits_and_deletes(app, conn):
    pid = db.insert_product(conn, "Pen", 1000, 5)
    _login(app, "admin", "adminpass")

    app.button(key=f"edit_{pid}").click().run()
    assert app.subheader[0].value == "Edit Produk"
    assert app.text_input(key="product_name").value == "Pen"
    assert app.text_input(key="product_unit_price").value == "1000"

    app.text_input(key="product_quantity").input("9")
    _button(app, "Update").click().run()
    assert "Produk berhasil diupdate!" in app.success[0].value
    assert db.select_products(conn)[0].quantity == 9

    app.button(key=f"del_{pid}").click().run()
    assert not app.exception
    assert db.select_products(conn) == []
    assert any(i.value == "Belum ada produk." for i in app.info)


def test_role_in_url_does_not_sign_in(db_path):
    at = AppTest.from_file(MAIN, default_timeout=30)
    at.query_params["role"] = "admin"
    at.query_params["user"] = "admin"
    at.run()

    assert not at.exception
    assert at.session_state["logged_in"] is False
    assert [b.label for b in at.button] == ["Login"]


def test_admin_can_blank_the_name_on_update(app, conn):
    pid = db.insert_product(conn, "Pen", 1000, 5)
    _login(app, "admin", "adminpass")

    app.button(key=f"edit_{pid}").click().run()
    app.text_input(key="product_name").input("")
    _button(app, "Update").click().run()

    assert not app.exception
    assert "Produk berhasil diupdate!" in app.success[0].value
    assert db.select_products(conn) == [db.Product(pid, "", 1000, 5)]


def test_user_role_sees_read_only_list(app, conn):
    db.insert_product(conn, "Pen", 1000, 5)
    _login(app, "user", "userpass")

    assert app.title[0].value == "Dashboard (user)"
    assert len(app.text_input) == 0
    labels = [b.label for b in app.button]
    assert "Tambah" not in labels and "Hapus" not in labels
    assert app.dataframe[0].value["Nama Produk"].tolist() == ["Pen"]


def test_logout_returns_to_sign_in(app):
    _login(app, "admin", "adminpass")
    app.button(key="logout").click().run()
    assert app.session_state["logged_in"] is False
    assert [b.label for b in app.button] == ["Login"]


# ---------------------------- helpers ----------------------------

def test_format_rupiah():
    assert format_rupiah(1000) == "Rp 1,000"
    assert format_rupiah(1250000.0) == "Rp 1,250,000"
    assert format_rupiah(12.5) == "Rp 12.50"


def test_products_frame_columns():
    df = products_frame([db.Product(1, "Pen", 1000, 5)])
    assert list(df.columns) == ["Nama Produk", "Harga", "Qty"]
    assert df.iloc[0].tolist() == ["Pen", "Rp 1,000", 5]
