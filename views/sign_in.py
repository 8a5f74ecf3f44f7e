# views/sign_in.py
# ─────────────────────────────────────────────────────────────
import sqlite3

import streamlit as st

from auth import authenticate
from errors import AuthError


def render(conn: sqlite3.Connection):
    # Hide the (empty) sidebar completely with a touch of CSS
    st.markdown(
        """
        <style>[data-testid="stSidebar"] { display: none; }</style>
        """,
        unsafe_allow_html=True,
    )

    col1, col2, col3 = st.columns([1, 2, 1])
    with col2:
        st.markdown("### Selamat Datang 👋")
        st.caption("Silakan login untuk masuk ke dashboard.")
        with st.form("login_form"):
            username = st.text_input("Username", key="login_username")
            password = st.text_input("Password", type="password", key="login_password")
            submitted = st.form_submit_button("Login")

        if submitted:
            try:
                identity = authenticate(conn, username, password)
            except AuthError as exc:
                st.error(f"❌ {exc.message}")
                return

            # Identity stays server-side; nothing goes into the URL
            st.session_state.update(
                logged_in=True,
                identity=identity,
                console=None,
            )
            st.rerun()
