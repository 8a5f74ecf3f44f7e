# main.py ---------------------------------------------------------------
import streamlit as st

import config
import db
from logging_utils import get_logger
from views import dashboard, sign_in

log = get_logger("main")

st.set_page_config(
    page_title=config.PAGE_TITLE,
    page_icon=config.PAGE_ICON,
    initial_sidebar_state="collapsed",   # collapsed during login
)

# -------------------- Session bootstrap ------------------------------
if "logged_in" not in st.session_state:
    st.session_state.update({
        "logged_in": False,
        "identity": None,
        "console": None,
    })

conn = db.get_connection(str(config.get_db_path()))

# -------------------- Login view -------------------------------------
if not st.session_state.logged_in:
    sign_in.render(conn)
    st.stop()   # nothing else on the page while logged-out

# ----------------------------------------------------------------------
# Logged-in area
# ----------------------------------------------------------------------
identity = st.session_state.identity

# Mirrored into the URL for display; only the session decides who is signed in
if st.query_params.get("role") != identity.role or st.query_params.get("user") != identity.username:
    st.query_params["role"] = identity.role
    st.query_params["user"] = identity.username

st.sidebar.header(f"👤 {identity.username}  ({identity.role})")

if st.sidebar.button("Logout", key="logout"):
    log.info("Logout for %r", identity.username)
    st.session_state.clear()
    st.query_params.clear()
    st.rerun()

dashboard.render(conn, identity)     # every view exposes `render()`
