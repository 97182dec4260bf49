"""Corporate portal sign-in: password, magic link, and password set/reset."""

import sys
from pathlib import Path

_ROOT = Path(__file__).resolve().parents[2]
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import streamlit as st  # noqa: E402

from portal.config import get_settings  # noqa: E402
from ui.helpers import get_corporate_session  # noqa: E402

settings = get_settings()
st.set_page_config(page_title=f"Corporate Portal | {settings.site_name}", page_icon="🏢")
st.title("Corporate Portal")

session = get_corporate_session(st.session_state)

# Magic link and set-password emails land here with ?token=...&action=...
link_token = st.query_params.get("token")
action = st.query_params.get("action", "verify")

if link_token and not session.context.is_authenticated:
    if action == "set-password":
        with st.form("set_password"):
            password = st.text_input("New password", type="password")
            confirm = st.text_input("Confirm password", type="password")
            if st.form_submit_button("Set password", type="primary"):
                if session.set_password(link_token, password, confirm):
                    st.query_params.clear()
                    st.rerun()
    elif session.verify_magic_link(link_token):
        st.query_params.clear()
        st.rerun()

if session.context.is_authenticated:
    user = session.context.user
    st.success(f"Signed in as {user.name if user else ''}")
    st.page_link("pages/10_Corporate_Dashboard.py", label="Dashboard")
    st.page_link("pages/6_Corporate_Quote.py", label="Book a journey")
    if st.button("Sign out"):
        session.logout()
        st.rerun()
    st.stop()

if session.error:
    st.error(session.error)

tab_password, tab_link, tab_forgot = st.tabs(["Password", "Email me a link", "Forgot password"])

with tab_password:
    with st.form("login"):
        email = st.text_input("Email")
        password = st.text_input("Password", type="password")
        if st.form_submit_button("Sign in", type="primary"):
            if session.login(email, password):
                st.rerun()
            st.error(session.error or "Sign in failed")

with tab_link:
    with st.form("magic_link"):
        email = st.text_input("Email", key="magic_email")
        if st.form_submit_button("Send link") and session.request_magic_link(email):
            st.success("Check your inbox for a sign-in link.")

with tab_forgot:
    with st.form("forgot"):
        email = st.text_input("Email", key="forgot_email")
        if st.form_submit_button("Send reset link") and session.forgot_password(email):
            st.success("If that address has an account, a reset link is on its way.")
