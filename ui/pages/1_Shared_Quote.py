"""Shared quote link: /Shared_Quote?quote=<id>&token=<token>."""

import sys
from pathlib import Path

_ROOT = Path(__file__).resolve().parents[2]
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import streamlit as st  # noqa: E402

from portal.config import get_settings  # noqa: E402
from portal.flow.session import FlowContext  # noqa: E402
from ui.components import render_booking_flow  # noqa: E402
from ui.helpers import get_flow  # noqa: E402

settings = get_settings()
st.set_page_config(page_title=f"Your Quote | {settings.site_name}", page_icon="🚐")
st.title("Your Quote")

quote_id = st.query_params.get("quote", "")
token = st.query_params.get("token", "")

if not quote_id or not token:
    st.error("This quote link is incomplete. Please check the link in your email.")
    st.stop()

flow = get_flow(st.session_state, "shared_flow", FlowContext.public(settings))
if st.session_state.get("shared_quote_loaded") != (quote_id, token):
    flow.new_quote()
    flow.load_shared_quote(quote_id, token)
    st.session_state.shared_quote_loaded = (quote_id, token)

render_booking_flow(flow)
