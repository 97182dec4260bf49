"""Streamlit UI - public quote and booking page.

Run with: streamlit run ui/app.py
"""

# Add project root to sys.path for imports to work when run via streamlit
import sys
from pathlib import Path

_ROOT = Path(__file__).resolve().parents[1]
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import streamlit as st  # noqa: E402

from portal.config import get_settings  # noqa: E402
from portal.flow.session import FlowContext  # noqa: E402
from portal.utils.logging import configure_logging  # noqa: E402
from ui.components import render_booking_flow  # noqa: E402
from ui.helpers import get_flow  # noqa: E402

settings = get_settings()
configure_logging(settings.log_level)

# Page config
st.set_page_config(page_title=f"Get a Quote | {settings.site_name}", page_icon="🚐", layout="wide")

st.title(settings.site_name)
st.markdown("*Airport and long-distance transfers - instant fixed prices*")
st.divider()

flow = get_flow(st.session_state, "public_flow", FlowContext.public(settings))
render_booking_flow(flow)
