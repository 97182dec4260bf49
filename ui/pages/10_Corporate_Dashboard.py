"""Corporate dashboard: account stats and recent bookings."""

import sys
from pathlib import Path

_ROOT = Path(__file__).resolve().parents[2]
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import streamlit as st  # noqa: E402

from portal.client.base import ApiError  # noqa: E402
from portal.config import get_settings  # noqa: E402
from portal.models.corporate import CorporateRole  # noqa: E402
from portal.views.summaries import dashboard_view  # noqa: E402
from ui.components import require_corporate_session  # noqa: E402

settings = get_settings()
st.set_page_config(page_title=f"Dashboard | {settings.site_name}", page_icon="📊", layout="wide")

session = require_corporate_session()

try:
    dashboard = session.api.get_dashboard()
except ApiError as e:
    st.error(e.message)
    st.stop()

view = dashboard_view(dashboard)
st.title(view.company_name or "Dashboard")
if view.discount:
    st.caption(f"Corporate discount: {view.discount}")

cols = st.columns(4)
cols[0].metric("Bookings", view.total_bookings)
cols[1].metric("Total spend", view.total_spend)
cols[2].metric("Team members", view.team_members)
cols[3].metric("Pending approvals", view.pending_approvals)

st.subheader("Recent bookings")
if dashboard.recent_bookings:
    st.dataframe(
        [
            {
                "Booking": b.id,
                "Date": b.date,
                "Passenger": b.passenger_name,
                "Booked by": b.booked_by,
                "From": b.pickup,
                "To": b.dropoff,
                "Status": b.status,
            }
            for b in dashboard.recent_bookings
        ],
        hide_index=True,
        use_container_width=True,
    )
else:
    st.caption("No bookings yet.")

st.page_link("pages/6_Corporate_Quote.py", label="Book a journey")
user = session.context.user
if user is not None and user.role == CorporateRole.admin:
    st.page_link("pages/11_Corporate_Team.py", label="Manage team")
