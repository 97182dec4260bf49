"""Zone pricing table."""

import sys
from pathlib import Path

_ROOT = Path(__file__).resolve().parents[2]
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import streamlit as st  # noqa: E402

from portal.client.base import ApiError  # noqa: E402
from portal.client.quotes import QuoteApi  # noqa: E402
from portal.config import get_settings  # noqa: E402
from portal.views.summaries import zone_pricing_rows  # noqa: E402
from ui.helpers import get_client  # noqa: E402

settings = get_settings()
st.set_page_config(page_title=f"Pricing | {settings.site_name}", page_icon="💷", layout="wide")
st.title("Zone Pricing")
st.markdown("Fixed prices between our most popular areas.")

quotes = QuoteApi(get_client(st.session_state))
try:
    grouped = zone_pricing_rows(quotes.get_zone_pricing(), quotes.list_vehicle_types())
except ApiError as e:
    st.error(e.message)
    st.stop()

if not grouped:
    st.info("No zone pricing available at the moment. Get an instant quote instead.")

for zone_name, rows in grouped.items():
    st.subheader(f"From {zone_name}")
    st.dataframe(
        [
            {
                "Destination": r.destination_name,
                "Vehicle": r.vehicle,
                "One way": r.outbound,
                "Return": r.return_price,
            }
            for r in rows
        ],
        hide_index=True,
        use_container_width=True,
    )
