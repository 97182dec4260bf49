"""Account preferences, logo, notifications and company details."""

import sys
from pathlib import Path

_ROOT = Path(__file__).resolve().parents[2]
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import streamlit as st  # noqa: E402

from portal.client.base import ApiError  # noqa: E402
from portal.config import get_settings  # noqa: E402
from portal.models.corporate import CompanyUpdate, CorporateRole, NameBoardFormat  # noqa: E402
from portal.views.name_board import FORMAT_LABELS, name_board_lines  # noqa: E402
from ui.components import require_corporate_session  # noqa: E402

settings = get_settings()
st.set_page_config(page_title=f"Settings | {settings.site_name}", page_icon="⚙️")

session = require_corporate_session()
api = session.api
company_name = session.context.company.company_name if session.context.company else ""
st.title("Settings")

try:
    prefs = api.get_preferences()
except ApiError as e:
    st.error(e.message)
    st.stop()

st.subheader("Name board")
fmt = st.radio(
    "Format",
    list(NameBoardFormat),
    index=list(NameBoardFormat).index(prefs.name_board_format),
    format_func=lambda f: FORMAT_LABELS[f],
)
custom = ""
if fmt == NameBoardFormat.custom:
    custom = st.text_input("Custom text", prefs.name_board_custom_text or "")

with st.container(border=True):
    for line in name_board_lines(fmt, None, company_name, custom):
        st.markdown(f"### {line}")
    if prefs.logo_url:
        st.caption("Your logo will also be displayed")

instructions = st.text_area("Default driver instructions", prefs.default_driver_instructions or "")

if st.button("Save preferences", type="primary"):
    updated = prefs.model_copy(
        update={
            "name_board_format": fmt,
            "name_board_custom_text": custom or None,
            "default_driver_instructions": instructions or None,
        }
    )
    try:
        api.update_preferences(updated)
        st.success("Preferences saved")
    except ApiError as e:
        st.error(e.message)

st.subheader("Logo")
if prefs.logo_url:
    st.image(prefs.logo_url, width=200)
    if st.button("Remove logo"):
        try:
            api.delete_logo()
        except ApiError as e:
            st.error(e.message)
        st.rerun()

upload = st.file_uploader("Upload logo (PNG, JPEG or SVG, max 2MB)", type=["png", "jpg", "jpeg", "svg"])
if upload is not None and st.button("Upload"):
    try:
        api.upload_logo(upload.getvalue(), upload.type or "")
        st.success("Logo uploaded")
    except (ApiError, ValueError) as e:
        st.error(str(e))


user = session.context.user
if user is not None:
    st.subheader("Email notifications")
    with st.form("notifications"):
        notifications = {
            key: st.checkbox(key.replace("_", " ").capitalize(), value=enabled)
            for key, enabled in sorted(user.notifications.items())
        }
        if not notifications:
            st.caption("No notification settings for this account.")
        if st.form_submit_button("Save notifications") and notifications:
            try:
                api.update_notifications(notifications)
                session.context.user = user.model_copy(update={"notifications": notifications})
                st.success("Notification settings saved")
            except ApiError as e:
                st.error(e.message)

if user is not None and user.role == CorporateRole.admin:
    st.subheader("Company")
    with st.form("company"):
        new_name = st.text_input("Company name", company_name)
        if st.form_submit_button("Save company") and new_name.strip() != company_name:
            try:
                api.update_company(CompanyUpdate(company_name=new_name.strip()))
                session.context.company = api.get_company()
                st.success("Company details saved")
            except ApiError as e:
                st.error(e.message)
    st.page_link("pages/11_Corporate_Team.py", label="Manage team")
