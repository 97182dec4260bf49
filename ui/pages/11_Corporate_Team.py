"""Team management (admins only): invite, change role, resend invite, remove."""

import sys
from pathlib import Path

_ROOT = Path(__file__).resolve().parents[2]
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import streamlit as st  # noqa: E402

from portal.client.base import ApiError  # noqa: E402
from portal.config import get_settings  # noqa: E402
from portal.models.corporate import CorporateRole, InviteResult, TeamMemberUpdate  # noqa: E402
from portal.views.summaries import team_rows  # noqa: E402
from ui.components import require_corporate_session  # noqa: E402

settings = get_settings()
st.set_page_config(page_title=f"Team | {settings.site_name}", page_icon="👥")

session = require_corporate_session()
api = session.api
user = session.context.user
if user is None or user.role != CorporateRole.admin:
    st.warning("Only account admins can manage the team.")
    st.stop()

st.title("Team")


def show_invite(result: InviteResult) -> None:
    st.success(result.message or "Invitation sent")
    if result.magic_link:
        st.code(result.magic_link, language=None)
        if result.instructions and result.instructions.note:
            st.caption(result.instructions.note)


invite = st.session_state.pop("team_invite", None)
if isinstance(invite, InviteResult):
    show_invite(invite)

try:
    members = api.get_team_members()
except ApiError as e:
    st.error(e.message)
    st.stop()

roles = list(CorporateRole)
for row in team_rows(members, user.user_id):
    with st.container(border=True):
        cols = st.columns([3, 2, 1, 1])
        cols[0].markdown(f"**{row.name}**  \n{row.email}")
        cols[0].caption(f"{row.status} - last login {row.last_login}")
        if row.is_self:
            cols[1].caption(row.role.value.title())
            continue

        role = cols[1].selectbox(
            "Role",
            roles,
            index=roles.index(row.role),
            format_func=lambda r: r.value.title(),
            key=f"role_{row.user_id}",
            label_visibility="collapsed",
        )
        if role != row.role:
            try:
                api.update_team_member(row.user_id, TeamMemberUpdate(role=role))
                st.toast("Role updated successfully")
            except ApiError as e:
                st.error(e.message)
            st.rerun()

        if row.can_resend_invite and cols[2].button("Resend", key=f"resend_{row.user_id}"):
            try:
                st.session_state["team_invite"] = api.resend_invite(row.user_id)
            except ApiError as e:
                st.error(e.message)
            st.rerun()

        if cols[3].button("Remove", key=f"rm_{row.user_id}"):
            try:
                api.remove_team_member(row.user_id)
                st.toast("Team member removed successfully")
            except ApiError as e:
                st.error(e.message)
            st.rerun()

st.subheader("Invite a team member")
with st.form("add_member", clear_on_submit=True):
    name = st.text_input("Name")
    email = st.text_input("Email")
    new_role = st.selectbox("Role", roles, format_func=lambda r: r.value.title())
    approval = st.checkbox("Bookings require admin approval (bookers only)")
    if st.form_submit_button("Invite", type="primary"):
        try:
            result = api.add_team_member(email, name, new_role, approval)
        except ApiError as e:
            st.error(e.message)
        else:
            if result.success:
                st.session_state["team_invite"] = result
                st.rerun()
            st.error(result.message or "Failed to add team member")
