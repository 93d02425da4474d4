"""Household members page: listing, add/edit form and delete."""

from __future__ import annotations

from datetime import date
from typing import Any

import pandas as pd
import streamlit as st

from household_profiler.streamlit_app import api_client
from household_profiler.streamlit_app.app import init_session_state
from household_profiler.streamlit_app.forms import (
    ACTIVITY_OPTIONS,
    FREQUENCY_OPTIONS,
    ROLE_OPTIONS,
    SEX_OPTIONS,
    activity_label,
    age_label,
    client_side_errors,
    form_to_payload,
    height_label,
    member_to_form_defaults,
    photo_to_data_url,
    role_label,
)

init_session_state()

st.title("🏠 Household Members")

LIST_FIELD_LABELS = {
    "allergens": "Allergens",
    "exclusions": "Dietary exclusions",
    "likes": "Likes",
    "dislikes": "Dislikes",
    "medications": "Medications",
}


@st.cache_data(ttl=30)
def get_members() -> list[dict[str, Any]]:
    """Fetch members with caching."""
    return api_client.list_members()


def show_api_error(e: api_client.APIError) -> None:
    st.error(f"Failed: {e.detail}")
    for field, message in e.fields.items():
        st.error(f"{field}: {message}")


def render_member_form(
    form_key: str,
    defaults: dict[str, Any],
    member_id: int | None = None,
) -> None:
    """Render the add/edit form and submit it to the API."""
    with st.form(form_key, clear_on_submit=member_id is None):
        col1, col2 = st.columns(2)
        with col1:
            name = st.text_input("Name *", value=defaults["name"], max_chars=100)
            role = st.selectbox(
                "Role *",
                options=ROLE_OPTIONS,
                index=ROLE_OPTIONS.index(defaults["role"])
                if defaults["role"] in ROLE_OPTIONS
                else 0,
                format_func=role_label,
            )
            sex = st.selectbox(
                "Sex *",
                options=SEX_OPTIONS,
                index=SEX_OPTIONS.index(defaults["sex"])
                if defaults["sex"] in SEX_OPTIONS
                else 0,
                format_func=str.title,
            )
            activity_level = st.selectbox(
                "Activity level *",
                options=ACTIVITY_OPTIONS,
                index=ACTIVITY_OPTIONS.index(defaults["activity_level"])
                if defaults["activity_level"] in ACTIVITY_OPTIONS
                else 0,
                format_func=activity_label,
            )
            date_of_birth = st.date_input(
                "Date of birth",
                value=defaults["date_of_birth"],
                min_value=date(1900, 1, 1),
                max_value=date.today(),
            )
        with col2:
            hcol1, hcol2 = st.columns(2)
            with hcol1:
                height_feet = st.number_input(
                    "Height (ft)",
                    min_value=0,
                    max_value=10,
                    value=int(defaults["height_feet"]),
                    step=1,
                )
            with hcol2:
                height_inches = st.number_input(
                    "Height (in)",
                    min_value=0,
                    max_value=11,
                    value=int(defaults["height_inches"]),
                    step=1,
                )
            weight = st.number_input(
                "Weight (lbs)",
                min_value=0.0,
                max_value=2000.0,
                value=float(defaults["weight"]),
                step=1.0,
                help="Leave at 0 if not specified",
            )
            photo_file = st.file_uploader(
                "Photo", type=["png", "jpg", "jpeg", "gif", "webp"]
            )

        list_values = {
            key: st.text_input(
                f"{label} (comma separated)",
                value=defaults[key],
            )
            for key, label in LIST_FIELD_LABELS.items()
        }

        st.markdown("**Income sources**")
        income_df = st.data_editor(
            pd.DataFrame(
                defaults["income_sources"],
                columns=["source", "amount", "frequency"],
            ),
            num_rows="dynamic",
            use_container_width=True,
            hide_index=True,
            column_config={
                "source": st.column_config.TextColumn("Source"),
                "amount": st.column_config.NumberColumn(
                    "Amount", min_value=0.0, format="$%.2f"
                ),
                "frequency": st.column_config.SelectboxColumn(
                    "Frequency", options=FREQUENCY_OPTIONS
                ),
            },
            key=f"{form_key}_income",
        )

        medical_notes = st.text_area("Medical notes", value=defaults["medical_notes"])

        submit_label = "Save Changes" if member_id is not None else "Add Member"
        submitted = st.form_submit_button(submit_label, type="primary")
        cancelled = (
            st.form_submit_button("Cancel") if member_id is not None else False
        )

    if cancelled:
        st.session_state.editing_member_id = None
        st.rerun()

    if not submitted:
        return

    photo = defaults["photo"]
    if photo_file is not None:
        photo = photo_to_data_url(photo_file.getvalue(), photo_file.type)

    values = {
        "name": name,
        "role": role,
        "sex": sex,
        "activity_level": activity_level,
        "photo": photo,
        "date_of_birth": date_of_birth,
        "height_feet": height_feet,
        "height_inches": height_inches,
        "weight": weight,
        **list_values,
        "income_sources": income_df.to_dict("records"),
        "medical_notes": medical_notes,
    }

    errors = client_side_errors(values)
    if errors:
        for message in errors.values():
            st.error(message)
        return

    try:
        payload = form_to_payload(values)
        if member_id is None:
            created = api_client.create_member(payload)
            st.success(f"Added {created['name']}")
        else:
            updated = api_client.update_member(member_id, payload)
            st.success(f"Updated {updated['name']}")
            st.session_state.editing_member_id = None
        get_members.clear()
        st.rerun()
    except api_client.APIError as e:
        show_api_error(e)


def render_member_card(member: dict[str, Any]) -> None:
    defaults = member_to_form_defaults(member)
    col_photo, col_info, col_actions = st.columns([1, 4, 1])

    with col_photo:
        if member.get("photo"):
            st.image(member["photo"], width=96)
        else:
            st.markdown("### 👤")

    with col_info:
        st.subheader(member["name"])
        st.caption(
            f"{role_label(member['role'])} · {age_label(member.get('dateOfBirth'))}"
        )
        weight = member.get("weight")
        st.write(
            f"**Height:** {height_label(member.get('height'))} · "
            f"**Weight:** {f'{weight:g} lbs' if weight else 'Not specified'} · "
            f"**Activity:** {activity_label(member['activityLevel'])}"
        )
        for key, label in LIST_FIELD_LABELS.items():
            if defaults[key]:
                st.write(f"**{label}:** {defaults[key]}")
        if defaults["income_sources"]:
            st.dataframe(
                pd.DataFrame(defaults["income_sources"]),
                use_container_width=True,
                hide_index=True,
            )
        if defaults["medical_notes"]:
            st.write(f"**Medical notes:** {defaults['medical_notes']}")

    with col_actions:
        if st.button("Edit", key=f"edit_{member['id']}"):
            st.session_state.editing_member_id = member["id"]
            st.rerun()
        if st.button("Delete", key=f"delete_{member['id']}", type="secondary"):
            try:
                api_client.delete_member(member["id"])
                st.success(f"Deleted {member['name']}")
                if st.session_state.get("editing_member_id") == member["id"]:
                    st.session_state.editing_member_id = None
                get_members.clear()
                st.rerun()
            except api_client.APIError as e:
                show_api_error(e)


try:
    household = api_client.get_household()
    hcol1, hcol2, hcol3 = st.columns(3)
    with hcol1:
        st.metric("Household", household["name"])
    with hcol2:
        st.metric("Members", len(household["members"]))
    with hcol3:
        st.metric("Timezone", household["timezone"])
except api_client.APIError as e:
    if e.status_code == 404:
        st.info("No household yet. Add the first member to create it.")
    else:
        st.error(f"API Error: {e.detail}")

tab_list, tab_create = st.tabs(["All Members", "Add Member"])

with tab_list:
    try:
        members = get_members()
        editing_id = st.session_state.get("editing_member_id")
        editing = next((m for m in members if m["id"] == editing_id), None)
        if editing is not None:
            st.markdown(f"### Editing {editing['name']}")
            render_member_form(
                f"edit_member_{editing['id']}",
                member_to_form_defaults(editing),
                member_id=editing["id"],
            )
            st.divider()

        if members:
            for member in members:
                render_member_card(member)
                st.divider()
        else:
            st.info("No members found. Add one in the 'Add Member' tab.")
    except api_client.APIError as e:
        st.error(f"API Error: {e.detail}")

with tab_create:
    render_member_form("create_member", member_to_form_defaults(None))
