"""Main Streamlit app entry point."""

from __future__ import annotations

import os

import streamlit as st

st.set_page_config(
    page_title="Household Profiler",
    page_icon="🏠",
    layout="wide",
    initial_sidebar_state="expanded",
)


def init_session_state() -> None:
    if "api_url" not in st.session_state:
        st.session_state.api_url = os.environ.get(
            "HP_API_URL", "http://localhost:8000"
        )
    if "editing_member_id" not in st.session_state:
        st.session_state.editing_member_id = None


def main() -> None:
    init_session_state()

    st.sidebar.title("Household Profiler")
    st.sidebar.markdown("---")

    with st.sidebar.expander("Settings", expanded=False):
        api_url = st.text_input(
            "API URL",
            value=st.session_state.api_url,
            key="api_url_input",
        )
        if api_url != st.session_state.api_url:
            st.session_state.api_url = api_url
            st.rerun()

    st.title("Welcome to Household Profiler")
    st.markdown(
        """
        **Household Profiler** keeps one profile per person in your household:
        dietary needs, health details and income, ready for meal planning.

        Open **Members** in the sidebar to add, edit or remove people.
        """
    )

    from household_profiler.streamlit_app import api_client

    try:
        health = api_client.health_check()
        st.success(f"✅ {health.get('message', 'Connected to API')}")
    except Exception as e:
        st.error(f"❌ Cannot connect to API at {st.session_state.api_url}: {e}")
        st.info("Make sure the backend is running: `household-profiler serve`")


if __name__ == "__main__":
    main()
