"""Global sidebar controls for event year and survey form."""

import streamlit as st
from dataclasses import dataclass
from datetime import datetime
from data.session_store import get_assignments, get_participants, get_teams, is_data_loaded


@dataclass
class SidebarState:
    year: int
    form_id: str


def render_sidebar() -> SidebarState:
    """Render the global sidebar controls and return current state."""
    with st.sidebar:
        st.title("Flyer Team Assignment")
        st.divider()

        sidebar = st.session_state.get("sidebar_state", {})
        year = st.number_input(
            "Event year",
            min_value=2000, max_value=2100,
            value=int(sidebar.get("year", datetime.now().year)),
            step=1,
            key="sidebar_year",
        )
        form_id = st.text_input("Survey form ID", value=sidebar.get("form_id", ""), key="sidebar_form")
        st.session_state["sidebar_state"] = {"year": int(year), "form_id": form_id}

        st.divider()

        if is_data_loaded():
            st.success("Roster loaded")
            st.caption(f"Participants: {len(get_participants())}")
            st.caption(f"Teams: {len(get_teams())}")
            st.caption(f"Assignments: {len(get_assignments())}")
        else:
            st.warning("No roster loaded. Go to the Admin tab")

    return SidebarState(year=int(year), form_id=form_id)
