"""Festival Flyer Team Assignment: Streamlit entry point."""

import logging
import streamlit as st
import sys
import os

# Add project root to path for imports
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from components.sidebar import render_sidebar
from data.session_store import initialize_session_state
from tabs import tab_auto_assign, tab_dashboard, tab_admin

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def main():
    st.set_page_config(
        page_title="Flyer Team Assignment",
        page_icon="📮",
        layout="wide",
        initial_sidebar_state="expanded",
    )

    initialize_session_state()
    sidebar_state = render_sidebar()

    tab1, tab2, tab3 = st.tabs([
        "🧭 Auto Assign",
        "📊 Dashboard",
        "⚙️ Admin",
    ])

    with tab1:
        tab_auto_assign.render(sidebar_state)
    with tab2:
        tab_dashboard.render(sidebar_state)
    with tab3:
        tab_admin.render(sidebar_state)


if __name__ == "__main__":
    main()
