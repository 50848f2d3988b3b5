"""KPI cards for assignment counts and dashboard alerts."""

import streamlit as st
from typing import Dict, List, Optional, Tuple

from models.assignment import AssignmentStats

ALERT_ICONS = {"error": "🔴", "warning": "🟡", "info": "🔵"}


def render_stats_cards(stats: AssignmentStats, slots: Optional[Dict[str, int]] = None):
    """Render assignment counts as a row of metric cards.

    Per-slot cards are added when ``slots`` (from get_slot_summary) is given.
    """
    cards = [
        ("Participants", stats.total, None),
        ("Assigned", stats.assigned, None),
        ("Unassigned", stats.unassigned,
         f"{stats.unassigned} to place by hand" if stats.unassigned else None),
        ("Standby", stats.standby, None),
    ]
    if slots:
        cards.append(("Morning", slots.get("morning", 0), None))
        cards.append(("Afternoon", slots.get("afternoon", 0), None))

    cols = st.columns(len(cards))
    for col, (label, value, note) in zip(cols, cards):
        with col:
            st.metric(label=label, value=str(value), delta=note,
                      delta_color="inverse" if note else "normal")


def render_alerts(alerts: List[Tuple[str, str]], all_clear: str = "No alerts."):
    """Render (level, message) pairs; level is error, warning or info."""
    if not alerts:
        st.success(all_clear)
        return
    for level, message in alerts:
        show = getattr(st, level, st.info)
        show(message, icon=ALERT_ICONS.get(level, ALERT_ICONS["info"]))
