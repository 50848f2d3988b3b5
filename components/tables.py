"""Styled dataframe display helpers."""

import streamlit as st
import pandas as pd
from typing import Dict, List

from models.assignment import Assignment
from models.participant import Participant
from models.team import Team
from config.defaults import TEAM_FULL_THRESHOLD, TEAM_UNDERFILLED_THRESHOLD


def render_assignment_table(
    assignments: List[Assignment],
    people: Dict[str, Participant],
    team_map: Dict[str, Team],
):
    """Render assignments joined with participant and team details."""
    rows = []
    for a in sorted(assignments, key=lambda a: (a.team_id, a.response_id)):
        p = people.get(a.response_id)
        t = team_map.get(a.team_id)
        rows.append({
            "Team": f"{t.team_code} {t.team_name}" if t else a.team_id,
            "Time Slot": a.time_slot,
            "Response ID": a.response_id,
            "Name": p.name if p else "",
            "Section": p.section if p else "",
            "Grade": p.grade if p else None,
            "By": a.assigned_by,
        })
    df = pd.DataFrame(rows)

    def color_source(val):
        if val == "manual":
            return "background-color: #fff3cd; color: #856404; font-weight: bold"
        return ""

    st.dataframe(df.style.map(color_source, subset=["By"]), use_container_width=True, hide_index=True)


def render_roster_table(rosters: List[dict]):
    """Render per-team roster stats with fill-rate highlighting."""
    def color_fill(val):
        try:
            v = float(val.rstrip("%")) / 100
        except (ValueError, AttributeError):
            return ""
        if v >= TEAM_FULL_THRESHOLD:
            return "background-color: #ffcccc; color: #cc0000; font-weight: bold"
        elif v < TEAM_UNDERFILLED_THRESHOLD:
            return "background-color: #d4edda; color: #155724"
        return ""

    df = pd.DataFrame([{
        "Team": f"{r['team_code']} {r['team_name']}",
        "Slot": r["time_slot"],
        "Area": r["assigned_area"],
        "Members": f"{r['member_count']} / {r['capacity']}",
        "Fill": f"{r['fill_pct']:.0%}",
        "Seniors": r["senior_count"],
        "Sections": ", ".join(f"{s} x{n}" for s, n in sorted(r["sections"].items())),
        "Grades": ", ".join(f"G{g} x{n}" for g, n in sorted(r["grades"].items())),
    } for r in rosters])
    if df.empty:
        st.info("No teams.")
        return
    st.dataframe(df.style.map(color_fill, subset=["Fill"]), use_container_width=True, hide_index=True)
