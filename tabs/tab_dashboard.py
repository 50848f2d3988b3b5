"""Tab 2: Dashboard: team fill, section and grade balance, alerts."""

import streamlit as st
import pandas as pd

from data.session_store import (
    get_participants, get_teams, get_assignments, get_rule_config, get_run_standby_ids,
    is_data_loaded,
)
from components.metrics_cards import render_stats_cards, render_alerts
from components.charts import team_fill_bar, slot_donut, team_section_heatmap, grade_stack_bar
from components.tables import render_roster_table
from engine.roster import compute_stats, count_standby, get_team_rosters, get_slot_summary, get_unassigned
from models.time_slot import TimeSlot
from config.defaults import TEAM_FULL_THRESHOLD, TEAM_UNDERFILLED_THRESHOLD


def render(sidebar_state):
    """Render the Dashboard tab."""
    st.header("Dashboard")

    if not is_data_loaded():
        st.info("No roster loaded. Please upload participants and teams in the Admin tab.")
        return

    participants = get_participants()
    teams = get_teams()
    assignments = get_assignments()

    if not assignments:
        st.info("No assignments yet. Run auto assignment from the Auto Assign tab.")
        return

    rosters = get_team_rosters(teams, participants, assignments, get_rule_config())
    active = [r for r in rosters if r["time_slot"] != TimeSlot.PR.value]
    slots = get_slot_summary(assignments)
    unassigned = get_unassigned(participants, assignments)

    if sidebar_state.form_id:
        st.caption(f"{sidebar_state.year} / form {sidebar_state.form_id}")

    # --- KPI Metrics ---
    stats = compute_stats(len(participants), assignments,
                          standby=count_standby(get_run_standby_ids(), assignments))
    render_stats_cards(stats, slots)

    st.divider()

    # --- Charts ---
    col1, col2 = st.columns([3, 2])
    with col1:
        st.plotly_chart(team_fill_bar(active), use_container_width=True)
    with col2:
        st.plotly_chart(slot_donut(slots), use_container_width=True)

    sections = sorted({p.section for p in participants})
    col3, col4 = st.columns(2)
    with col3:
        st.plotly_chart(team_section_heatmap(active, sections), use_container_width=True)
    with col4:
        st.plotly_chart(grade_stack_bar(active), use_container_width=True)

    st.divider()

    # --- Team Rosters ---
    st.subheader("Team Rosters")
    render_roster_table(rosters)

    with st.expander("Members by team"):
        for r in rosters:
            if r["members"]:
                st.markdown(f"**{r['team_code']} {r['team_name']}**: {', '.join(r['members'])}")

    st.divider()

    # --- Alerts ---
    st.subheader("Alerts")
    alerts = []
    for r in active:
        if r["fill_pct"] >= TEAM_FULL_THRESHOLD:
            alerts.append(("warning", f"{r['team_code']} is full ({r['member_count']}/{r['capacity']})."))
        elif r["fill_pct"] < TEAM_UNDERFILLED_THRESHOLD:
            alerts.append(("info", f"{r['team_code']} is under half full ({r['member_count']}/{r['capacity']})."))
        if r["member_count"] and r["senior_count"] == 0:
            alerts.append(("warning", f"{r['team_code']} has no grade 3+ member."))
    if unassigned:
        alerts.append(("error", f"{len(unassigned)} participant{'s' if len(unassigned) != 1 else ''} unassigned."))

    render_alerts(alerts, all_clear="No alerts. Every team has room and a senior member.")

    if unassigned:
        st.dataframe(pd.DataFrame([{
            "Response ID": p.response_id, "Name": p.name, "Section": p.section,
            "Grade": p.grade, "Availability": p.availability,
        } for p in unassigned]), use_container_width=True, hide_index=True)
