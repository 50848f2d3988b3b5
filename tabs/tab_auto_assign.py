"""Tab 1: Auto Assign: run the engine, review results, fix placements by hand."""

import streamlit as st
import pandas as pd

from data.session_store import (
    get_participants, get_teams, get_assignments, set_assignments, get_rule_config,
    get_standby_ids, set_standby_ids, get_run_standby_ids, set_run_standby_ids,
    get_explanations, set_explanations, add_audit_entry, is_data_loaded,
)
from engine.service import auto_assign
from engine.ledger import assign_manually, assignments_for_team, clear_assignments
from engine.roster import compute_stats, count_standby, get_unassigned
from components.metrics_cards import render_stats_cards
from components.tables import render_assignment_table
from config.defaults import ASSIGNABLE_SLOTS


def _run_auto_assign(participants, teams, standby, include_other, rule_config):
    new, stats, explanations = auto_assign(
        participants, teams, standby, include_other, rule_config, explain=True,
    )

    # Re-running starts from a cleared ledger
    _, deleted = clear_assignments(get_assignments())
    set_assignments(new)
    set_explanations(explanations)
    set_run_standby_ids(standby)
    add_audit_entry(
        "auto_assign",
        detail=f"assigned {stats.assigned} of {stats.total} ({stats.standby} on standby, "
               f"{deleted} previous assignments cleared)",
    )


def render(sidebar_state):
    """Render the Auto Assign tab."""
    st.header("Auto Assign")

    if not is_data_loaded():
        st.info("No roster loaded. Please upload participants and teams in the Admin tab.")
        return

    participants = get_participants()
    teams = get_teams()
    rule_config = get_rule_config()
    people = {p.response_id: p for p in participants}

    # --- PR opt-outs ---
    standby = st.multiselect(
        "Headquarters standby (PR opt-out)",
        options=[p.response_id for p in participants],
        default=sorted(get_standby_ids()),
        format_func=lambda rid: f"{people[rid].name} ({rid})",
        key="standby_select",
        help="These participants are left out of auto assignment.",
    )
    set_standby_ids(set(standby))

    include_other = st.checkbox(
        "Include 'other' teams",
        value=bool(rule_config.get("include_other_teams", False)),
        key="auto_include_other",
    )

    col_run, col_clear = st.columns(2)
    with col_run:
        if st.button("Run Auto Assignment", type="primary", key="btn_auto_assign"):
            _run_auto_assign(participants, teams, set(standby), include_other, rule_config)
            st.success("Auto assignment complete.")
    with col_clear:
        if st.button("Clear Assignments", key="btn_clear"):
            _, deleted = clear_assignments(get_assignments())
            set_assignments([])
            set_explanations({})
            set_run_standby_ids(set())
            add_audit_entry("clear", detail=f"deleted {deleted} assignments")
            st.info(f"Deleted {deleted} assignments.")

    assignments = get_assignments()
    stats = compute_stats(len(participants), assignments,
                          standby=count_standby(get_run_standby_ids(), assignments))

    render_stats_cards(stats)

    st.divider()

    if not assignments:
        st.info("No assignments yet. Run auto assignment above.")
        return

    # --- Results ---
    st.subheader("Assignments")
    team_map = {t.team_id: t for t in teams}
    render_assignment_table(assignments, people, team_map)

    # --- Explanations ---
    explanations = get_explanations()
    if explanations:
        with st.expander("Why was this team chosen?"):
            rid = st.selectbox(
                "Participant",
                options=sorted(explanations),
                format_func=lambda r: f"{people[r].name} ({r})" if r in people else r,
                key="explain_select",
            )
            for step in explanations.get(rid, []):
                st.markdown(f"- {step}")

    st.divider()

    # --- Single team ---
    st.subheader("Team Members")
    view_team = st.selectbox(
        "Team",
        options=[t.team_id for t in teams],
        format_func=lambda t: f"{team_map[t].team_code} {team_map[t].team_name}",
        key="team_view",
    )
    members = assignments_for_team(assignments, view_team)
    if members:
        render_assignment_table(members, people, team_map)
    else:
        st.caption("No one assigned to this team.")

    if st.button("Clear this team", key="btn_clear_team", disabled=not members):
        remaining, deleted = clear_assignments(get_assignments(), team_id=view_team)
        set_assignments(remaining)
        add_audit_entry("clear", detail=f"deleted {deleted} assignments", team_id=view_team)
        st.rerun()

    st.divider()

    # --- Unassigned + manual placement ---
    st.subheader("Manual Assignment")
    unassigned = get_unassigned(participants, assignments)
    if unassigned:
        st.warning(f"{len(unassigned)} participant{'s' if len(unassigned) != 1 else ''} not assigned")
        st.dataframe(pd.DataFrame([{
            "Response ID": p.response_id,
            "Name": p.name,
            "Section": p.section,
            "Grade": p.grade,
            "Availability": p.availability,
        } for p in unassigned]), use_container_width=True, hide_index=True)

    col1, col2, col3 = st.columns(3)
    with col1:
        rid = st.selectbox(
            "Participant",
            options=[p.response_id for p in participants],
            format_func=lambda r: f"{people[r].name} ({r})",
            key="manual_participant",
        )
    with col2:
        team_id = st.selectbox(
            "Team",
            options=[t.team_id for t in teams],
            format_func=lambda t: f"{team_map[t].team_code} {team_map[t].team_name}",
            key="manual_team",
        )
    with col3:
        slot = st.selectbox("Time slot", options=ASSIGNABLE_SLOTS, key="manual_slot")

    if st.button("Assign", key="btn_manual_assign"):
        try:
            set_assignments(assign_manually(get_assignments(), rid, team_id, slot))
            add_audit_entry("manual_assign", detail=slot, response_id=rid, team_id=team_id)
            st.success(f"{people[rid].name} assigned to {team_map[team_id].team_name} ({slot}).")
            st.rerun()
        except ValueError as e:
            st.error(str(e))
