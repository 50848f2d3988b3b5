"""Tab 3: Admin: roster upload, rule config, audit trail."""

import json
import streamlit as st
import pandas as pd

from data.loader import load_file, load_roster_workbook, parse_participants, parse_teams
from data.validator import validate_participants, validate_teams, validate_cross_file
from data.sample_data import generate_participants_df, generate_teams_df
from data.session_store import (
    set_participants, set_teams, set_assignments, set_data_loaded,
    set_explanations, set_standby_ids, set_run_standby_ids, get_audit_log, get_rule_config,
    set_rule_config,
    add_audit_entry,
)
from engine.service import handle_auto_assign
from config.defaults import DEFAULT_MAX_MEMBERS


def _load_and_validate(participants_df, teams_df):
    """Validate and store an uploaded roster."""
    errors = []
    warnings = []

    for r in [validate_participants(participants_df), validate_teams(teams_df)]:
        errors.extend(r.errors)
        warnings.extend(r.warnings)

    if errors:
        for e in errors:
            st.error(e)
        return False

    participants = parse_participants(participants_df)
    teams = parse_teams(teams_df)
    warnings.extend(validate_cross_file(participants, teams).warnings)

    for w in warnings:
        st.warning(w)

    set_participants(participants)
    set_teams(teams)
    set_assignments([])
    set_explanations({})
    set_standby_ids(set())
    set_run_standby_ids(set())
    set_data_loaded(True)

    add_audit_entry("upload", detail=f"{len(participants)} participants, {len(teams)} teams")
    st.success(f"Roster loaded: {len(participants)} participants, {len(teams)} teams")
    return True


def render(sidebar_state):
    """Render the Admin tab."""
    st.header("Admin")

    # --- Roster Upload ---
    st.subheader("Roster Upload")

    upload_mode = st.radio(
        "Upload mode",
        ["Single Excel file (2 tabs)", "Two separate files"],
        horizontal=True,
        key="upload_mode",
    )

    if upload_mode == "Single Excel file (2 tabs)":
        st.caption("Upload one `.xlsx` file with sheets named **Participants** and **Teams**.")
        single_file = st.file_uploader("Roster workbook", type=["xlsx"], key="upload_single")
        if st.button("Upload & Validate", type="primary", key="btn_upload_single"):
            if single_file:
                try:
                    p_df, t_df = load_roster_workbook(single_file)
                    _load_and_validate(p_df, t_df)
                except Exception as e:
                    st.error(f"Error loading file: {e}")
            else:
                st.warning("Please upload an Excel file.")
    else:
        col1, col2 = st.columns(2)
        with col1:
            participants_file = st.file_uploader(
                "Participants (survey responses)", type=["csv", "xlsx"], key="upload_participants",
            )
        with col2:
            teams_file = st.file_uploader("Teams", type=["csv", "xlsx"], key="upload_teams")

        if st.button("Upload & Validate", type="primary", key="btn_upload_multi"):
            if participants_file and teams_file:
                try:
                    _load_and_validate(load_file(participants_file), load_file(teams_file))
                except Exception as e:
                    st.error(f"Error loading files: {e}")
            else:
                st.warning("Please upload both files.")

    if st.button("Load Sample Data", key="btn_sample"):
        _load_and_validate(generate_participants_df(), generate_teams_df())

    st.divider()

    # --- Rule Configuration ---
    st.subheader("Rule Configuration")
    config = get_rule_config()

    default_max = st.number_input(
        "Default team capacity",
        min_value=1, max_value=100,
        value=int(config.get("default_max_members", DEFAULT_MAX_MEMBERS)),
        key="cfg_default_max",
        help="Used for teams without a Max Members value.",
    )
    include_other = st.checkbox(
        "Include 'other' teams in auto assignment",
        value=bool(config.get("include_other_teams", False)),
        key="cfg_include_other",
    )

    if st.button("Save Rule Configuration"):
        new_config = {
            "default_max_members": int(default_max),
            "include_other_teams": include_other,
        }
        set_rule_config(new_config)
        add_audit_entry("config_change", detail=f"{config} -> {new_config}")
        st.success("Rule configuration saved.")

    st.divider()

    # --- Request Tester ---
    with st.expander("Auto-assign request (JSON)", expanded=False):
        st.caption(
            "Paste a request body with year, formId, participants, teams, "
            "prChoices and includeOther to see the response the handler returns."
        )
        body = st.text_area("Request body", height=200, key="api_request_body")
        if st.button("Send", key="btn_api_send"):
            try:
                payload = json.loads(body or "{}")
            except json.JSONDecodeError as e:
                st.error(f"Invalid JSON: {e}")
            else:
                status, response = handle_auto_assign(payload)
                (st.success if status == 200 else st.error)(f"Status {status}")
                st.json(response)

    st.divider()

    # --- Audit Trail ---
    st.subheader("Audit Trail")

    audit_log = get_audit_log()
    if audit_log:
        audit_data = []
        for entry in reversed(audit_log):
            audit_data.append({
                "Timestamp": entry.timestamp.strftime("%Y-%m-%d %H:%M:%S"),
                "Action": entry.action,
                "Actor": entry.actor,
                "Response ID": entry.response_id or "-",
                "Team": entry.team_id or "-",
                "Detail": entry.detail[:80],
            })
        audit_df = pd.DataFrame(audit_data)
        st.dataframe(audit_df, use_container_width=True, height=300)

        csv = audit_df.to_csv(index=False)
        st.download_button("Export Audit Log (CSV)", csv, "audit_log.csv", "text/csv")
    else:
        st.info("No audit entries yet.")
