"""Typed wrapper around st.session_state for application data."""

import streamlit as st
from typing import Dict, List, Optional, Set
from datetime import datetime
from models.participant import Participant
from models.team import Team
from models.assignment import Assignment
from models.audit import AuditEntry
from config.defaults import DEFAULT_MAX_MEMBERS, INCLUDE_OTHER_TEAMS


def initialize_session_state():
    """Initialize all session state keys with defaults."""
    defaults = {
        "participants": [],
        "teams": [],
        "assignments": [],
        "standby_ids": set(),
        "run_standby_ids": set(),
        "explanations": {},
        "audit_log": [],
        "data_loaded": False,
        "rule_config": {
            "default_max_members": DEFAULT_MAX_MEMBERS,
            "include_other_teams": INCLUDE_OTHER_TEAMS,
        },
        "sidebar_state": {
            "year": datetime.now().year,
            "form_id": "",
        },
    }
    for key, default in defaults.items():
        if key not in st.session_state:
            st.session_state[key] = default


# --- Getters ---

def get_participants() -> List[Participant]:
    return st.session_state.get("participants", [])


def get_teams() -> List[Team]:
    return st.session_state.get("teams", [])


def get_assignments() -> List[Assignment]:
    return st.session_state.get("assignments", [])


def get_standby_ids() -> Set[str]:
    return st.session_state.get("standby_ids", set())


def get_run_standby_ids() -> Set[str]:
    """Standby set used by the last auto run (not the current selection)."""
    return st.session_state.get("run_standby_ids", set())


def get_explanations() -> Dict[str, List[str]]:
    return st.session_state.get("explanations", {})


def get_audit_log() -> List[AuditEntry]:
    return st.session_state.get("audit_log", [])


def get_rule_config() -> dict:
    return st.session_state.get("rule_config", {})


def is_data_loaded() -> bool:
    return st.session_state.get("data_loaded", False)


# --- Setters ---

def set_participants(participants: List[Participant]):
    st.session_state["participants"] = participants


def set_teams(teams: List[Team]):
    st.session_state["teams"] = teams


def set_assignments(assignments: List[Assignment]):
    st.session_state["assignments"] = assignments


def set_standby_ids(ids: Set[str]):
    st.session_state["standby_ids"] = set(ids)


def set_run_standby_ids(ids: Set[str]):
    st.session_state["run_standby_ids"] = set(ids)


def set_explanations(explanations: Dict[str, List[str]]):
    st.session_state["explanations"] = explanations


def set_data_loaded(loaded: bool):
    st.session_state["data_loaded"] = loaded


def set_rule_config(config: dict):
    st.session_state["rule_config"] = config


# --- Audit ---

def add_audit_entry(
    action: str,
    detail: str = "",
    response_id: Optional[str] = None,
    team_id: Optional[str] = None,
    actor: str = "admin",
):
    entry = AuditEntry(
        timestamp=datetime.now(),
        action=action,
        actor=actor,
        response_id=response_id,
        team_id=team_id,
        detail=detail,
    )
    st.session_state["audit_log"].append(entry)
