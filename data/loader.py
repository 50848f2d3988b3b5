"""Roster parsing: CSV/XLSX data frames and JSON records into typed models."""

import pandas as pd
from typing import Dict, List, Optional, Tuple

from models.participant import Participant
from models.team import Team
from models.time_slot import Availability, TimeSlot
from config.defaults import AVAILABILITY_ALIASES, TIME_SLOT_ALIASES


def _match_alias(raw: str, aliases: Dict[str, List[str]]) -> Optional[str]:
    v = raw.strip().lower()
    for key, words in aliases.items():
        if any(w in v for w in words):
            return key
    return None


def normalize_availability(raw) -> str:
    """Map a form answer to morning/afternoon/both; unrecognized answers are kept as-is."""
    if raw is None or (not isinstance(raw, str) and pd.isna(raw)):
        return ""
    text = str(raw).strip()
    if Availability.parse(text.lower()) is not None:
        return text.lower()
    return _match_alias(text, AVAILABILITY_ALIASES) or text


def normalize_time_slot(raw, default: TimeSlot = TimeSlot.OTHER) -> TimeSlot:
    """Map a team's time slot label to TimeSlot, falling back to ``default``."""
    if raw is None or (not isinstance(raw, str) and pd.isna(raw)):
        return default
    text = str(raw).strip()
    try:
        return TimeSlot.normalize(text)
    except ValueError:
        pass
    matched = _match_alias(text, TIME_SLOT_ALIASES)
    return TimeSlot(matched) if matched else default


def _split_list(raw) -> List[str]:
    if raw is None:
        return []
    if isinstance(raw, (list, tuple)):
        return [str(x).strip() for x in raw if str(x).strip()]
    if pd.isna(raw):
        return []
    return [part.strip() for part in str(raw).split(",") if part.strip()]


def _parse_grades(raw) -> List[int]:
    return [int(float(g)) for g in _split_list(raw)]


def _optional_int(raw) -> Optional[int]:
    if raw is None or pd.isna(raw) or raw == "":
        return None
    return int(float(raw))


# --- Data frames (uploaded files) ---

def parse_participants(df: pd.DataFrame) -> List[Participant]:
    """Convert a participants DataFrame into Participant objects."""
    participants = []
    for _, row in df.iterrows():
        participants.append(Participant(
            response_id=str(row["Response ID"]).strip(),
            name=str(row["Name"]).strip(),
            section=str(row["Section"]).strip(),
            grade=int(row["Grade"]),
            availability=normalize_availability(row["Availability"]),
        ))
    return participants


def parse_teams(df: pd.DataFrame) -> List[Team]:
    """Convert a teams DataFrame into Team objects."""
    teams = []
    for _, row in df.iterrows():
        teams.append(Team(
            team_id=str(row["Team ID"]).strip(),
            team_code=str(row["Team Code"]).strip(),
            team_name=str(row["Team Name"]).strip(),
            time_slot=normalize_time_slot(row["Time Slot"]),
            assigned_area=str(row["Assigned Area"]).strip() if pd.notna(row["Assigned Area"]) else "",
            adjacent_areas=_split_list(row.get("Adjacent Areas")),
            max_members=_optional_int(row.get("Max Members")),
            preferred_grades=_parse_grades(row.get("Preferred Grades")),
        ))
    return teams


# --- JSON records (auto-assign request body) ---

def participant_from_record(record: dict) -> Participant:
    return Participant(
        response_id=str(record["responseId"]),
        name=str(record.get("name", "")),
        section=str(record.get("section", "")),
        grade=int(record["grade"]),
        availability=normalize_availability(record.get("availability")),
    )


def team_from_record(record: dict) -> Team:
    return Team(
        team_id=str(record["teamId"]),
        team_code=str(record.get("teamCode", "")),
        team_name=str(record.get("teamName", "")),
        time_slot=TimeSlot.normalize(record["timeSlot"]),
        assigned_area=str(record.get("assignedArea", "")),
        adjacent_areas=list(record.get("adjacentAreas") or []),
        max_members=_optional_int(record.get("maxMembers")),
        preferred_grades=[int(g) for g in (record.get("preferredGrades") or [])],
    )


# --- Files ---

def load_file(uploaded_file) -> pd.DataFrame:
    """Load an uploaded file (CSV or XLSX) into a DataFrame."""
    name = uploaded_file.name.lower()
    if name.endswith(".csv"):
        return pd.read_csv(uploaded_file)
    elif name.endswith(".xlsx") or name.endswith(".xls"):
        return pd.read_excel(uploaded_file, engine="openpyxl")
    else:
        raise ValueError(f"Unsupported file format: {name}. Use CSV or XLSX.")


# Expected sheet names for a two-tab workbook (case-insensitive matching)
SHEET_ALIASES = {
    "participants": ["participants", "participant", "responses", "members", "volunteers", "参加者"],
    "teams": ["teams", "team", "班", "チーム"],
}


def _match_sheet(sheet_names: List[str], category: str) -> str:
    """Find a sheet name matching the given category. Returns the matched name or raises."""
    aliases = SHEET_ALIASES[category]
    lower_map = {s.lower().strip(): s for s in sheet_names}
    for alias in aliases:
        if alias in lower_map:
            return lower_map[alias]
    raise ValueError(
        f"Could not find a sheet for '{category}'. "
        f"Expected one of: {aliases}. "
        f"Found sheets: {sheet_names}"
    )


def load_roster_workbook(uploaded_file) -> Tuple[pd.DataFrame, pd.DataFrame]:
    """Load one Excel file with Participants and Teams tabs.

    Returns (participants_df, teams_df).
    """
    xl = pd.ExcelFile(uploaded_file, engine="openpyxl")
    sheet_names = xl.sheet_names

    participants_df = pd.read_excel(xl, sheet_name=_match_sheet(sheet_names, "participants"))
    teams_df = pd.read_excel(xl, sheet_name=_match_sheet(sheet_names, "teams"))
    return participants_df, teams_df
