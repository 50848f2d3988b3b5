"""Schema validation for uploaded roster files."""

from dataclasses import dataclass, field
from typing import List
import pandas as pd

from models.time_slot import TimeSlot
from config.defaults import MIN_GRADE, MAX_GRADE


@dataclass
class ValidationResult:
    is_valid: bool = True
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


PARTICIPANT_REQUIRED_COLUMNS = [
    "Response ID",
    "Name",
    "Section",
    "Grade",
    "Availability",
]

TEAM_REQUIRED_COLUMNS = [
    "Team ID",
    "Team Code",
    "Team Name",
    "Time Slot",
    "Assigned Area",
]


def _check_required_columns(df: pd.DataFrame, required: List[str], file_label: str) -> ValidationResult:
    result = ValidationResult()
    missing = [col for col in required if col not in df.columns]
    if missing:
        result.is_valid = False
        result.errors.append(f"{file_label}: Missing required columns: {', '.join(missing)}")
    if df.empty:
        result.is_valid = False
        result.errors.append(f"{file_label}: File contains no data rows.")
    return result


def validate_participants(df: pd.DataFrame) -> ValidationResult:
    result = _check_required_columns(df, PARTICIPANT_REQUIRED_COLUMNS, "Participants")
    if not result.is_valid:
        return result

    grades = pd.to_numeric(df["Grade"], errors="coerce")
    if grades.isna().any():
        result.is_valid = False
        result.errors.append("Participants: Grade must be a number for every row.")
    elif ((grades < MIN_GRADE) | (grades > MAX_GRADE)).any():
        result.is_valid = False
        result.errors.append(f"Participants: Grade must be between {MIN_GRADE} and {MAX_GRADE}.")

    dupes = df.duplicated(subset=["Response ID"], keep=False)
    if dupes.any():
        result.is_valid = False
        result.errors.append(
            f"Participants: Duplicate response IDs: {df[dupes]['Response ID'].unique().tolist()}"
        )

    return result


def validate_teams(df: pd.DataFrame) -> ValidationResult:
    result = _check_required_columns(df, TEAM_REQUIRED_COLUMNS, "Teams")
    if not result.is_valid:
        return result

    if "Max Members" in df.columns:
        caps = pd.to_numeric(df["Max Members"], errors="coerce")
        if (caps < 0).any():
            result.is_valid = False
            result.errors.append("Teams: Max Members cannot be negative.")

    dupes = df.duplicated(subset=["Team ID"], keep=False)
    if dupes.any():
        result.is_valid = False
        result.errors.append(f"Teams: Duplicate team IDs: {df[dupes]['Team ID'].unique().tolist()}")

    return result


def validate_cross_file(participants, teams) -> ValidationResult:
    """Warn about rosters the engine will only partly place (takes parsed models)."""
    result = ValidationResult()

    unknown = sorted({p.availability for p in participants if p.availability_slot is None})
    if unknown:
        result.warnings.append(
            f"Unrecognized availability values: {', '.join(repr(u) for u in unknown)}. "
            "These participants will be left unassigned."
        )

    assignable = [t for t in teams if t.time_slot not in (TimeSlot.PR, TimeSlot.OTHER)]
    if not assignable:
        result.warnings.append(
            "No morning, afternoon or all-day teams. Auto assignment can only use 'other' teams."
        )

    capacity = sum(t.capacity() for t in assignable)
    if capacity < len(participants):
        result.warnings.append(
            f"Participants ({len(participants)}) exceed capacity of assignable teams ({capacity}). "
            "Some participants will be left unassigned."
        )
    return result
