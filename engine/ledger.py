"""Stored assignment list operations: manual placement and clearing."""

from datetime import datetime
from typing import List, Optional, Tuple

from models.assignment import Assignment
from config.defaults import ASSIGNABLE_SLOTS


def assign_manually(
    assignments: List[Assignment],
    response_id: str,
    team_id: str,
    time_slot: str,
    now: Optional[datetime] = None,
) -> List[Assignment]:
    """Place one participant by hand, replacing any assignment they already have."""
    if time_slot not in ASSIGNABLE_SLOTS:
        raise ValueError(f"time_slot must be one of {ASSIGNABLE_SLOTS}, got {time_slot!r}")

    kept = [a for a in assignments if a.response_id != response_id]
    kept.append(Assignment(
        response_id=response_id,
        team_id=team_id,
        assigned_at=now or datetime.now(),
        assigned_by="manual",
        time_slot=time_slot,
    ))
    return kept


def clear_assignments(
    assignments: List[Assignment],
    team_id: Optional[str] = None,
) -> Tuple[List[Assignment], int]:
    """Drop all assignments (or only one team's). Returns (remaining, deleted count)."""
    if team_id is None:
        return [], len(assignments)
    remaining = [a for a in assignments if a.team_id != team_id]
    return remaining, len(assignments) - len(remaining)


def assignments_for_team(assignments: List[Assignment], team_id: str) -> List[Assignment]:
    return [a for a in assignments if a.team_id == team_id]
