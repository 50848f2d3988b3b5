"""Team roster summaries and assignment statistics for the dashboard."""

from collections import Counter
from typing import Dict, List, Optional, Set

from models.participant import Participant
from models.team import Team
from models.assignment import Assignment, AssignmentStats
from config.defaults import DEFAULT_MAX_MEMBERS, SENIOR_GRADE


def compute_stats(total: int, assignments: List[Assignment], standby: int = 0) -> AssignmentStats:
    assigned = len(assignments)
    return AssignmentStats(
        total=total,
        assigned=assigned,
        unassigned=total - assigned,
        standby=standby,
    )


def count_standby(run_standby: Set[str], assignments: List[Assignment]) -> int:
    """Standby participants from the last run who have not since been placed by hand."""
    placed = {a.response_id for a in assignments}
    return len(set(run_standby) - placed)


def get_team_rosters(
    teams: List[Team],
    participants: List[Participant],
    assignments: List[Assignment],
    rule_config: Optional[dict] = None,
) -> List[dict]:
    """Compute membership stats per team."""
    cfg = rule_config or {}
    default_max = cfg.get("default_max_members", DEFAULT_MAX_MEMBERS)
    people = {p.response_id: p for p in participants}

    members: Dict[str, List[Participant]] = {}
    for a in assignments:
        p = people.get(a.response_id)
        if p is not None:
            members.setdefault(a.team_id, []).append(p)

    results = []
    for t in teams:
        team_members = members.get(t.team_id, [])
        capacity = t.capacity(default_max)
        results.append({
            "team_id": t.team_id,
            "team_code": t.team_code,
            "team_name": t.team_name,
            "time_slot": t.time_slot.value,
            "assigned_area": t.assigned_area,
            "member_count": len(team_members),
            "capacity": capacity,
            "fill_pct": len(team_members) / capacity if capacity > 0 else 0,
            "senior_count": sum(1 for p in team_members if p.grade >= SENIOR_GRADE),
            "sections": dict(Counter(p.section for p in team_members)),
            "grades": dict(Counter(p.grade for p in team_members)),
            "members": sorted(p.name for p in team_members),
        })
    return results


def get_slot_summary(assignments: List[Assignment]) -> Dict[str, int]:
    counts = Counter(a.time_slot for a in assignments)
    return {"morning": counts.get("morning", 0), "afternoon": counts.get("afternoon", 0)}


def get_unassigned(
    participants: List[Participant],
    assignments: List[Assignment],
) -> List[Participant]:
    placed = {a.response_id for a in assignments}
    return [p for p in participants if p.response_id not in placed]
