"""Automatic team assignment: the core placement engine.

Participants are ordered by how hard they are to place, then placed one at a
time. Each placement reads and updates an AssignmentCounters accumulator, so
the run is strictly sequential.
"""

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional, Set, Tuple

from models.participant import Participant
from models.team import Team
from models.assignment import Assignment
from models.time_slot import Availability, TimeSlot
from engine.explainer import explain_team_choice
from config.defaults import DEFAULT_MAX_MEMBERS, INCLUDE_OTHER_TEAMS

logger = logging.getLogger(__name__)


@dataclass
class TeamPools:
    """Teams eligible for auto assignment, split by time slot."""
    morning: List[Team] = field(default_factory=list)
    afternoon: List[Team] = field(default_factory=list)
    all_day: List[Team] = field(default_factory=list)
    other: List[Team] = field(default_factory=list)

    def candidates_for(self, slot: str) -> List[Team]:
        slot_pool = self.morning if slot == Availability.MORNING.value else self.afternoon
        return slot_pool + self.all_day + self.other


@dataclass
class AssignmentCounters:
    """Running tallies for a single run. Created empty, discarded afterwards."""
    team_members: Dict[str, int] = field(default_factory=lambda: defaultdict(int))
    team_seniors: Dict[str, int] = field(default_factory=lambda: defaultdict(int))
    section_slots: Dict[str, Dict[str, int]] = field(
        default_factory=lambda: defaultdict(lambda: defaultdict(int)))
    team_sections: Dict[str, Dict[str, int]] = field(
        default_factory=lambda: defaultdict(lambda: defaultdict(int)))
    team_grades: Dict[str, Dict[int, int]] = field(
        default_factory=lambda: defaultdict(lambda: defaultdict(int)))
    placed: Set[str] = field(default_factory=set)

    def members(self, team_id: str) -> int:
        return self.team_members.get(team_id, 0)

    def seniors(self, team_id: str) -> int:
        return self.team_seniors.get(team_id, 0)

    def section_count(self, team_id: str, section: str) -> int:
        return self.team_sections.get(team_id, {}).get(section, 0)

    def grade_count(self, team_id: str, grade: int) -> int:
        return self.team_grades.get(team_id, {}).get(grade, 0)

    def section_slot_count(self, section: str, slot: str) -> int:
        return self.section_slots.get(section, {}).get(slot, 0)

    def record(self, participant: Participant, team: Team, slot: str):
        self.team_members[team.team_id] += 1
        if participant.is_senior:
            self.team_seniors[team.team_id] += 1
        self.section_slots[participant.section][slot] += 1
        self.team_sections[team.team_id][participant.section] += 1
        self.team_grades[team.team_id][participant.grade] += 1
        self.placed.add(participant.response_id)


# --- Setup ---

def check_team_capacities(teams: List[Team]):
    """Negative capacity means the caller skipped validation; fail fast."""
    for team in teams:
        if team.max_members is not None and team.max_members < 0:
            raise ValueError(
                f"Team {team.team_id} has negative max_members ({team.max_members})"
            )


def partition_teams(teams: List[Team], include_other_teams: bool = False) -> TeamPools:
    """Step 1: split teams into slot pools. PR teams never enter a pool."""
    pools = TeamPools()
    for team in teams:
        slot = team.time_slot
        if slot == TimeSlot.MORNING:
            pools.morning.append(team)
        elif slot == TimeSlot.AFTERNOON:
            pools.afternoon.append(team)
        elif slot == TimeSlot.BOTH:
            pools.all_day.append(team)
        elif slot == TimeSlot.OTHER and include_other_teams:
            pools.other.append(team)
    return pools


def sort_participants(participants: List[Participant]) -> List[Participant]:
    """Step 2: seniors first, then fixed-slot before flexible.

    Response id breaks the remaining ties so that shuffling the input does not
    change the result.
    """
    return sorted(
        participants,
        key=lambda p: (0 if p.is_senior else 1, 1 if p.is_flexible else 0, str(p.response_id)),
    )


def resolve_time_slot(participant: Participant, counters: AssignmentCounters) -> Optional[str]:
    """Pick the slot a participant will be assigned to, or None if unassignable.

    Flexible participants go to whichever slot has seen fewer members of their
    section so far (ties go to morning).
    """
    slot = participant.availability_slot
    if slot in (Availability.MORNING, Availability.AFTERNOON):
        return slot.value
    if slot is Availability.BOTH:
        morning = counters.section_slot_count(participant.section, Availability.MORNING.value)
        afternoon = counters.section_slot_count(participant.section, Availability.AFTERNOON.value)
        return Availability.MORNING.value if morning <= afternoon else Availability.AFTERNOON.value
    return None


# --- Best-team cascade ---

def _keep_min(teams: List[Team], key) -> List[Team]:
    if not teams:
        return []
    lowest = min(key(t) for t in teams)
    return [t for t in teams if key(t) == lowest]


def filter_by_capacity(
    teams: List[Team],
    counters: AssignmentCounters,
    default_max_members: int = DEFAULT_MAX_MEMBERS,
) -> List[Team]:
    return [t for t in teams if counters.members(t.team_id) < t.capacity(default_max_members)]


def keep_least_loaded(teams: List[Team], counters: AssignmentCounters) -> List[Team]:
    return _keep_min(teams, lambda t: counters.members(t.team_id))


def keep_fewest_same_section(
    teams: List[Team], participant: Participant, counters: AssignmentCounters,
) -> List[Team]:
    return _keep_min(teams, lambda t: counters.section_count(t.team_id, participant.section))


def keep_fewest_same_grade(
    teams: List[Team], participant: Participant, counters: AssignmentCounters,
) -> List[Team]:
    return _keep_min(teams, lambda t: counters.grade_count(t.team_id, participant.grade))


def rank_candidates(
    teams: List[Team], participant: Participant, counters: AssignmentCounters,
) -> List[Team]:
    """Soft ordering: senior-less teams for seniors, preferred grade, then team id."""
    def sort_key(team: Team) -> Tuple[int, int, str]:
        needs_senior = participant.is_senior and counters.seniors(team.team_id) == 0
        return (
            0 if needs_senior else 1,
            0 if team.prefers_grade(participant.grade) else 1,
            team.team_id,
        )
    return sorted(teams, key=sort_key)


def trace_cascade(
    candidates: List[Team],
    participant: Participant,
    counters: AssignmentCounters,
    rule_config: Optional[dict] = None,
) -> List[Tuple[str, List[Team]]]:
    """Run every cascade stage, returning (stage name, surviving teams) pairs.

    Empty when there are no candidates; stops after the capacity stage when no
    team has room.
    """
    if not candidates:
        return []
    cfg = rule_config or {}
    default_max = cfg.get("default_max_members", DEFAULT_MAX_MEMBERS)

    trace = []
    teams = filter_by_capacity(candidates, counters, default_max)
    trace.append(("capacity", teams))
    if not teams:
        return trace

    teams = keep_least_loaded(teams, counters)
    trace.append(("load", teams))
    teams = keep_fewest_same_section(teams, participant, counters)
    trace.append(("section", teams))
    teams = keep_fewest_same_grade(teams, participant, counters)
    trace.append(("grade", teams))
    teams = rank_candidates(teams, participant, counters)
    trace.append(("ranking", teams))
    return trace


def select_best_team(
    candidates: List[Team],
    participant: Participant,
    counters: AssignmentCounters,
    rule_config: Optional[dict] = None,
) -> Optional[Team]:
    """Pick the best team for a participant, or None if every candidate is full."""
    trace = trace_cascade(candidates, participant, counters, rule_config)
    if not trace:
        return None
    _, survivors = trace[-1]
    return survivors[0] if survivors else None


# --- Placement ---

def place_participant(
    participant: Participant,
    pools: TeamPools,
    counters: AssignmentCounters,
    assigned_at: datetime,
    rule_config: Optional[dict] = None,
) -> Optional[Assignment]:
    """Step 3 for a single participant. Updates counters when a team is found."""
    if participant.response_id in counters.placed:
        return None

    slot = resolve_time_slot(participant, counters)
    if slot is None:
        logger.debug("Skipping %s: unrecognized availability %r",
                     participant.response_id, participant.availability)
        return None

    candidates = pools.candidates_for(slot)
    team = select_best_team(candidates, participant, counters, rule_config)
    if team is None:
        logger.debug("No team with room for %s (%s)", participant.response_id, slot)
        return None

    counters.record(participant, team, slot)
    return Assignment(
        response_id=participant.response_id,
        team_id=team.team_id,
        assigned_at=assigned_at,
        assigned_by="auto",
        time_slot=slot,
    )


def _run(
    participants: List[Participant],
    teams: List[Team],
    include_other_teams: Optional[bool],
    rule_config: Optional[dict],
    now: Optional[datetime],
    explain: bool,
) -> Tuple[List[Assignment], Dict[str, List[str]]]:
    cfg = rule_config or {}
    if include_other_teams is None:
        include_other_teams = cfg.get("include_other_teams", INCLUDE_OTHER_TEAMS)

    assignments: List[Assignment] = []
    explanations: Dict[str, List[str]] = {}
    if not participants or not teams:
        return assignments, explanations

    check_team_capacities(teams)
    pools = partition_teams(teams, include_other_teams)
    counters = AssignmentCounters()
    assigned_at = now or datetime.now()

    for participant in sort_participants(participants):
        if explain and participant.response_id not in counters.placed:
            slot = resolve_time_slot(participant, counters)
            candidates = pools.candidates_for(slot) if slot else []
            explanations[participant.response_id] = explain_team_choice(
                participant, slot, trace_cascade(candidates, participant, counters, cfg)
            )
        assignment = place_participant(participant, pools, counters, assigned_at, cfg)
        if assignment is not None:
            assignments.append(assignment)

    logger.info(
        "Auto assignment: %d participants, %d teams, %d assigned, %d unassigned",
        len(participants), len(teams), len(assignments), len(participants) - len(assignments),
    )
    return assignments, explanations


def run_auto_assignment(
    participants: List[Participant],
    teams: List[Team],
    include_other_teams: Optional[bool] = None,
    rule_config: Optional[dict] = None,
    now: Optional[datetime] = None,
) -> List[Assignment]:
    """Place participants into teams. Unplaceable participants are left out."""
    assignments, _ = _run(participants, teams, include_other_teams, rule_config, now, explain=False)
    return assignments


def run_auto_assignment_explained(
    participants: List[Participant],
    teams: List[Team],
    include_other_teams: Optional[bool] = None,
    rule_config: Optional[dict] = None,
    now: Optional[datetime] = None,
) -> Tuple[List[Assignment], Dict[str, List[str]]]:
    """Same as run_auto_assignment, plus per-participant explanation steps."""
    return _run(participants, teams, include_other_teams, rule_config, now, explain=True)
