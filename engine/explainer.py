"""Generates human-readable explanations for team placement decisions."""

from typing import List, Optional, Tuple

from models.participant import Participant
from models.team import Team

STAGE_LABELS = {
    "capacity": "Capacity",
    "load": "Load balancing",
    "section": "Section diversity",
    "grade": "Grade diversity",
    "ranking": "Seniority / preferred grade / team id",
}


def _team_ids(teams: List[Team]) -> str:
    return ", ".join(t.team_id for t in teams) if teams else "none"


def explain_team_choice(
    participant: Participant,
    slot: Optional[str],
    trace: List[Tuple[str, List[Team]]],
) -> List[str]:
    """Produce step-by-step explanation for one participant's placement."""
    steps = []

    if slot is None:
        steps.append(
            f"Step 1 - Time slot: availability '{participant.availability}' "
            f"is not recognized => not assignable"
        )
        return steps

    if participant.is_flexible:
        steps.append(
            f"Step 1 - Time slot: available for both => {slot} "
            f"(fewer {participant.section} members so far)"
        )
    else:
        steps.append(f"Step 1 - Time slot: {slot}")

    for i, (stage, teams) in enumerate(trace, start=2):
        steps.append(f"Step {i} - {STAGE_LABELS.get(stage, stage)}: {_team_ids(teams)}")

    _, survivors = trace[-1] if trace else ("", [])
    if survivors:
        senior_note = " (senior)" if participant.is_senior else ""
        steps.append(f"Result: {survivors[0].team_id} for grade {participant.grade}{senior_note}")
    elif trace:
        steps.append("Result: every candidate team is full => unassigned")
    else:
        steps.append("Result: no candidate teams for this slot => unassigned")

    return steps
