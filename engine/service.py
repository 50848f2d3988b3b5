"""Auto-assign request handling: input checks, PR opt-outs, stats."""

import logging
from datetime import datetime
from functools import wraps
from typing import Dict, Iterable, List, Optional, Set, Tuple

from models.participant import Participant
from models.team import Team
from models.assignment import Assignment, AssignmentStats
from engine.assignment_engine import run_auto_assignment, run_auto_assignment_explained
from engine.roster import compute_stats
from data.loader import participant_from_record, team_from_record
from config.defaults import PR_OPT_OUT_CHOICE

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ["year", "formId", "participants", "teams"]


def request_error_handler(f):
    @wraps(f)
    def decorated_function(*args, **kwargs):
        try:
            return f(*args, **kwargs)
        except Exception as e:
            logger.error(f"Unexpected error in '{f.__name__}': {e}", exc_info=True)
            return 500, {"error": "auto assignment failed"}
    return decorated_function


def standby_ids(pr_choices: Optional[Iterable[dict]]) -> Set[str]:
    """Response ids that opted out to wait at headquarters."""
    return {
        str(c["responseId"]) for c in (pr_choices or [])
        if c.get("choice") == PR_OPT_OUT_CHOICE and "responseId" in c
    }


def auto_assign(
    participants: List[Participant],
    teams: List[Team],
    standby: Optional[Set[str]] = None,
    include_other_teams: bool = False,
    rule_config: Optional[dict] = None,
    now: Optional[datetime] = None,
    explain: bool = False,
) -> Tuple[List[Assignment], AssignmentStats, Dict[str, List[str]]]:
    """Drop standby participants, run the engine, and count the outcome.

    Explanations are only collected when ``explain`` is set.
    """
    standby = standby or set()
    eligible = [p for p in participants if p.response_id not in standby]
    explanations: Dict[str, List[str]] = {}
    if explain:
        assignments, explanations = run_auto_assignment_explained(
            eligible, teams, include_other_teams, rule_config, now)
    else:
        assignments = run_auto_assignment(eligible, teams, include_other_teams, rule_config, now)
    stats = compute_stats(len(participants), assignments, standby=len(participants) - len(eligible))
    return assignments, stats, explanations


@request_error_handler
def handle_auto_assign(payload: Dict, now: Optional[datetime] = None) -> Tuple[int, Dict]:
    """Handle an auto-assign request body. Returns (status code, response body)."""
    if not isinstance(payload, dict):
        logger.warning("Auto-assign request body is %s, not an object", type(payload).__name__)
        return 400, {"error": "invalid request body"}

    missing = [k for k in REQUIRED_FIELDS if payload.get(k) in (None, "")]
    if missing:
        logger.warning("Auto-assign request missing %s", ", ".join(missing))
        return 400, {"error": "missing data", "missing": missing}

    try:
        participants = [participant_from_record(r) for r in payload["participants"]]
        teams = [team_from_record(r) for r in payload["teams"]]
        standby = standby_ids(payload.get("prChoices"))
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        logger.warning("Malformed auto-assign request: %s", e)
        return 400, {"error": f"invalid record: {e}"}

    negative = [t.team_id for t in teams if t.max_members is not None and t.max_members < 0]
    if negative:
        logger.warning("Auto-assign request has negative capacity for %s", negative)
        return 400, {"error": "maxMembers cannot be negative", "teams": negative}

    assignments, stats, _ = auto_assign(
        participants,
        teams,
        standby=standby,
        include_other_teams=bool(payload.get("includeOther")),
        now=now,
    )
    return 200, {
        "assignments": [a.to_dict() for a in assignments],
        "stats": stats.to_dict(),
    }
