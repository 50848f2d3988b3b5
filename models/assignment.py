from dataclasses import dataclass, asdict
from datetime import datetime


@dataclass
class Assignment:
    response_id: str
    team_id: str
    assigned_at: datetime
    assigned_by: str   # "auto" or "manual"
    time_slot: str     # "morning" or "afternoon", never "both"

    def to_dict(self) -> dict:
        """camelCase record as returned to the admin client."""
        return {
            "responseId": self.response_id,
            "teamId": self.team_id,
            "assignedAt": self.assigned_at.isoformat(),
            "assignedBy": self.assigned_by,
            "timeSlot": self.time_slot,
        }


@dataclass
class AssignmentStats:
    total: int
    assigned: int
    unassigned: int
    standby: int = 0

    def to_dict(self) -> dict:
        return asdict(self)
