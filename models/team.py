from dataclasses import dataclass, field
from typing import List, Optional

from config.defaults import DEFAULT_MAX_MEMBERS
from models.time_slot import TimeSlot


@dataclass
class Team:
    team_id: str
    team_code: str
    team_name: str
    time_slot: TimeSlot
    assigned_area: str = ""
    adjacent_areas: List[str] = field(default_factory=list)
    max_members: Optional[int] = None       # None = DEFAULT_MAX_MEMBERS
    preferred_grades: List[int] = field(default_factory=list)

    def __post_init__(self):
        self.time_slot = TimeSlot.normalize(self.time_slot)

    def capacity(self, default: int = DEFAULT_MAX_MEMBERS) -> int:
        # 0 counts as unset
        return self.max_members if self.max_members else default

    def prefers_grade(self, grade: int) -> bool:
        return grade in (self.preferred_grades or [])
