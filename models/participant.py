from dataclasses import dataclass
from typing import Optional

from config.defaults import SENIOR_GRADE
from models.time_slot import Availability


@dataclass
class Participant:
    response_id: str
    name: str
    section: str
    grade: int                 # 1-4
    availability: str          # "morning", "afternoon", "both"; anything else is unassignable

    @property
    def is_senior(self) -> bool:
        return self.grade >= SENIOR_GRADE

    @property
    def availability_slot(self) -> Optional[Availability]:
        return Availability.parse(self.availability)

    @property
    def is_flexible(self) -> bool:
        return self.availability_slot is Availability.BOTH
