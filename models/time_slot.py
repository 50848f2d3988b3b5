from enum import Enum
from typing import Optional


class TimeSlot(str, Enum):
    MORNING = "morning"
    AFTERNOON = "afternoon"
    BOTH = "both"
    PR = "pr"
    OTHER = "other"

    @classmethod
    def normalize(cls, value) -> "TimeSlot":
        """Map a raw team time slot to the enum; legacy "all" means "both"."""
        if isinstance(value, cls):
            return value
        raw = str(value).strip().lower()
        if raw == "all":
            return cls.BOTH
        return cls(raw)


class Availability(str, Enum):
    MORNING = "morning"
    AFTERNOON = "afternoon"
    BOTH = "both"

    @classmethod
    def parse(cls, value) -> Optional["Availability"]:
        """Return the availability for a canonical value, or None for anything else.

        Raw form labels go through data.loader.normalize_availability first.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return None
