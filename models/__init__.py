from models.time_slot import TimeSlot, Availability
from models.participant import Participant
from models.team import Team
from models.assignment import Assignment, AssignmentStats
from models.audit import AuditEntry
