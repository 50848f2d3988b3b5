from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class AuditEntry:
    timestamp: datetime
    action: str              # "upload", "auto_assign", "manual_assign", "clear"
    actor: str
    response_id: Optional[str]
    team_id: Optional[str]
    detail: str = ""
