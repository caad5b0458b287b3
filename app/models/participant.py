"""
Participant directory record.

Admin-facing view of every known participant, including receivers that do
not hold an account in this process.
"""

from dataclasses import dataclass
from datetime import datetime

from app.models.enums import ParticipantStatus


@dataclass(frozen=True)
class ParticipantRecord:
    id: str
    name: str
    joined_at: datetime
    status: ParticipantStatus = ParticipantStatus.PENDING
    notes: str = ""
