"""
Binary plan services package.

- income: pair award and pending payout helpers
- queue_matcher: global queue rotation and matching
- qualification: edge-triggered qualification hook
- sponsor: sponsor directs and binary teams
- team_matching: pairs from team carry-forward
"""

from app.services.binary.income import award_pair, pay_out_pending
from app.services.binary.qualification import QualificationService
from app.services.binary.queue_matcher import (
    BinaryQueueService,
    QueueMatchOutcome,
    QueueRotation,
    rotate_queue,
)
from app.services.binary.sponsor import SponsorService
from app.services.binary.team_matching import TeamMatchingService


__all__ = [
    "BinaryQueueService",
    "QualificationService",
    "QueueMatchOutcome",
    "QueueRotation",
    "SponsorService",
    "TeamMatchingService",
    "award_pair",
    "pay_out_pending",
    "rotate_queue",
]
