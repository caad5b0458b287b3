"""
Binary plan models.

Queue entrants of the global matching queue, binary pairs and the sponsor
directs that decide binary qualification.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

from app.config.business_constants import PAIR_SIZE
from app.models.enums import LegPosition, PairSource, PairStatus


@dataclass(frozen=True)
class QueueEntrant:
    """Position of a participant in the global binary queue."""

    id: str
    name: str
    joined_at: datetime
    queue_position: int
    is_qualified: bool = False


@dataclass(frozen=True)
class BinaryPair:
    """Matched (paid) or pending binary pair."""

    pair_number: int
    left_users: tuple[str, ...]
    right_users: tuple[str, ...]
    amount: Decimal
    date: datetime
    status: PairStatus
    source: PairSource = PairSource.TEAM


@dataclass(frozen=True)
class SponsorDirect:
    """Direct referral placed on one of the sponsor's legs."""

    name: str
    position: LegPosition
    amount: Decimal
    joined_at: datetime
    is_paid: bool = False


@dataclass(frozen=True)
class BinaryLedger:
    """
    Binary plan state of one participant.

    is_qualified is the last recorded qualification value; it is compared
    against incoming values to detect the false -> true edge.
    """

    left_team: tuple[str, ...] = ()
    right_team: tuple[str, ...] = ()
    matched_pairs: tuple[BinaryPair, ...] = ()
    pending_pairs: tuple[BinaryPair, ...] = ()
    is_qualified: bool = False
    queue_position: int | None = None

    @property
    def next_pair_number(self) -> int:
        return len(self.matched_pairs) + len(self.pending_pairs) + 1

    @property
    def total_income(self) -> Decimal:
        return sum((p.amount for p in self.matched_pairs), Decimal("0"))

    @property
    def pending_income(self) -> Decimal:
        return sum((p.amount for p in self.pending_pairs), Decimal("0"))

    def carry_forward(self) -> tuple[tuple[str, ...], tuple[str, ...]]:
        """
        Team members not yet used by any team-leg pair.

        Global queue matches are system pairs and use no team members.

        Returns:
            Tuple of (left carry forward, right carry forward)
        """
        processed = [
            p for p in self.matched_pairs + self.pending_pairs if p.source == PairSource.TEAM
        ]
        used_left = sum(len(p.left_users) for p in processed)
        used_right = sum(len(p.right_users) for p in processed)
        return self.left_team[used_left:], self.right_team[used_right:]

    def available_pairs(self) -> int:
        left, right = self.carry_forward()
        return min(len(left), len(right)) // PAIR_SIZE


def has_paid_direct(directs: tuple[SponsorDirect, ...], position: LegPosition) -> bool:
    return any(d.position == position and d.is_paid for d in directs)


def is_sponsor_qualified(directs: tuple[SponsorDirect, ...]) -> bool:
    """Qualified once at least one paid direct sits on each leg."""
    return has_paid_direct(directs, LegPosition.LEFT) and has_paid_direct(
        directs, LegPosition.RIGHT
    )


@dataclass(frozen=True)
class QueueState:
    """Global binary matching queue, ordered front to back."""

    entrants: tuple[QueueEntrant, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.entrants)

    def first_qualified_index(self) -> int | None:
        for index, entrant in enumerate(self.entrants):
            if entrant.is_qualified:
                return index
        return None

    def position_of(self, entrant_id: str) -> int | None:
        for entrant in self.entrants:
            if entrant.id == entrant_id:
                return entrant.queue_position
        return None

    def contains(self, entrant_id: str) -> bool:
        return self.position_of(entrant_id) is not None
