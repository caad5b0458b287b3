"""
Global binary queue matcher.

The match goes to the first qualified entrant from the front. Unqualified
entrants in front of the winner move to the back in their original order,
everyone behind the winner moves up, and the winner leaves the queue.
Positions are renumbered 1..N after every rotation.

Rotation and pair creation run under the queue lock, so neither another
process_queue() call nor a qualification payout can interleave.
"""

from dataclasses import dataclass, field, replace
from decimal import Decimal

from app.config.business_constants import QUEUE_MATCH_LEFT, QUEUE_MATCH_RIGHT
from app.models.binary import BinaryPair, QueueEntrant, QueueState
from app.models.enums import NotificationType, PairSource
from app.services.base_service import BaseService, ServiceResult, log_operation
from app.services.binary.income import award_pair
from app.services.notification.core import build_notification
from app.utils.formatters import format_amount


NO_QUALIFIED_MESSAGE = (
    "Binary queue process ran, but no qualified users were found to receive a match."
)
SKIPPED_MESSAGE = (
    "You missed a binary match as you were not qualified. "
    "You have been moved to the end of the queue."
)


@dataclass(frozen=True)
class QueueRotation:
    """Result of a single rotation."""

    winner: QueueEntrant
    skipped: tuple[QueueEntrant, ...]
    queue: QueueState


@dataclass
class QueueMatchOutcome:
    """What a process_queue() call did."""

    matched: bool
    winner: QueueEntrant | None = None
    pair: BinaryPair | None = None
    amount: Decimal = Decimal("0")
    skipped: list[str] = field(default_factory=list)
    queue_length: int = 0


def rotate_queue(queue: QueueState) -> QueueRotation | None:
    """
    Rotate queue around its first qualified entrant.

    Args:
        queue: Current queue

    Returns:
        QueueRotation, None if nobody in the queue is qualified
    """
    winner_index = queue.first_qualified_index()
    if winner_index is None:
        return None

    entrants = queue.entrants
    skipped = entrants[:winner_index]
    reordered = entrants[winner_index + 1:] + skipped
    renumbered = tuple(
        replace(entrant, queue_position=position)
        for position, entrant in enumerate(reordered, start=1)
    )
    return QueueRotation(
        winner=entrants[winner_index],
        skipped=skipped,
        queue=QueueState(entrants=renumbered),
    )


class BinaryQueueService(BaseService):
    """Global binary matching queue."""

    def get_queue(self) -> QueueState:
        return self.store.queue

    @log_operation
    async def process_queue(self, requested_by: str | None = None) -> ServiceResult:
        """
        Award the next global queue match.

        Explicit operation (admin or participant triggered), never run by
        the sweep scheduler.

        Args:
            requested_by: Participant who triggered the run; gets the
                outcome notification when it is not about themselves

        Returns:
            ServiceResult with QueueMatchOutcome; unsuccessful with
            error_code "no_qualified" when nobody could be matched
        """
        async with self.store.queue_lock:
            rotation = rotate_queue(self.store.queue)
            if rotation is None:
                self.logger.info("Queue processed, no qualified entrants")
                if requested_by is not None:
                    await self._notify(requested_by, NotificationType.SYSTEM, NO_QUALIFIED_MESSAGE)
                return ServiceResult.fail(
                    NO_QUALIFIED_MESSAGE,
                    "no_qualified",
                    data=QueueMatchOutcome(matched=False, queue_length=len(self.store.queue)),
                )

            self.store.put_queue(rotation.queue)
            amount = self.store.config.binary_amount
            winner = rotation.winner
            pair = await self._credit_winner(winner, amount)
            await self._sync_positions(rotation.queue)

            for entrant in rotation.skipped:
                await self._notify(entrant.id, NotificationType.SYSTEM, SKIPPED_MESSAGE)

            if requested_by is not None and requested_by != winner.id:
                await self._notify(
                    requested_by,
                    NotificationType.INCOME,
                    f'User "{winner.name}" received a binary match from the global queue.',
                )

        self.logger.info(
            f"Queue match awarded to {winner.id} ({winner.name}), "
            f"{len(rotation.skipped)} skipped, {len(rotation.queue)} left in queue"
        )
        return ServiceResult.ok(
            QueueMatchOutcome(
                matched=True,
                winner=winner,
                pair=pair,
                amount=amount,
                skipped=[e.id for e in rotation.skipped],
                queue_length=len(rotation.queue),
            )
        )

    async def enqueue(
        self, participant_id: str, name: str, is_qualified: bool = False
    ) -> ServiceResult:
        """
        Append participant to the back of the queue.

        Returns:
            ServiceResult with the new QueueEntrant
        """
        async with self.store.queue_lock:
            if self.store.queue.contains(participant_id):
                return ServiceResult.fail("Participant is already in the queue", "already_queued")

            account = self.store.find_account(participant_id)
            if account is not None:
                is_qualified = account.binary.is_qualified

            entrant = QueueEntrant(
                id=participant_id,
                name=name,
                joined_at=self.now(),
                queue_position=len(self.store.queue) + 1,
                is_qualified=is_qualified,
            )
            self.store.put_queue(
                QueueState(entrants=self.store.queue.entrants + (entrant,))
            )
            await self._set_position(participant_id, entrant.queue_position)

        self.logger.info(f"{participant_id} joined queue at position {entrant.queue_position}")
        return ServiceResult.ok(entrant)

    async def _credit_winner(self, winner: QueueEntrant, amount: Decimal) -> BinaryPair | None:
        async with self.store.account_lock(winner.id):
            account = self.store.find_account(winner.id)
            if account is None:
                return None
            now = self.now()
            account, pair = award_pair(
                account,
                (QUEUE_MATCH_LEFT,),
                (QUEUE_MATCH_RIGHT,),
                amount,
                now,
                f"Global queue match #{account.binary.next_pair_number}",
                source=PairSource.QUEUE,
            )
            account = replace(account, binary=replace(account.binary, queue_position=None))
            account = account.with_notifications(
                build_notification(
                    NotificationType.INCOME,
                    "Congratulations! You received a binary match of "
                    f"{format_amount(amount)} from the global queue.",
                    now,
                )
            )
            self.store.put_account(account)
        return pair

    async def _sync_positions(self, queue: QueueState) -> None:
        for entrant in queue.entrants:
            if self.store.has_account(entrant.id):
                await self._set_position(entrant.id, entrant.queue_position)

    async def _set_position(self, participant_id: str, position: int | None) -> None:
        async with self.store.account_lock(participant_id):
            account = self.store.find_account(participant_id)
            if account is None or account.binary.queue_position == position:
                return
            self.store.put_account(
                replace(account, binary=replace(account.binary, queue_position=position))
            )

    async def _notify(self, participant_id: str, type_: NotificationType, message: str) -> None:
        async with self.store.account_lock(participant_id):
            account = self.store.find_account(participant_id)
            if account is None:
                return
            self.store.put_account(
                account.with_notifications(build_notification(type_, message, self.now()))
            )
