"""
Team-leg binary matching.

Pairs are formed from the carry-forward of a participant's own teams, three
members from each leg per pair. Income follows the participant's
qualification: paid at once or held as a pending pair.
"""

from app.config.business_constants import PAIR_SIZE
from app.models.binary import BinaryPair
from app.models.enums import NotificationType, PairStatus
from app.services.base_service import BaseService, ServiceResult
from app.services.binary.income import award_pair
from app.services.notification.core import build_notification
from app.utils.formatters import format_amount


class TeamMatchingService(BaseService):
    """Binary pairs from left/right team carry-forward."""

    async def match_team_legs(self, participant_id: str) -> ServiceResult:
        """
        Form every pair the carry-forward allows.

        Args:
            participant_id: Earning participant

        Returns:
            ServiceResult with the list of created pairs
        """
        pairs: list[BinaryPair] = []
        async with self.store.queue_lock:
            async with self.store.account_lock(participant_id):
                account = self.store.find_account(participant_id)
                if account is None:
                    return ServiceResult.fail("Participant not found", "not_found")
                amount = self.store.config.binary_amount
                now = self.now()

                while account.binary.available_pairs() > 0:
                    left, right = account.binary.carry_forward()
                    left_users, right_users = left[:PAIR_SIZE], right[:PAIR_SIZE]
                    account, pair = award_pair(
                        account,
                        left_users,
                        right_users,
                        amount,
                        now,
                        f"Left: {', '.join(left_users)}, Right: {', '.join(right_users)}",
                    )
                    if pair.status == PairStatus.PAID:
                        message = (
                            f"Binary pair #{pair.pair_number} matched. "
                            f"{format_amount(amount)} has been credited."
                        )
                        type_ = NotificationType.INCOME
                    else:
                        message = (
                            f"Binary pair #{pair.pair_number} matched. Income of "
                            f"{format_amount(amount)} is held until you qualify."
                        )
                        type_ = NotificationType.SYSTEM
                    account = account.with_notifications(build_notification(type_, message, now))
                    pairs.append(pair)

                self.store.put_account(account)

        if pairs:
            self.logger.info(f"{len(pairs)} team pair(s) formed for {participant_id}")
        return ServiceResult.ok(pairs)
