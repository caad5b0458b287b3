"""
Binary qualification hook.

Qualification comes from sponsor directs (one paid direct on each leg).
The hook compares the incoming value with the last recorded one and pays
out pending pairs only on the false -> true edge.
"""

from dataclasses import replace
from decimal import Decimal

from app.models.binary import QueueState
from app.services.base_service import BaseService, ServiceResult
from app.services.binary.income import pay_out_pending


class QualificationService(BaseService):
    """Edge-triggered reaction to qualification changes."""

    async def on_qualification_change(
        self, participant_id: str, is_qualified: bool
    ) -> ServiceResult:
        """
        Record the participant's qualification value.

        Args:
            participant_id: Participant
            is_qualified: Current sponsor qualification

        Returns:
            ServiceResult with the amount paid out (0 when nothing changed)
        """
        async with self.store.queue_lock:
            async with self.store.account_lock(participant_id):
                account = self.store.find_account(participant_id)
                if account is None:
                    return ServiceResult.fail("Participant not found", "not_found")

                previous = account.binary.is_qualified
                if previous == is_qualified:
                    return ServiceResult.ok(Decimal("0"))

                account = replace(
                    account, binary=replace(account.binary, is_qualified=is_qualified)
                )
                paid_out = Decimal("0")
                if is_qualified:
                    account, paid_out = pay_out_pending(account, self.now())
                self.store.put_account(account)

            self._sync_entrant(participant_id, is_qualified)

        if paid_out:
            self.logger.info(f"{participant_id} qualified, pending income {paid_out} paid out")
        else:
            self.logger.info(f"{participant_id} qualification changed to {is_qualified}")
        return ServiceResult.ok(paid_out)

    def _sync_entrant(self, participant_id: str, is_qualified: bool) -> None:
        queue = self.store.queue
        if not queue.contains(participant_id):
            return
        self.store.put_queue(
            QueueState(
                entrants=tuple(
                    replace(e, is_qualified=is_qualified) if e.id == participant_id else e
                    for e in queue.entrants
                )
            )
        )
