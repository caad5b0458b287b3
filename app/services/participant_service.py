"""
Participant directory service.

Admin-facing statuses (active / pending / on_hold) and notes of every known
participant. Receivers are put on hold when a matrix confirmation escalates
to a dispute and released when the dispute is resolved.
"""

from collections.abc import Iterable
from dataclasses import replace

from app.models.enums import ParticipantStatus
from app.models.participant import ParticipantRecord
from app.services.base_service import BaseService, ServiceResult


class DirectoryService(BaseService):
    """Directory of participants."""

    def get(self, participant_id: str) -> ParticipantRecord | None:
        return self.store.directory.get(participant_id)

    def list_records(self, status: ParticipantStatus | None = None) -> list[ParticipantRecord]:
        records = sorted(self.store.directory.values(), key=lambda r: r.joined_at)
        if status is None:
            return records
        return [r for r in records if r.status == status]

    async def register(self, record: ParticipantRecord) -> ServiceResult:
        async with self.store.directory_lock:
            if record.id in self.store.directory:
                return ServiceResult.fail("Participant already registered", "already_registered")
            self.store.put_record(record)
        self.logger.info(f"Participant {record.id} added to directory")
        return ServiceResult.ok(record)

    async def put_on_hold(self, participant_ids: Iterable[str]) -> list[str]:
        """
        Put receivers on hold.

        Args:
            participant_ids: Receivers with an escalated dispute

        Returns:
            Ids whose status changed
        """
        changed = []
        async with self.store.directory_lock:
            for participant_id in participant_ids:
                record = self.store.directory.get(participant_id)
                if record is None:
                    self.logger.debug(f"Receiver {participant_id} not in directory, hold skipped")
                    continue
                if record.status != ParticipantStatus.ON_HOLD:
                    self.store.put_record(replace(record, status=ParticipantStatus.ON_HOLD))
                    changed.append(participant_id)
        if changed:
            self.logger.warning(f"Participants put on hold: {', '.join(changed)}")
        return changed

    async def release_hold(self, participant_id: str) -> bool:
        """Return a receiver to active after dispute resolution."""
        async with self.store.directory_lock:
            record = self.store.directory.get(participant_id)
            if record is None:
                return False
            self.store.put_record(replace(record, status=ParticipantStatus.ACTIVE))
        self.logger.info(f"Participant {participant_id} released from hold")
        return True

    async def mark_active(self, participant_id: str) -> bool:
        """Mark a participant active once their account is activated."""
        async with self.store.directory_lock:
            record = self.store.directory.get(participant_id)
            if record is None or record.status != ParticipantStatus.PENDING:
                return False
            self.store.put_record(replace(record, status=ParticipantStatus.ACTIVE))
        self.logger.info(f"Participant {participant_id} activated")
        return True

    async def save_notes(self, participant_id: str, notes: str) -> ServiceResult:
        async with self.store.directory_lock:
            record = self.store.directory.get(participant_id)
            if record is None:
                return ServiceResult.fail("Participant not found", "not_found")
            updated = replace(record, notes=notes.strip())
            self.store.put_record(updated)
        return ServiceResult.ok(updated)
