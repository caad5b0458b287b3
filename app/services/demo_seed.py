"""
Demo seed data.

Initial state of the Payback247 demo: one local participant (John Doe) with
fresh activation slots, binary teams, one matched and one pending pair,
three sponsor directs, a fifteen-entrant global queue and the admin
directory.
"""

import random
from datetime import UTC, datetime, timedelta
from decimal import Decimal

from app.config.business_constants import LEDGER_DATE_FORMAT
from app.models.account import AccountState
from app.models.binary import (
    BinaryLedger,
    BinaryPair,
    QueueEntrant,
    QueueState,
    SponsorDirect,
)
from app.models.enums import (
    LegPosition,
    NotificationType,
    PairStatus,
    ParticipantStatus,
    TransactionStatus,
)
from app.models.ledger import Notification, Transaction
from app.models.participant import ParticipantRecord
from app.models.system_config import AdminPaymentOption, SystemConfig
from app.services.payment.issuer import issue_payments
from app.services.snapshot_service import PlatformSnapshot


DEMO_PARTICIPANT_NAME = "John Doe"

QUEUE_ENTRANTS = [
    ("bq_1", "Kevin H.", "2024-02-21 10:00", False),
    ("bq_2", "Linda J.", "2024-02-21 11:15", True),
    ("bq_3", "Paul W.", "2024-02-21 12:30", True),
    ("bq_4", "Chris P.", "2024-02-21 14:00", False),
    ("bq_6", "Nancy R.", "2024-02-22 09:00", True),
    ("bq_7", "George K.", "2024-02-22 10:20", True),
    ("bq_8", "Helen Z.", "2024-02-22 11:00", False),
    ("bq_9", "Mark T.", "2024-02-22 12:15", True),
    ("bq_10", "Susan B.", "2024-02-22 13:30", False),
    ("bq_11", "Richard M.", "2024-02-22 14:45", True),
    ("bq_12", "Karen L.", "2024-02-22 16:00", True),
    ("bq_5", DEMO_PARTICIPANT_NAME, "2024-02-22 17:15", False),
    ("bq_13", "Steven H.", "2024-02-23 09:00", True),
    ("bq_14", "Laura P.", "2024-02-23 10:30", False),
    ("bq_15", "Daniel G.", "2024-02-23 11:45", True),
]

DIRECTORY = [
    ("usr_01", "Alice Johnson", "2024-02-01", ParticipantStatus.ACTIVE,
     "Top performer, potential team leader."),
    ("usr_02", "Bob Williams", "2024-02-05", ParticipantStatus.ACTIVE,
     "Needs follow-up on remaining payments."),
    ("usr_03", "Charlie Brown", "2024-02-10", ParticipantStatus.ACTIVE, ""),
    ("usr_04", "Diana Miller", "2024-02-12", ParticipantStatus.PENDING,
     "Contacted support on 2024-02-15 regarding payment issue."),
    ("usr_05", "Ethan Davis", "2024-02-18", ParticipantStatus.ACTIVE, ""),
    ("usr_06", "Fiona Green", "2024-02-20", ParticipantStatus.PENDING,
     "Last payment pending since 2024-02-22."),
    ("usr_07", "George King", "2024-02-21", ParticipantStatus.ACTIVE, ""),
]

TRANSACTIONS = [
    ("2024-01-15 10:30", "matrix", "Level-01-0-15 from User A", 500),
    ("2024-01-14 14:20", "sponsor", "Level 1 User B, Right User C", 500),
    ("2024-01-13 09:15", "binary", "Left: User B, Right: User C", 1000),
    ("2024-01-12 16:45", "binary", "Direct referral: User D", 1000),
    ("2024-01-11 11:30", "sponsor", "Direct referral: from User E", 500),
    ("2024-01-10 11:30", "matrix", "Level 2 User B from User E", 500),
    ("2024-01-09 11:30", "matrix", "Level 3 User from User F", 500),
    ("2024-01-08 11:30", "binary", "Left: User X, Right: User Y", 500),
]

SPONSOR_DIRECTS = [
    ("2024-01-05 11:30", "User A", LegPosition.RIGHT, False),
    ("2023-12-28 14:20", "User B", LegPosition.LEFT, True),
    ("2024-01-13 09:15", "User D", LegPosition.LEFT, False),
]


def _parse(value: str) -> datetime:
    fmt = LEDGER_DATE_FORMAT if " " in value else "%Y-%m-%d"
    return datetime.strptime(value, fmt).replace(tzinfo=UTC)


def build_demo_queue() -> QueueState:
    return QueueState(
        entrants=tuple(
            QueueEntrant(
                id=entrant_id,
                name=name,
                joined_at=_parse(joined),
                queue_position=position,
                is_qualified=qualified,
            )
            for position, (entrant_id, name, joined, qualified) in enumerate(
                QUEUE_ENTRANTS, start=1
            )
        )
    )


def build_demo_account(
    participant_id: str,
    config: SystemConfig,
    options: tuple[AdminPaymentOption, ...],
    now: datetime,
    rng: random.Random,
    queue_position: int | None,
) -> AccountState:
    binary = BinaryLedger(
        left_team=("User B", "User X", "User L1", "User L2", "User L3", "User L4", "User L5"),
        right_team=("User C", "User Y", "User R1", "User R2", "User R3", "User R4"),
        matched_pairs=(
            BinaryPair(
                pair_number=1,
                left_users=("User B", "User X", "User L1"),
                right_users=("User C", "User Y", "User R1"),
                amount=Decimal("1000"),
                date=_parse("2024-01-14 14:20"),
                status=PairStatus.PAID,
            ),
        ),
        pending_pairs=(
            BinaryPair(
                pair_number=2,
                left_users=("User L2", "User L3", "User L4"),
                right_users=("User R2", "User R3", "User R4"),
                amount=Decimal("1000"),
                date=_parse("2024-02-10 18:00"),
                status=PairStatus.PENDING,
            ),
        ),
        is_qualified=False,
        queue_position=queue_position,
    )

    notifications = (
        Notification(
            id="n1",
            type=NotificationType.PAYMENT_RECEIVED,
            message='"Alice J." has sent you a referral payment of ₹1,000.',
            timestamp=now - timedelta(minutes=5),
        ),
        Notification(
            id="n2",
            type=NotificationType.REFERRAL,
            message='A new user "Charlie B." has joined your right team.',
            timestamp=now - timedelta(minutes=30),
        ),
        Notification(
            id="n3",
            type=NotificationType.INCOME,
            message="You have received a matrix income of ₹500 from Level 2.",
            timestamp=now - timedelta(hours=2),
            is_read=True,
        ),
        Notification(
            id="n4",
            type=NotificationType.SYSTEM,
            message="Welcome to Payback247! Complete your payments to get started.",
            timestamp=now - timedelta(days=1),
            is_read=True,
        ),
    )

    return AccountState(
        participant_id=participant_id,
        display_name=DEMO_PARTICIPANT_NAME,
        payments=issue_payments(config, options, now, rng),
        transactions=tuple(
            Transaction(
                date=date,
                type=type_,
                details=details,
                amount=Decimal(amount),
                status=TransactionStatus.PAID,
            )
            for date, type_, details, amount in TRANSACTIONS
        ),
        notifications=notifications,
        binary=binary,
        sponsor_directs=tuple(
            SponsorDirect(
                name=name,
                position=position,
                amount=Decimal("1000"),
                joined_at=_parse(joined),
                is_paid=paid,
            )
            for joined, name, position, paid in SPONSOR_DIRECTS
        ),
    )


def build_demo_state(
    now: datetime,
    rng: random.Random,
    participant_id: str = "bq_5",
    config: SystemConfig | None = None,
    options: tuple[AdminPaymentOption, ...] | None = None,
) -> PlatformSnapshot:
    """
    Build full demo state.

    Args:
        now: Issue moment of the demo participant's slots
        rng: Random source
        participant_id: Id of the local demo participant
        config: System config (defaults)
        options: Admin payment options (defaults)

    Returns:
        PlatformSnapshot ready for PlatformStore.replace_all
    """
    base = PlatformSnapshot()
    config = config or base.config
    options = options if options is not None else base.payment_options
    queue = build_demo_queue()

    directory = {
        user_id: ParticipantRecord(
            id=user_id, name=name, joined_at=_parse(joined), status=status, notes=notes
        )
        for user_id, name, joined, status, notes in DIRECTORY
    }
    directory[participant_id] = ParticipantRecord(
        id=participant_id, name=DEMO_PARTICIPANT_NAME, joined_at=_parse("2024-01-01")
    )

    account = build_demo_account(
        participant_id, config, options, now, rng, queue.position_of(participant_id)
    )
    return PlatformSnapshot(
        config=config,
        payment_options=options,
        accounts={participant_id: account},
        queue=queue,
        directory=directory,
    )
