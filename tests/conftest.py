"""Pytest configuration and shared fixtures for all tests."""

import os
import random
import sys
from datetime import UTC, datetime
from pathlib import Path

# Minimal environment for tests
os.environ.setdefault("TELEGRAM_BOT_TOKEN", "123456789:ABCdefGHIjklMNOpqrsTUVwxyz123456789")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("ADMIN_TELEGRAM_IDS", "123456789")

# Add project root to PYTHONPATH
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402

from app.models.enums import ParticipantStatus  # noqa: E402
from app.models.participant import ParticipantRecord  # noqa: E402
from app.services.payment.verification import always_verified  # noqa: E402
from app.services.platform import Platform  # noqa: E402
from app.utils.clock import ManualClock  # noqa: E402


START = datetime(2024, 3, 1, 12, 0, tzinfo=UTC)

UPLINES = ["usr_02", "usr_03", "usr_04", "usr_05", "usr_06"]


@pytest.fixture
def clock():
    """Manual clock frozen at START."""
    return ManualClock(START)


@pytest.fixture
def platform(clock):
    """Empty platform with deterministic time, randomness and verification."""
    return Platform(clock=clock, decide=always_verified, rng=random.Random(7))


@pytest.fixture
def demo_platform(platform):
    """Platform loaded with demo data (local participant bq_5)."""
    platform.load_demo("bq_5")
    return platform


@pytest_asyncio.fixture
async def participant(platform):
    """Registered participant 'p1' (Alice) with freshly issued payments."""
    result = await platform.onboarding.register_participant(
        "p1", "Alice", sponsor_id="usr_sponsor", upline_ids=UPLINES
    )
    assert result.success
    return "p1"


@pytest_asyncio.fixture
async def receivers(platform, clock):
    """Directory records of the upline receivers (active)."""
    for index, receiver_id in enumerate(UPLINES):
        await platform.directory.register(
            ParticipantRecord(
                id=receiver_id,
                name=f"Receiver {index + 1}",
                joined_at=clock.now(),
                status=ParticipantStatus.ACTIVE,
            )
        )
    return UPLINES
