"""
Platform facade.

Wires the store, the clock, the sweep scheduler and every service together.
The bot layer and the jobs talk to this object only.
"""

import random
from datetime import timedelta

from loguru import logger

from app.config.settings import Settings
from app.models.system_config import SystemConfig
from app.services.binary import (
    BinaryQueueService,
    QualificationService,
    SponsorService,
    TeamMatchingService,
)
from app.services.demo_seed import build_demo_state
from app.services.notification import NotificationService
from app.services.onboarding import OnboardingService
from app.services.participant_service import DirectoryService
from app.services.payment import (
    DisputeService,
    PaymentExpiryService,
    PaymentLifecycleService,
    RandomVerificationDecision,
    VerificationDecision,
)
from app.services.scheduler import SweepScheduler
from app.services.store import PlatformStore
from app.services.system_config_service import SystemConfigService
from app.utils.clock import Clock, SystemClock


class Platform:
    """
    Composition root of the core.

    Args:
        store: Platform store (empty by default)
        clock: Time source
        decide: Verification decision port
        rng: Random source for issuing slots and demo data
        sweep_interval: Interval between expiry sweeps
        settle_delay: Verification settle delay
        reset_delay: Failed payment reset delay
    """

    def __init__(
        self,
        store: PlatformStore | None = None,
        clock: Clock | None = None,
        decide: VerificationDecision | None = None,
        rng: random.Random | None = None,
        sweep_interval: timedelta = timedelta(seconds=1),
        settle_delay: timedelta = timedelta(seconds=3),
        reset_delay: timedelta = timedelta(seconds=3),
    ) -> None:
        self.store = store or PlatformStore()
        self.clock = clock or SystemClock()
        self.rng = rng or random.Random()
        self.scheduler = SweepScheduler(self.clock, sweep_interval)

        self.notifications = NotificationService(self.store, self.clock)
        self.directory = DirectoryService(self.store, self.clock)
        self.config = SystemConfigService(self.store, self.clock)
        self.payments = PaymentLifecycleService(
            self.store,
            self.clock,
            self.scheduler,
            self.notifications,
            self.directory,
            decide or RandomVerificationDecision(0.9, self.rng),
            settle_delay=settle_delay,
            reset_delay=reset_delay,
        )
        self.expiry = PaymentExpiryService(self.store, self.clock, self.directory)
        self.disputes = DisputeService(self.store, self.clock, self.directory)
        self.queue = BinaryQueueService(self.store, self.clock)
        self.qualification = QualificationService(self.store, self.clock)
        self.sponsors = SponsorService(self.store, self.clock, self.qualification)
        self.teams = TeamMatchingService(self.store, self.clock)
        self.onboarding = OnboardingService(
            self.store, self.clock, self.directory, self.queue, self.rng
        )

        # Payment sweep first, then confirmations
        self.scheduler.add_sweep("expire_payments", self.expiry.expire_payments)
        self.scheduler.add_sweep("expire_confirmations", self.expiry.expire_confirmations)

    @classmethod
    def from_settings(
        cls, settings: Settings, clock: Clock | None = None, rng: random.Random | None = None
    ) -> "Platform":
        """Build platform with tunables taken from application settings."""
        rng = rng or random.Random()
        store = PlatformStore(
            config=SystemConfig(
                payment_timer_hours=settings.payment_timer_hours,
                enable_crypto_verification=settings.crypto_verification_enabled,
                crypto_api_key=settings.crypto_api_key,
                crypto_wallet_address=settings.crypto_wallet_address,
            )
        )
        return cls(
            store=store,
            clock=clock,
            decide=RandomVerificationDecision(settings.verification_success_rate, rng),
            rng=rng,
            sweep_interval=timedelta(seconds=settings.sweep_interval_seconds),
            settle_delay=timedelta(seconds=settings.verification_settle_seconds),
            reset_delay=timedelta(seconds=settings.verification_reset_seconds),
        )

    def load_demo(self, participant_id: str = "bq_5") -> None:
        """Replace current state with demo data, keeping the system config."""
        snapshot = build_demo_state(
            self.clock.now(),
            self.rng,
            participant_id=participant_id,
            config=self.store.config,
            options=self.store.payment_options,
        )
        self.store.replace_all(
            config=snapshot.config,
            payment_options=snapshot.payment_options,
            accounts=snapshot.accounts,
            queue=snapshot.queue,
            directory=snapshot.directory,
        )
        logger.info(f"Demo state loaded for {participant_id}")

    async def tick(self):
        return await self.scheduler.tick()
