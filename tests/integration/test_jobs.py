"""Tests for scheduler jobs and the health check server."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from aiohttp.test_utils import TestClient, TestServer
from apscheduler.schedulers.asyncio import AsyncIOScheduler

from app.models.enums import PaymentStatus
from jobs.health import create_health_app, describe_platform
from jobs.tasks.sweeps import (
    SNAPSHOT_JOB_ID,
    SWEEP_JOB_ID,
    register_platform_jobs,
    run_platform_tick,
    save_platform_snapshot,
)


class TestPlatformJobs:

    def test_register_jobs(self, platform):
        scheduler = AsyncIOScheduler(timezone="UTC")

        register_platform_jobs(scheduler, platform, MagicMock(), 1, 30)

        assert scheduler.get_job(SWEEP_JOB_ID) is not None
        assert scheduler.get_job(SNAPSHOT_JOB_ID) is not None

    def test_snapshots_disabled(self, platform):
        scheduler = AsyncIOScheduler(timezone="UTC")

        register_platform_jobs(scheduler, platform, None, 1, 30)

        assert scheduler.get_job(SNAPSHOT_JOB_ID) is None

    @pytest.mark.asyncio
    async def test_tick_expires_overdue_payments(self, platform, participant, clock):
        clock.advance(hours=3)

        await run_platform_tick(platform)

        account = platform.store.get_account(participant)
        assert account.get_payment("pay_ref").status == PaymentStatus.EXPIRED
        assert account.get_payment("pay_adm").status == PaymentStatus.UNPAID

    @pytest.mark.asyncio
    async def test_snapshot_failure_is_swallowed(self):
        service = MagicMock()
        service.save = AsyncMock(side_effect=RuntimeError("database is locked"))

        await save_platform_snapshot(service)

        service.save.assert_awaited_once()


class TestHealthServer:

    @pytest.mark.asyncio
    async def test_health_reports_platform(self, demo_platform):
        scheduler = AsyncIOScheduler(timezone="UTC")
        app = create_health_app(scheduler, demo_platform)

        async with TestClient(TestServer(app)) as client:
            response = await client.get("/health")
            body = await response.json()

        assert response.status == 200
        assert body["status"] == "stopped"
        assert body["accounts"] == 1
        assert body["queue_length"] == 15
        assert body["sweeps"] == ["expire_payments", "expire_confirmations"]

    @pytest.mark.asyncio
    async def test_readiness_and_liveness(self, platform):
        app = create_health_app(AsyncIOScheduler(timezone="UTC"), platform)

        async with TestClient(TestServer(app)) as client:
            readiness = await client.get("/readiness")
            readiness_body = await readiness.json()
            liveness = await client.get("/liveness")

        assert readiness.status == 503
        assert readiness_body == {"ready": False}
        assert liveness.status == 200

    def test_describe_lists_registered_jobs(self, platform):
        scheduler = AsyncIOScheduler(timezone="UTC")
        register_platform_jobs(scheduler, platform, MagicMock(), 1, 30)

        status = describe_platform(scheduler, platform)

        assert status["status"] == "stopped"
        assert {job["id"] for job in status["jobs"]} == {SWEEP_JOB_ID, SNAPSHOT_JOB_ID}
        assert status["accounts"] == 0
        assert status["pending_actions"] == 0
