"""Periodic platform tasks: expiry sweeps and state snapshots."""

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from loguru import logger

from app.services.platform import Platform
from app.services.snapshot_service import SnapshotService


SWEEP_JOB_ID = "platform_tick"
SNAPSHOT_JOB_ID = "platform_snapshot"


async def run_platform_tick(platform: Platform) -> None:
    """
    Run one scheduler tick.

    Deferred verification actions first, then the expiry sweeps.
    """
    report = await platform.tick()
    if report.actions or report.sweeps:
        logger.trace(f"Tick ran actions={report.actions} sweeps={report.sweeps}")


async def save_platform_snapshot(snapshot_service: SnapshotService) -> None:
    """Persist the platform state, keep running on database errors."""
    try:
        await snapshot_service.save()
    except Exception as e:
        logger.exception(f"Snapshot save failed: {e}")


def register_platform_jobs(
    scheduler: AsyncIOScheduler,
    platform: Platform,
    snapshot_service: SnapshotService | None,
    sweep_interval_seconds: int,
    snapshot_interval_seconds: int,
) -> None:
    """
    Register platform jobs on the scheduler.

    Args:
        scheduler: APScheduler instance
        platform: Platform facade
        snapshot_service: Snapshot persistence (None disables snapshots)
        sweep_interval_seconds: Tick interval
        snapshot_interval_seconds: Snapshot interval
    """
    scheduler.add_job(
        run_platform_tick,
        "interval",
        seconds=sweep_interval_seconds,
        args=[platform],
        id=SWEEP_JOB_ID,
        name="Platform tick (expiry sweeps, verification)",
        max_instances=1,
        coalesce=True,
        replace_existing=True,
    )
    logger.info(f"Job {SWEEP_JOB_ID} registered every {sweep_interval_seconds}s")

    if snapshot_service is None:
        return

    scheduler.add_job(
        save_platform_snapshot,
        "interval",
        seconds=snapshot_interval_seconds,
        args=[snapshot_service],
        id=SNAPSHOT_JOB_ID,
        name="Platform snapshot",
        max_instances=1,
        coalesce=True,
        replace_existing=True,
    )
    logger.info(f"Job {SNAPSHOT_JOB_ID} registered every {snapshot_interval_seconds}s")
