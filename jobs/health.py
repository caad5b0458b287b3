"""
HTTP probes for the sweep worker.

/health describes the scheduler jobs and the platform store,
/readiness answers 503 until the scheduler ticks, /liveness always
answers 200 while the event loop serves requests.
"""

import asyncio

from aiohttp import web
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from loguru import logger

from app.services.platform import Platform


SCHEDULER_KEY = web.AppKey("scheduler", AsyncIOScheduler)
PLATFORM_KEY = web.AppKey("platform", Platform)


def describe_platform(scheduler: AsyncIOScheduler, platform: Platform) -> dict:
    """Snapshot of scheduler jobs and store counters."""
    jobs = []
    for job in scheduler.get_jobs():
        # jobs added before start() have no next_run_time yet
        next_run = getattr(job, "next_run_time", None)
        jobs.append({"id": job.id, "next_run_time": next_run.isoformat() if next_run else None})
    return {
        "status": "healthy" if scheduler.running else "stopped",
        "jobs": jobs,
        "accounts": len(platform.store.accounts),
        "queue_length": len(platform.store.queue),
        "pending_actions": platform.scheduler.pending_actions,
        "sweeps": platform.scheduler.sweep_names,
    }


async def health_handler(request: web.Request) -> web.Response:
    try:
        body = describe_platform(request.app[SCHEDULER_KEY], request.app[PLATFORM_KEY])
    except Exception as e:
        logger.exception(f"Platform status unavailable: {e}")
        return web.json_response({"status": "unhealthy", "error": str(e)}, status=503)
    return web.json_response(body)


async def readiness_handler(request: web.Request) -> web.Response:
    ready = request.app[SCHEDULER_KEY].running
    return web.json_response({"ready": ready}, status=200 if ready else 503)


async def liveness_handler(request: web.Request) -> web.Response:
    return web.json_response({"alive": True})


def create_health_app(scheduler: AsyncIOScheduler, platform: Platform) -> web.Application:
    app = web.Application()
    app[SCHEDULER_KEY] = scheduler
    app[PLATFORM_KEY] = platform
    app.router.add_routes(
        [
            web.get("/health", health_handler),
            web.get("/readiness", readiness_handler),
            web.get("/liveness", liveness_handler),
        ]
    )
    return app


async def start_health_server(
    scheduler: AsyncIOScheduler,
    platform: Platform,
    host: str = "0.0.0.0",
    port: int = 8080,
) -> web.AppRunner:
    """
    Serve the probes in the background.

    Returns:
        AppRunner to pass to stop_health_server on shutdown
    """
    runner = web.AppRunner(create_health_app(scheduler, platform))
    await runner.setup()
    await web.TCPSite(runner, host, port).start()
    logger.info(f"Probe endpoints listening on {host}:{port}")
    return runner


async def stop_health_server(runner: web.AppRunner, timeout: int = 5) -> None:
    try:
        await asyncio.wait_for(runner.cleanup(), timeout=timeout)
    except TimeoutError:
        logger.warning(f"Probe server did not shut down within {timeout}s")
        return
    logger.info("Probe endpoints closed")
