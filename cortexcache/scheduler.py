"""
Background Jobs

APScheduler runs inside the application's event loop. The only job purges
expired database sessions; Redis expires session keys by itself.
"""

import logging
from typing import Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from cortexcache.config import get_settings
from cortexcache.db.session import AsyncSessionLocal
from cortexcache.services.session_store import DatabaseSessionStore

logger = logging.getLogger(__name__)

SESSION_CLEANUP_JOB_ID = "cleanup_expired_sessions"

_scheduler: Optional[AsyncIOScheduler] = None


async def cleanup_expired_sessions_task(store: Optional[DatabaseSessionStore] = None):
    """
    Delete expired session rows

    Failures are logged and the job simply runs again at the next interval.
    """
    store = store or DatabaseSessionStore(AsyncSessionLocal)
    try:
        deleted = await store.cleanup_expired()
    except Exception:
        logger.exception("Session cleanup failed")
        return
    if deleted:
        logger.info("Session cleanup removed %d expired sessions", deleted)
    else:
        logger.debug("Session cleanup found no expired sessions")


def start_scheduler():
    global _scheduler

    if _scheduler is not None:
        logger.warning("Scheduler already started")
        return

    settings = get_settings()
    _scheduler = AsyncIOScheduler()

    if settings.SESSION_STORE_TYPE == "database":
        _scheduler.add_job(
            cleanup_expired_sessions_task,
            trigger=IntervalTrigger(minutes=settings.SESSION_CLEANUP_INTERVAL_MINUTES),
            id=SESSION_CLEANUP_JOB_ID,
            name="Clean up expired sessions",
            replace_existing=True,
        )
        logger.info(
            "Session cleanup scheduled every %d minutes",
            settings.SESSION_CLEANUP_INTERVAL_MINUTES,
        )

    _scheduler.start()


def shutdown_scheduler():
    global _scheduler

    if _scheduler is None:
        return

    _scheduler.shutdown(wait=True)
    _scheduler = None
    logger.info("Scheduler stopped")


def get_scheduler() -> Optional[AsyncIOScheduler]:
    return _scheduler
