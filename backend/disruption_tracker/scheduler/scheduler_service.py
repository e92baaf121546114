from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.jobstores.memory import MemoryJobStore
from apscheduler.triggers.interval import IntervalTrigger
from apscheduler.triggers.cron import CronTrigger
from loguru import logger
from typing import Optional
from datetime import datetime, timezone

from disruption_tracker.config import settings
from disruption_tracker.scheduler.jobs import (
    refresh_feeds_job,
    refresh_funding_job,
    sweep_expired_job,
)

JOB_REFRESH_FEEDS = 'refresh_feeds'
JOB_REFRESH_FUNDING = 'refresh_funding'
JOB_SWEEP_EXPIRED = 'sweep_expired'


class SchedulerService:
    """Service for managing the APScheduler instance and jobs"""

    def __init__(self, orchestrator, store, cache=None):
        self.orchestrator = orchestrator
        self.store = store
        self.cache = cache
        self.scheduler: Optional[AsyncIOScheduler] = None
        self.is_running = False

    def initialize(self):
        """Initialize the scheduler"""
        if self.scheduler:
            logger.warning("Scheduler already initialized")
            return

        logger.info("Initializing APScheduler...")

        # Jobs hold references to live services, so they cannot be persisted
        jobstores = {
            'default': MemoryJobStore()
        }

        job_defaults = {
            'coalesce': True,  # Combine multiple pending executions into one
            'max_instances': 1,  # Only one instance of a job at a time
            'misfire_grace_time': 300  # 5 minutes grace period
        }

        self.scheduler = AsyncIOScheduler(
            jobstores=jobstores,
            job_defaults=job_defaults,
            timezone='UTC'
        )

        logger.info("Scheduler initialized successfully")

    def start(self):
        """Start the scheduler"""
        if not self.scheduler:
            raise RuntimeError("Scheduler not initialized. Call initialize() first.")

        if self.is_running:
            logger.warning("Scheduler already running")
            return

        logger.info("Starting scheduler...")
        self.scheduler.start()
        self.is_running = True

        self._add_system_jobs()

        logger.info("Scheduler started successfully")

    def shutdown(self):
        """Shutdown the scheduler"""
        if not self.scheduler or not self.is_running:
            return

        logger.info("Shutting down scheduler...")
        self.scheduler.shutdown(wait=False)
        self.is_running = False
        logger.info("Scheduler shut down successfully")

    def _add_system_jobs(self):
        """Add the refresh and maintenance jobs"""
        self.scheduler.add_job(
            refresh_feeds_job,
            trigger=IntervalTrigger(minutes=settings.REFRESH_INTERVAL_MINUTES),
            args=[self.orchestrator],
            id=JOB_REFRESH_FEEDS,
            name='Refresh Feeds',
            replace_existing=True
        )

        self.scheduler.add_job(
            refresh_funding_job,
            trigger=IntervalTrigger(hours=settings.FUNDING_REFRESH_HOURS),
            args=[self.orchestrator],
            id=JOB_REFRESH_FUNDING,
            name='Refresh Funding Rounds',
            replace_existing=True
        )

        # Hourly, on the half hour
        self.scheduler.add_job(
            sweep_expired_job,
            trigger=CronTrigger(minute=30),
            args=[self.store, self.cache],
            id=JOB_SWEEP_EXPIRED,
            name='Sweep Expired Items',
            replace_existing=True
        )

        logger.info(
            f"System jobs added: feeds every {settings.REFRESH_INTERVAL_MINUTES} min, "
            f"funding every {settings.FUNDING_REFRESH_HOURS} h"
        )

    def trigger_job_now(self, job_id: str) -> bool:
        """
        Trigger a job to run immediately (in addition to scheduled runs)

        Args:
            job_id: Scheduler job id

        Returns:
            False when no such job exists
        """
        job = self.scheduler.get_job(job_id) if self.scheduler else None

        if not job:
            logger.warning(f"Job {job_id} not found")
            return False

        job.modify(next_run_time=datetime.now(timezone.utc))
        logger.info(f"Triggered immediate run for job {job_id}")
        return True

    def get_all_jobs(self) -> list:
        """
        Get information about all scheduled jobs

        Returns:
            List of job info dicts
        """
        if not self.scheduler:
            return []

        return [
            {
                'id': job.id,
                'name': job.name,
                'next_run_time': job.next_run_time.isoformat() if job.next_run_time else None,
                'trigger': str(job.trigger),
            }
            for job in self.scheduler.get_jobs()
        ]
