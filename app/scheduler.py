# app/scheduler.py
"""
Background task scheduler for the reservation lifecycle.

Uses APScheduler to run periodic background jobs for:
- Finishing reservations whose end time has passed
- Marking reservations with no check-in as no-shows
"""

import logging
from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.cron import CronTrigger
from apscheduler.events import EVENT_JOB_ERROR, EVENT_JOB_MISSED

from app.background_tasks.reservation_tasks import (
    finish_elapsed_reservations,
    mark_overdue_no_shows,
)

logger = logging.getLogger(__name__)

# Global scheduler instance
scheduler = None


def _on_job_error(event):
    """Log scheduler job errors with full context."""
    exc = event.exception
    logger.error(
        "Scheduled job FAILED: job_id=%s error=%s",
        event.job_id, exc,
        exc_info=(type(exc), exc, None) if exc else None,
    )
    if event.traceback:
        logger.error("Traceback for job %s:\n%s", event.job_id, event.traceback)


def _on_job_missed(event):
    """Log when a scheduled job misses its execution window."""
    logger.warning(
        "Scheduled job MISSED: job_id=%s scheduled_run_time=%s",
        event.job_id,
        event.scheduled_run_time,
    )


def init_scheduler():
    """
    Initialize the background scheduler with the reservation sweeps.

    This is called once when the application starts up.
    """
    global scheduler

    if scheduler is not None:
        logger.warning("Scheduler already initialized")
        return scheduler

    scheduler = BackgroundScheduler(
        timezone="UTC",
        job_defaults={
            'coalesce': True,  # Combine missed executions
            'max_instances': 1,  # Only one instance of each job at a time
            'misfire_grace_time': 60
        }
    )

    # Job 1: Finish elapsed reservations
    # Runs every hour on the hour
    scheduler.add_job(
        func=finish_elapsed_reservations,
        trigger=CronTrigger(minute=0),
        id='finish_elapsed_reservations',
        name='Finish Elapsed Reservations',
        replace_existing=True
    )
    logger.info("Scheduled job: finish_elapsed_reservations (every hour)")

    # Job 2: Auto no-show for reservations without check-in
    # Runs every 5 minutes
    scheduler.add_job(
        func=mark_overdue_no_shows,
        trigger=CronTrigger(minute='*/5'),
        id='mark_overdue_no_shows',
        name='Mark Overdue Reservations As No-Show',
        replace_existing=True
    )
    logger.info("Scheduled job: mark_overdue_no_shows (every 5 minutes)")

    scheduler.add_listener(_on_job_error, EVENT_JOB_ERROR)
    scheduler.add_listener(_on_job_missed, EVENT_JOB_MISSED)

    scheduler.start()
    logger.info("Background scheduler started successfully")

    return scheduler


def shutdown_scheduler():
    """
    Gracefully shutdown the scheduler.

    This is called when the application shuts down.
    """
    global scheduler

    if scheduler is not None:
        scheduler.shutdown(wait=True)
        logger.info("Background scheduler shutdown complete")
        scheduler = None


def get_scheduler_status():
    """
    Get the current status of all scheduled jobs.

    Returns:
        Dict with scheduler state and per-job next run time
    """
    if scheduler is None:
        return {"status": "not_initialized", "jobs": []}

    jobs = []
    for job in scheduler.get_jobs():
        jobs.append({
            "id": job.id,
            "name": job.name,
            "next_run_time": job.next_run_time.isoformat() if job.next_run_time else None,
            "trigger": str(job.trigger)
        })

    return {
        "status": "running" if scheduler.running else "stopped",
        "jobs": jobs
    }
