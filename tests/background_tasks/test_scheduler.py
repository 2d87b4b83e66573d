# tests/background_tasks/test_scheduler.py
from app import scheduler as scheduler_module


def test_status_before_init():
    assert scheduler_module.get_scheduler_status() == {
        "status": "not_initialized",
        "jobs": [],
    }


def test_init_registers_both_sweeps():
    scheduler_module.init_scheduler()
    try:
        status = scheduler_module.get_scheduler_status()
        assert status["status"] == "running"
        job_ids = {job["id"] for job in status["jobs"]}
        assert job_ids == {"finish_elapsed_reservations", "mark_overdue_no_shows"}
        for job in status["jobs"]:
            assert job["next_run_time"] is not None

        # Re-initialising returns the running instance
        assert scheduler_module.init_scheduler() is scheduler_module.scheduler
    finally:
        scheduler_module.shutdown_scheduler()

    assert scheduler_module.scheduler is None
