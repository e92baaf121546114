from disruption_tracker.scheduler.scheduler_service import SchedulerService

__all__ = ["SchedulerService"]
