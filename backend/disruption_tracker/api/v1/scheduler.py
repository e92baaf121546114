from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from disruption_tracker.api.deps import get_scheduler, require_admin

router = APIRouter(prefix="/scheduler", tags=["scheduler"], dependencies=[Depends(require_admin)])


class SchedulerStatusResponse(BaseModel):
    """Scheduler status response"""
    is_running: bool
    total_jobs: int


@router.get("/status", response_model=SchedulerStatusResponse)
async def get_scheduler_status(scheduler=Depends(get_scheduler)):
    """Get scheduler status"""
    if scheduler is None:
        return SchedulerStatusResponse(is_running=False, total_jobs=0)

    return SchedulerStatusResponse(
        is_running=scheduler.is_running,
        total_jobs=len(scheduler.get_all_jobs()),
    )


@router.get("/jobs")
async def list_all_jobs(scheduler=Depends(get_scheduler)):
    """List all scheduled jobs"""
    return {
        "jobs": scheduler.get_all_jobs() if scheduler else []
    }


@router.post("/trigger/{job_id}")
async def trigger_job_now(job_id: str, scheduler=Depends(get_scheduler)):
    """Trigger a job to run immediately (doesn't affect schedule)"""
    if scheduler is None or not scheduler.trigger_job_now(job_id):
        raise HTTPException(status_code=404, detail=f"Job {job_id} not found")

    return {
        "message": f"Job {job_id} triggered",
        "job_id": job_id
    }
