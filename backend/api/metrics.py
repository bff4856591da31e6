# api/metrics.py
from typing import Dict, List, Tuple
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from sqlalchemy import func
from db import get_db
from dependencies import get_current_db_user
from models import User
from models1.jobs import JobApplication, JobStatus, VALID_STATUSES, ACTIVE_STATUSES, INTERVIEW_STATUSES, CLOSED_STATUSES
from schemas.jobs import StatusSummary

router = APIRouter(prefix="/api/jobs", tags=["jobs-metrics"])


@router.get("/summary", response_model=StatusSummary)
def jobs_summary(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_db_user),
):
    # Totals by status (all time)
    rows: List[Tuple[JobStatus, int]] = (
        db.query(JobApplication.status, func.count())
        .filter(JobApplication.user_id == user.id)
        .group_by(JobApplication.status)
        .all()
    )
    by_status: Dict[str, int] = {s: 0 for s in VALID_STATUSES}
    for s, c in rows:
        by_status[JobStatus(s).value] = c

    def total_of(group) -> int:
        return sum(by_status[s.value] for s in group)

    return StatusSummary(
        total=sum(by_status.values()),
        by_status=by_status,
        active=total_of(ACTIVE_STATUSES),
        interviewing=total_of(INTERVIEW_STATUSES),
        closed=total_of(CLOSED_STATUSES),
    )
