# api/jobs.py
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from config import Settings, get_settings
from db import get_db
from dependencies import get_current_db_user, get_owned_job
from models import User
from models1.jobs import (
    JobApplication,
    JobStatus,
    VALID_STATUSES,
    ACTIVE_STATUSES,
    CLOSED_STATUSES,
    INTERVIEW_STATUSES,
)
from schemas.jobs import JobApplicationIn, JobApplicationOut, JobApplicationUpdate, MessageOut

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/jobs", tags=["jobs"])

STATUS_GROUPS = {
    "active": ACTIVE_STATUSES,
    "interview": INTERVIEW_STATUSES,
    "closed": CLOSED_STATUSES,
}

INVALID_STATUS_MESSAGE = f"Invalid status. Must be one of: {', '.join(VALID_STATUSES)}"


def _blank(value: Optional[str]) -> bool:
    return value is None or value.strip() == ""


def _commit(db: Session, action: str):
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception(f"Error {action} job application")
        raise HTTPException(status_code=500, detail="Internal server error")


# ---------- LIST (supports /api/jobs and /api/jobs/) ----------
@router.get("", response_model=list[JobApplicationOut])
@router.get("/", response_model=list[JobApplicationOut])
def list_jobs(
    # filters (all optional)
    q: Optional[str] = Query(default=None, description="matches company or position"),
    status: Optional[str] = Query(default=None, description="a status value, or active|interview|closed"),
    # paging
    limit: int = Query(default=100, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_db_user),
):
    query = db.query(JobApplication).filter(JobApplication.user_id == user.id)

    if q and q.strip():
        pattern = f"%{q.strip()}%"
        query = query.filter(or_(JobApplication.company.ilike(pattern), JobApplication.position.ilike(pattern)))

    if status:
        if status in STATUS_GROUPS:
            query = query.filter(JobApplication.status.in_(STATUS_GROUPS[status]))
        elif status in VALID_STATUSES:
            query = query.filter(JobApplication.status == JobStatus(status))
        else:
            raise HTTPException(status_code=400, detail=INVALID_STATUS_MESSAGE)

    rows = (
        query.order_by(JobApplication.created_at.desc(), JobApplication.id.desc())
         .offset(offset)
         .limit(limit)
         .all()
    )
    return rows

# ---------- CREATE (supports /api/jobs and /api/jobs/) ----------
@router.post("", response_model=JobApplicationOut, status_code=status.HTTP_201_CREATED)
@router.post("/", response_model=JobApplicationOut, status_code=status.HTTP_201_CREATED)
def create_job(
    app_in: JobApplicationIn,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_db_user),
    settings: Settings = Depends(get_settings),
):
    if _blank(app_in.company):
        raise HTTPException(status_code=400, detail="Company name is required")
    if _blank(app_in.position):
        raise HTTPException(status_code=400, detail="Position is required")

    if not user.is_premium:
        count = db.query(JobApplication).filter(JobApplication.user_id == user.id).count()
        if count >= settings.free_tier_job_limit:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Free plan is limited to {settings.free_tier_job_limit} applications. "
                       "Upgrade to premium to track unlimited applications.",
            )

    data = app_in.model_dump(exclude_unset=True)
    data["company"] = app_in.company.strip()
    data["position"] = app_in.position.strip()
    data["user_id"] = user.id

    rec = JobApplication(**data)
    db.add(rec)
    _commit(db, "creating")
    db.refresh(rec)
    logger.info(f"User {user.id} created job application {rec.id} ({rec.company})")
    return rec

# ---------- READ ----------
@router.get("/{job_id}", response_model=JobApplicationOut)
def get_job(
    job_id: int,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_db_user),
):
    return get_owned_job(job_id, db, user)

# ---------- UPDATE ----------
@router.put("/{job_id}", response_model=JobApplicationOut)
def update_job(
    job_id: int,
    app_in: JobApplicationUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_db_user),
):
    rec = get_owned_job(job_id, db, user)

    data = app_in.model_dump(exclude_unset=True)
    if "company" in data:
        if _blank(data["company"]):
            raise HTTPException(status_code=400, detail="Company name cannot be empty")
        data["company"] = data["company"].strip()
    if "position" in data:
        if _blank(data["position"]):
            raise HTTPException(status_code=400, detail="Position cannot be empty")
        data["position"] = data["position"].strip()
    if "status" in data:
        if data["status"] is None:
            data.pop("status")
        elif data["status"] not in VALID_STATUSES:
            raise HTTPException(status_code=400, detail=INVALID_STATUS_MESSAGE)
        else:
            data["status"] = JobStatus(data["status"])

    for k, v in data.items():
        setattr(rec, k, v)

    _commit(db, "updating")
    db.refresh(rec)
    return rec

# ---------- DELETE ----------
@router.delete("/{job_id}", response_model=MessageOut)
def delete_job(
    job_id: int,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_db_user),
):
    rec = get_owned_job(job_id, db, user)
    db.delete(rec)
    _commit(db, "deleting")
    return {"message": "Job application deleted successfully"}
