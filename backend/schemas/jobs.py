from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from typing import Optional, Any, Dict
from datetime import datetime

from models1.jobs import JobStatus

# wire format is camelCase (jobUrl, salaryRange, ...); python side stays snake_case
_camel = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class JobApplicationIn(BaseModel):   # for POST
    # company/position are checked in the route so a missing value is a 400, not a 422
    company: Optional[str] = None
    position: Optional[str] = None
    job_url: Optional[str] = None
    salary_range: Optional[str] = None
    location: Optional[str] = None
    job_type: Optional[str] = None
    notes: Optional[str] = None
    company_notes: Optional[str] = None
    model_config = _camel


class JobApplicationUpdate(BaseModel):  # for PUT, any subset of fields
    company: Optional[str] = None
    position: Optional[str] = None
    job_url: Optional[str] = None
    salary_range: Optional[str] = None
    location: Optional[str] = None
    job_type: Optional[str] = None
    status: Optional[str] = None
    notes: Optional[str] = None
    company_notes: Optional[str] = None
    interview_notes: Optional[str] = None
    model_config = _camel


class JobApplicationOut(BaseModel):
    id: int
    user_id: int
    company: str
    position: str
    job_url: Optional[str] = None
    salary_range: Optional[str] = None
    location: Optional[str] = None
    job_type: Optional[str] = None
    status: JobStatus
    notes: Optional[str] = None
    company_notes: Optional[str] = None
    interview_notes: Optional[str] = None
    ai_questions: Optional[Dict[str, Any]] = None
    company_research: Optional[Dict[str, Any]] = None
    personalized_prep: Optional[Dict[str, Any]] = None
    applied_date: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class StatusSummary(BaseModel):
    total: int
    by_status: Dict[str, int]
    active: int
    interviewing: int
    closed: int
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class MessageOut(BaseModel):
    message: str


def job_to_dict(rec) -> Dict[str, Any]:
    """Serialize a JobApplication row to its camelCase JSON form."""
    return JobApplicationOut.model_validate(rec).model_dump(by_alias=True, mode="json")


