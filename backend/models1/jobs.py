from sqlalchemy import Column, Integer, String, Text, DateTime, JSON, Enum as SAEnum, func, ForeignKey
from sqlalchemy.orm import relationship
from db import Base
import enum

class JobStatus(str, enum.Enum):
    applied = "Applied"
    phone_screen = "Phone Screen"
    interview = "Interview"
    final_round = "Final Round"
    offer = "Offer"
    rejected = "Rejected"
    withdrawn = "Withdrawn"

VALID_STATUSES = [s.value for s in JobStatus]

# dashboard filter groups
INTERVIEW_STATUSES = [JobStatus.phone_screen, JobStatus.interview, JobStatus.final_round]
CLOSED_STATUSES = [JobStatus.offer, JobStatus.rejected, JobStatus.withdrawn]
ACTIVE_STATUSES = [JobStatus.applied] + INTERVIEW_STATUSES


class JobApplication(Base):
    __tablename__ = "job_applications"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False)

    company = Column(String(255), nullable=False)
    position = Column(String(255), nullable=False)
    job_url = Column(String(1024))
    salary_range = Column(String(255))
    location = Column(String(255))
    job_type = Column(String(50))
    # store the display strings ("Phone Screen"), not the member names
    status = Column(
        SAEnum(JobStatus, name="job_status", values_callable=lambda e: [m.value for m in e]),
        default=JobStatus.applied,
        nullable=False,
    )

    notes = Column(Text)
    company_notes = Column(Text)
    interview_notes = Column(Text)

    # generated content, also serves as the cache for the AI endpoints
    ai_questions = Column(JSON)
    company_research = Column(JSON)
    personalized_prep = Column(JSON)

    applied_date = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    user = relationship("User", back_populates="job_applications")
