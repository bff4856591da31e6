# generation.py
"""Cache check, AI attempt, deterministic fallback and persistence for one job.

Two concurrent requests for the same job can both miss the cache and both
write; the later commit wins.
"""
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pydantic import ValidationError
from sqlalchemy.orm import Session

from config import Settings
from models import User
from models1.jobs import JobApplication
from schemas.content import PREP, QUESTIONS, RESEARCH, ContentDocument, dump_document, load_document
from services.ai_client import AIContentClient, AIGenerationError, InvalidCredentialsError
from services.fallback import FallbackGenerator

logger = logging.getLogger(__name__)

SOURCE_AI = "openai"
SOURCE_FALLBACK = "fallback"
SOURCE_CACHE = "cached"

# kind -> JobApplication column holding the document
CONTENT_FIELDS = {
    QUESTIONS: "ai_questions",
    RESEARCH: "company_research",
    PREP: "personalized_prep",
}


@dataclass
class GenerationResult:
    document: Dict[str, Any]
    source: str
    error: Optional[str] = None
    generated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def cached(self) -> bool:
        return self.source == SOURCE_CACHE

    @property
    def is_ai_generated(self) -> Optional[bool]:
        if self.cached:
            return None  # not recorded for stored documents
        return self.source == SOURCE_AI


def _from_ai(kind: str, client: AIContentClient, job: JobApplication, user: User) -> ContentDocument:
    if kind == QUESTIONS:
        return client.generate_interview_questions(
            job.company, job.position, job_description=job.notes, job_type=job.job_type)
    if kind == RESEARCH:
        return client.generate_company_research(job.company, job.position)
    return client.generate_personalized_prep(
        job.company, job.position, user_background=user.name or "candidate", job_description=job.notes)


def _from_fallback(kind: str, generator: FallbackGenerator, job: JobApplication) -> ContentDocument:
    if kind == QUESTIONS:
        return generator.interview_questions(job.company, job.position, job.location, job.job_type)
    if kind == RESEARCH:
        return generator.company_research(job.company, job.position, job.location, job.job_type)
    return generator.personalized_prep(job.company, job.position, job.location, job.job_type, job.salary_range)


def generate_content(
    kind: str,
    job: JobApplication,
    user: User,
    db: Session,
    settings: Settings,
    ai_client: Optional[AIContentClient],
    generator: FallbackGenerator,
) -> GenerationResult:
    """Return the stored document for ``kind`` or produce, persist and return a new one.

    Stored documents are upgraded to the current schema before being returned.
    Errors from the AI client never escape: they select the fallback generator.
    Database errors propagate to the caller after the session is rolled back.
    """
    column = CONTENT_FIELDS[kind]
    existing = getattr(job, column)
    if existing and not settings.force_regenerate:
        try:
            cached = dump_document(load_document(kind, existing))
        except ValidationError as e:
            logger.warning(f"Stored {kind} for job {job.id} is unreadable, regenerating: {e}")
        else:
            logger.info(f"Returning cached {kind} for job {job.id} ({job.company})")
            return GenerationResult(document=cached, source=SOURCE_CACHE)

    error = None
    try:
        if ai_client is None:
            raise InvalidCredentialsError("OpenAI API key is not configured.")
        doc = _from_ai(kind, ai_client, job, user)
        source = SOURCE_AI
        logger.info(f"Generated AI {kind} for {job.company}")
    except AIGenerationError as e:
        logger.warning(f"OpenAI failed for {kind} ({job.company}), using fallback: {e}")
        error = str(e)
        doc = _from_fallback(kind, generator, job)
        source = SOURCE_FALLBACK
    except Exception as e:
        logger.exception(f"Unexpected error generating {kind} for {job.company}, using fallback")
        error = str(e) or type(e).__name__
        doc = _from_fallback(kind, generator, job)
        source = SOURCE_FALLBACK

    payload = dump_document(doc)
    setattr(job, column, payload)
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(job)
    return GenerationResult(document=payload, source=source, error=error)
