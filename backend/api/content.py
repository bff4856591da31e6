# api/content.py
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from config import Settings, get_settings
from db import get_db
from dependencies import get_ai_client, get_fallback_generator, get_owned_job, require_ai_access
from models import User
from schemas.content import PREP, QUESTIONS, RESEARCH
from schemas.jobs import job_to_dict
from services.ai_client import AIContentClient
from services.fallback import FallbackGenerator
from services.generation import generate_content

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/jobs", tags=["interview-prep"])

# kind -> (response key, message when generated, message when served from cache)
RESPONSES = {
    QUESTIONS: ("questions", "Interview questions generated successfully",
                "Interview questions already generated (cached)"),
    RESEARCH: ("research", "Company research completed successfully",
               "Company research already completed"),
    PREP: ("prep", "Personalized interview preparation created successfully",
           "Personalized prep already created (cached)"),
}


def _run(kind: str, job_id: int, db: Session, user: User, settings: Settings,
         ai_client: Optional[AIContentClient], generator: FallbackGenerator) -> JSONResponse:
    job = get_owned_job(job_id, db, user)
    try:
        result = generate_content(kind, job, user, db, settings, ai_client, generator)
    except SQLAlchemyError:
        logger.exception(f"Error saving {kind} for job {job_id}")
        raise HTTPException(status_code=500, detail="Internal server error")

    key, fresh_message, cached_message = RESPONSES[kind]
    response = JSONResponse(content={
        "message": cached_message if result.cached else fresh_message,
        key: result.document,
        "jobApplication": job_to_dict(job),
        "metadata": {
            "source": result.source,
            "isAIGenerated": result.is_ai_generated,
            "cached": result.cached,
            "generatedAt": result.generated_at.isoformat(),
            "apiKeyStatus": settings.api_key_status,
            "environment": settings.environment,
            "errorDetails": result.error,
        },
    })
    response.headers["X-AI-Status"] = result.source
    response.headers["X-API-Key-Status"] = "present" if settings.has_api_key else "missing"
    return response


@router.post("/{job_id}/generate-questions")
def generate_questions(
    job_id: int,
    db: Session = Depends(get_db),
    user: User = Depends(require_ai_access),
    settings: Settings = Depends(get_settings),
    ai_client: Optional[AIContentClient] = Depends(get_ai_client),
    generator: FallbackGenerator = Depends(get_fallback_generator),
):
    return _run(QUESTIONS, job_id, db, user, settings, ai_client, generator)


@router.post("/{job_id}/company-research")
def company_research(
    job_id: int,
    db: Session = Depends(get_db),
    user: User = Depends(require_ai_access),
    settings: Settings = Depends(get_settings),
    ai_client: Optional[AIContentClient] = Depends(get_ai_client),
    generator: FallbackGenerator = Depends(get_fallback_generator),
):
    return _run(RESEARCH, job_id, db, user, settings, ai_client, generator)


@router.post("/{job_id}/personalized-prep")
def personalized_prep(
    job_id: int,
    db: Session = Depends(get_db),
    user: User = Depends(require_ai_access),
    settings: Settings = Depends(get_settings),
    ai_client: Optional[AIContentClient] = Depends(get_ai_client),
    generator: FallbackGenerator = Depends(get_fallback_generator),
):
    return _run(PREP, job_id, db, user, settings, ai_client, generator)
