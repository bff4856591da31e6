from __future__ import annotations

import json
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from conftest import FakeAIClient, auth_headers, make_job, make_user
from config import get_settings
from db import get_db
from dependencies import get_ai_client, get_fallback_generator
from main import app
from schemas.content import PREP, QUESTIONS, RESEARCH
from services.ai_client import (
    AIContentClient,
    AIGenerationError,
    InvalidCredentialsError,
    NoContentError,
    ProviderUnavailableError,
    QuotaExceededError,
)
from services.fallback import FallbackGenerator
from services.generation import CONTENT_FIELDS

ENDPOINTS = [
    ("generate-questions", "questions", "aiQuestions"),
    ("company-research", "research", "companyResearch"),
    ("personalized-prep", "prep", "personalizedPrep"),
]


@pytest.mark.parametrize("path,key,field", ENDPOINTS)
def test_ai_result_is_returned_and_stored(client: TestClient, db, user, headers, ai_client, path, key, field) -> None:
    job = make_job(db, user, company="Globex Corporation", position="Product Manager")

    response = client.post(f"/api/jobs/{job.id}/{path}", headers=headers)

    assert response.status_code == 200
    body = response.json()
    assert body["metadata"]["source"] == "openai"
    assert body["metadata"]["isAIGenerated"] is True
    assert body["metadata"]["cached"] is False
    assert body["metadata"]["apiKeyStatus"] == "configured"
    assert response.headers["X-AI-Status"] == "openai"
    assert response.headers["X-API-Key-Status"] == "present"
    assert body["jobApplication"][field] == body[key]
    assert body[key]["schemaVersion"] == 2
    assert len(ai_client.calls) == 1


def test_questions_request_passes_job_details_to_ai(client: TestClient, db, user, headers, ai_client) -> None:
    job = make_job(db, user, notes="Python, Postgres", job_type="Contract")
    client.post(f"/api/jobs/{job.id}/generate-questions", headers=headers)

    task, kwargs = ai_client.calls[0]
    assert task == "questions"
    assert kwargs["job_description"] == "Python, Postgres"
    assert kwargs["job_type"] == "Contract"


def test_prep_uses_user_name_as_background(client: TestClient, db, user, headers, ai_client) -> None:
    job = make_job(db, user)
    client.post(f"/api/jobs/{job.id}/personalized-prep", headers=headers)
    assert ai_client.calls[0][1]["user_background"] == "Alex"


@pytest.mark.parametrize(
    "error",
    [
        QuotaExceededError("quota"),
        InvalidCredentialsError("bad key"),
        ProviderUnavailableError("down"),
        NoContentError("No content generated"),
        AIGenerationError("Failed to generate interview questions"),
    ],
)
def test_provider_failure_falls_back(client: TestClient, db, user, headers, ai_client, error) -> None:
    ai_client.error = error
    job = make_job(db, user, company="Acme Labs", position="Senior Backend Engineer")

    response = client.post(f"/api/jobs/{job.id}/generate-questions", headers=headers)

    assert response.status_code == 200
    body = response.json()
    assert body["metadata"]["source"] == "fallback"
    assert body["metadata"]["isAIGenerated"] is False
    assert body["metadata"]["errorDetails"] == str(error)
    assert response.headers["X-AI-Status"] == "fallback"
    assert body["questions"]["technical"]["format"] == "focus"
    assert body["jobApplication"]["aiQuestions"] == body["questions"]


@pytest.mark.parametrize("path,key,field", ENDPOINTS)
def test_missing_api_key_uses_fallback(client: TestClient, db, user, headers, settings, path, key, field) -> None:
    settings.openai_api_key = None
    app.dependency_overrides[get_ai_client] = lambda: None
    job = make_job(db, user, company="Initech", position="UX Designer", location="Remote")

    response = client.post(f"/api/jobs/{job.id}/{path}", headers=headers)

    assert response.status_code == 200
    body = response.json()
    assert body["metadata"]["source"] == "fallback"
    assert body["metadata"]["apiKeyStatus"] == "missing"
    assert response.headers["X-API-Key-Status"] == "missing"
    assert body[key]["kind"] == key


@pytest.mark.parametrize("path,key,field", ENDPOINTS)
def test_second_call_is_served_from_cache(client: TestClient, db, user, headers, ai_client, path, key, field) -> None:
    job = make_job(db, user)

    first = client.post(f"/api/jobs/{job.id}/{path}", headers=headers).json()
    second_response = client.post(f"/api/jobs/{job.id}/{path}", headers=headers)
    second = second_response.json()

    assert second[key] == first[key]
    assert second["jobApplication"]["updatedAt"] == first["jobApplication"]["updatedAt"]
    assert second["metadata"]["cached"] is True
    assert second["metadata"]["source"] == "cached"
    assert second["metadata"]["isAIGenerated"] is None
    assert second_response.headers["X-AI-Status"] == "cached"
    assert len(ai_client.calls) == 1


def test_cached_fallback_is_not_retried(client: TestClient, db, user, headers, ai_client) -> None:
    ai_client.error = QuotaExceededError("quota")
    job = make_job(db, user)

    first = client.post(f"/api/jobs/{job.id}/company-research", headers=headers).json()
    ai_client.error = None
    second = client.post(f"/api/jobs/{job.id}/company-research", headers=headers).json()

    assert second["research"] == first["research"]
    assert second["metadata"]["cached"] is True
    assert len(ai_client.calls) == 1


def test_force_regenerate_skips_cache(client: TestClient, db, user, headers, ai_client, settings) -> None:
    settings.environment = "development"
    settings.force_regenerate = True
    job = make_job(db, user)

    client.post(f"/api/jobs/{job.id}/generate-questions", headers=headers)
    second = client.post(f"/api/jobs/{job.id}/generate-questions", headers=headers).json()

    assert second["metadata"]["cached"] is False
    assert second["metadata"]["environment"] == "development"
    assert len(ai_client.calls) == 2


def test_regeneration_overwrites_stored_document(client: TestClient, db, user, headers, ai_client, settings) -> None:
    settings.force_regenerate = True
    job = make_job(db, user)

    client.post(f"/api/jobs/{job.id}/generate-questions", headers=headers)
    ai_client.error = ProviderUnavailableError("down")
    second = client.post(f"/api/jobs/{job.id}/generate-questions", headers=headers).json()

    stored = client.get(f"/api/jobs/{job.id}", headers=headers).json()["aiQuestions"]
    assert second["metadata"]["source"] == "fallback"
    assert stored == second["questions"]


@pytest.mark.parametrize("path,key,field", ENDPOINTS)
def test_generation_for_foreign_job_is_not_found(client: TestClient, db, headers, ai_client, path, key, field) -> None:
    other = make_user(db, email="other@example.com")
    theirs = make_job(db, other)

    response = client.post(f"/api/jobs/{theirs.id}/{path}", headers=headers)

    assert response.status_code == 404
    assert ai_client.calls == []


def test_generation_requires_session(client: TestClient, db, user) -> None:
    job = make_job(db, user)
    response = client.post(f"/api/jobs/{job.id}/generate-questions")
    assert response.status_code == 401


def test_premium_gate_blocks_free_users_when_enabled(client: TestClient, db, user, headers, settings, ai_client) -> None:
    settings.premium_ai_only = True
    job = make_job(db, user)

    response = client.post(f"/api/jobs/{job.id}/generate-questions", headers=headers)

    assert response.status_code == 403
    assert "Premium feature" in response.json()["detail"]
    assert ai_client.calls == []


def test_premium_gate_lets_premium_users_through(client: TestClient, db, settings) -> None:
    settings.premium_ai_only = True
    premium = make_user(db, email="pat@example.com", is_premium=True)
    job = make_job(db, premium)

    response = client.post(f"/api/jobs/{job.id}/company-research", headers=auth_headers(premium))
    assert response.status_code == 200


def test_gate_is_off_by_default(client: TestClient, db, user, headers) -> None:
    job = make_job(db, user)
    response = client.post(f"/api/jobs/{job.id}/personalized-prep", headers=headers)
    assert response.status_code == 200


def test_unexpected_ai_error_falls_back(client: TestClient, db, user, headers, ai_client) -> None:
    ai_client.error = RuntimeError("boom")
    job = make_job(db, user)

    response = client.post(f"/api/jobs/{job.id}/generate-questions", headers=headers)

    assert response.status_code == 200
    body = response.json()
    assert body["metadata"]["source"] == "fallback"
    assert body["metadata"]["errorDetails"] == "boom"
    assert body["jobApplication"]["aiQuestions"] == body["questions"]


def test_scalar_prep_section_from_model_is_stored(client: TestClient, db, user, headers) -> None:
    completions = SimpleNamespace(create=lambda **kwargs: SimpleNamespace(choices=[
        SimpleNamespace(message=SimpleNamespace(content=json.dumps({"strength_tips": 5})))
    ]))
    real_client = AIContentClient(api_key=None, client=SimpleNamespace(chat=SimpleNamespace(completions=completions)))
    app.dependency_overrides[get_ai_client] = lambda: real_client
    job = make_job(db, user)

    response = client.post(f"/api/jobs/{job.id}/personalized-prep", headers=headers)

    assert response.status_code == 200
    body = response.json()
    assert body["metadata"]["source"] == "openai"
    assert body["prep"]["strength"] == ["5"]


@pytest.mark.parametrize("path,key,field", ENDPOINTS)
def test_cached_legacy_document_is_upgraded(client: TestClient, db, user, headers, ai_client, path, key, field) -> None:
    legacy = {
        QUESTIONS: {"behavioral": ["b"], "technical": ["t1"], "roleSpecific": ["r"], "company": ["c"]},
        RESEARCH: {
            "overview": {"industry": "Tech", "size": "10", "founded": "2020", "headquarters": "NYC",
                         "description": "d"},
            "culture": {"values": ["v"], "workEnvironment": "w"},
            "interviewProcess": {"rounds": ["r"], "timeline": "t"},
            "recentNews": ["n"],
            "glassdoorInsights": {"rating": 4.5, "pros": ["p"], "cons": ["c"]},
        },
        PREP: {"tellMeAboutYourself": "A paragraph.", "strength": "Another."},
    }[key]
    job = make_job(db, user, **{CONTENT_FIELDS[key]: legacy})

    response = client.post(f"/api/jobs/{job.id}/{path}", headers=headers)

    body = response.json()
    assert response.status_code == 200
    assert body["metadata"]["cached"] is True
    assert body[key]["kind"] == key
    assert body[key]["schemaVersion"] == 2
    assert ai_client.calls == []
    if key == QUESTIONS:
        assert body[key]["technical"] == {"format": "questions", "questions": ["t1"]}
    elif key == RESEARCH:
        assert body[key]["glassdoorInsights"]["rating"] == "4.5"
    else:
        assert body[key]["tellMeAboutYourself"] == ["A paragraph."]


def test_unreadable_cached_document_is_regenerated(client: TestClient, db, user, headers, ai_client) -> None:
    job = make_job(db, user, company_research={"culture": "nothing useful"})

    response = client.post(f"/api/jobs/{job.id}/company-research", headers=headers)

    body = response.json()
    assert body["metadata"]["cached"] is False
    assert body["metadata"]["source"] == "openai"
    assert len(ai_client.calls) == 1


def test_unexpected_error_becomes_generic_500(session_factory, settings) -> None:
    class ExplodingGenerator(FallbackGenerator):
        def interview_questions(self, *args, **kwargs):
            raise RuntimeError("boom")

    db = session_factory()
    user = make_user(db)
    job = make_job(db, user)

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_ai_client] = lambda: FakeAIClient(error=RuntimeError("provider down"))
    app.dependency_overrides[get_fallback_generator] = lambda: ExplodingGenerator()
    try:
        with TestClient(app, raise_server_exceptions=False) as raw:
            response = raw.post(f"/api/jobs/{job.id}/generate-questions", headers=auth_headers(user))
    finally:
        app.dependency_overrides.clear()
        db.close()

    assert response.status_code == 500
    assert response.json() == {"detail": "An unexpected error occured"}
