from __future__ import annotations

import random
from typing import Any

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from config import Settings, get_settings
from db import Base, get_db
from dependencies import create_jwt_token, get_ai_client, get_fallback_generator
from main import app
from models import User
from models1.jobs import JobApplication
from services import fallback
from services.fallback import FallbackGenerator

TEST_SECRET = "test-secret"


class FakeAIClient:
    """Stands in for AIContentClient; raises ``error`` when set, else returns canned documents."""

    def __init__(self, error: Exception | None = None):
        self.error = error
        self.calls: list[tuple[str, dict[str, Any]]] = []

    def _record(self, task: str, **kwargs: Any) -> None:
        self.calls.append((task, kwargs))
        if self.error is not None:
            raise self.error

    def generate_interview_questions(self, company, position, job_description=None, job_type=None):
        self._record("questions", company=company, position=position,
                     job_description=job_description, job_type=job_type)
        return fallback.parse_failure_questions(company, position)

    def generate_company_research(self, company, position=None):
        self._record("research", company=company, position=position)
        return fallback.parse_failure_research(company)

    def generate_personalized_prep(self, company, position, user_background=None, job_description=None):
        self._record("prep", company=company, position=position,
                     user_background=user_background, job_description=job_description)
        return fallback.parse_failure_prep(company, position)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def settings() -> Settings:
    return Settings(
        database_url="sqlite://",
        secret_key=TEST_SECRET,
        openai_api_key="sk-test",
        environment="production",
        force_regenerate=False,
    )


@pytest.fixture
def ai_client() -> FakeAIClient:
    return FakeAIClient()


@pytest.fixture
def client(session_factory, settings, ai_client):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_ai_client] = lambda: ai_client
    app.dependency_overrides[get_fallback_generator] = lambda: FallbackGenerator(random.Random(7))
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def make_user(db, email: str = "alex@example.com", name: str | None = "Alex", is_premium: bool = False) -> User:
    user = User(email=email, name=name, is_premium=is_premium)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def make_job(db, user: User, company: str = "Acme Labs", position: str = "Backend Engineer", **fields) -> JobApplication:
    job = JobApplication(user_id=user.id, company=company, position=position, **fields)
    db.add(job)
    db.commit()
    db.refresh(job)
    return job


def auth_headers(user: User) -> dict[str, str]:
    token = create_jwt_token(user.id, user.email, secret=TEST_SECRET)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def user(db) -> User:
    return make_user(db)


@pytest.fixture
def headers(user) -> dict[str, str]:
    return auth_headers(user)
