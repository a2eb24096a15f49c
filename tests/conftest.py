from typing import List, Optional

import pytest
from fastapi.testclient import TestClient
from jose import jwt
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from whisk.app.api.deps import get_db_session, get_llm
from whisk.app.core.config import get_settings
from whisk.app.db import models  # noqa: F401
from whisk.app.db.base import Base
from whisk.app.main import create_app
from whisk.app.services.llm_client import LLMError


class FakeLLMClient:
    """Scripted stand-in for LLMClient.

    Each call to ``complete`` pops the next queued response. Queued
    exceptions are raised instead of returned. Once the queue is empty every
    call fails with LLMError.
    """

    def __init__(self, responses: Optional[List] = None):
        self.responses = list(responses or [])
        self.prompts: List[str] = []
        self.calls: List[dict] = []

    def queue(self, *responses):
        self.responses.extend(responses)

    async def complete(self, prompt, *, system=None, temperature=0.2, max_tokens=None, json_mode=False):
        self.prompts.append(prompt)
        self.calls.append({"temperature": temperature, "max_tokens": max_tokens, "json_mode": json_mode})
        if not self.responses:
            raise LLMError("no scripted response")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture(scope="session")
def engine():
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )
    Base.metadata.create_all(bind=engine)
    return engine


@pytest.fixture
def db_session(engine):
    connection = engine.connect()
    transaction = connection.begin()
    SessionLocal = sessionmaker(bind=connection, autocommit=False, autoflush=False, future=True)
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
        transaction.rollback()
        connection.close()


@pytest.fixture
def fake_llm():
    return FakeLLMClient()


@pytest.fixture
def app(db_session, fake_llm):
    app = create_app()

    def override_db():
        yield db_session

    app.dependency_overrides[get_db_session] = override_db
    app.dependency_overrides[get_llm] = lambda: fake_llm
    return app


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def auth_settings():
    return get_settings()


def make_token(user_id: str, email: str, settings) -> str:
    payload = {"sub": str(user_id), "email": email}
    return jwt.encode(payload, settings.auth_secret_key, algorithm=settings.auth_algorithm)


@pytest.fixture
def user_token(auth_settings):
    return make_token("user-1", "user1@example.com", auth_settings)


@pytest.fixture
def other_user_token(auth_settings):
    return make_token("user-2", "user2@example.com", auth_settings)


@pytest.fixture
def headers(user_token):
    return {"Authorization": f"Bearer {user_token}"}


@pytest.fixture
def other_headers(other_user_token):
    return {"Authorization": f"Bearer {other_user_token}"}
