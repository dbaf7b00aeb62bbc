"""Shared pytest fixtures for the workflow orchestrator test suite.

Provides:
- In-memory async SQLite database (no PostgreSQL needed for tests)
- Fake collaborators (completion service, notifier, HTTP client)
- Registry / engine wired to an in-memory store and log sink
- FastAPI test client (httpx.AsyncClient) with the engine overridden
"""

import os
from typing import Any, AsyncGenerator, Optional

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker

# Override settings BEFORE any app imports
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("LOG_FORMAT", "text")

from core.exceptions import CompletionError  # noqa: E402
from db.base import Base  # noqa: E402
from integrations.interfaces import (  # noqa: E402
    DeliveryAck,
    HttpClient,
    HttpResponse,
    Notifier,
    TextCompletionService,
)
from services.execution_log import InMemoryExecutionLogSink  # noqa: E402
from services.workflow_store import InMemoryWorkflowStore  # noqa: E402
from tasks.base_task import Collaborators  # noqa: E402
from tasks.registry import TaskRegistry  # noqa: E402
from workflow.engine import WorkflowEngine  # noqa: E402
from workflow.recorder import ExecutionRecorder  # noqa: E402


# ---------------------------------------------------------------------------
# Fake collaborators
# ---------------------------------------------------------------------------

class FakeCompletion(TextCompletionService):
    """Returns a canned response.

    Raises CompletionError when ``fail_status`` is set, or ``raises`` as is.
    """

    def __init__(
        self,
        response: Any = None,
        fail_status: Optional[int] = None,
        raises: Optional[Exception] = None,
    ):
        self.response = response if response is not None else {"text": "ok"}
        self.fail_status = fail_status
        self.raises = raises
        self.calls: list[dict] = []

    async def complete(self, prompt, use_case, user_id, provider_hint=None, timeout=None):
        self.calls.append({
            "prompt": prompt,
            "use_case": use_case,
            "user_id": user_id,
            "provider_hint": provider_hint,
            "timeout": timeout,
        })
        if self.raises is not None:
            raise self.raises
        if self.fail_status is not None:
            raise CompletionError(self.fail_status)
        return self.response


class FakeNotifier(Notifier):
    def __init__(self, fail_with: Optional[str] = None):
        self.fail_with = fail_with
        self.sent: list[dict] = []

    async def send(self, channel, recipients, subject, content):
        self.sent.append({
            "channel": channel,
            "recipients": recipients,
            "subject": subject,
            "content": content,
        })
        if self.fail_with:
            return DeliveryAck(success=False, channel=channel, recipients=recipients, error=self.fail_with)
        return DeliveryAck(
            success=True,
            channel=channel,
            recipients=recipients,
            message="delivered",
            delivered_at="2024-01-01T00:00:00+00:00",
        )


class FakeHttpClient(HttpClient):
    def __init__(self, status: int = 200, body: Any = None):
        self.status = status
        self.body = body if body is not None else {"ok": True}
        self.calls: list[dict] = []

    async def call(self, method, url, headers=None, body=None, timeout=None):
        self.calls.append({
            "method": method,
            "url": url,
            "headers": headers,
            "body": body,
            "timeout": timeout,
        })
        return HttpResponse(status=self.status, body=self.body)


# ---------------------------------------------------------------------------
# Engine fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def store() -> InMemoryWorkflowStore:
    return InMemoryWorkflowStore()


@pytest.fixture
def sink() -> InMemoryExecutionLogSink:
    return InMemoryExecutionLogSink()


@pytest.fixture
def completion() -> FakeCompletion:
    return FakeCompletion()


@pytest.fixture
def notifier() -> FakeNotifier:
    return FakeNotifier()


@pytest.fixture
def http_client() -> FakeHttpClient:
    return FakeHttpClient()


@pytest.fixture
def collaborators(store, completion, notifier, http_client) -> Collaborators:
    return Collaborators(store=store, completion=completion, notifier=notifier, http=http_client)


@pytest.fixture
def registry(collaborators) -> TaskRegistry:
    return TaskRegistry(collaborators)


@pytest.fixture
def engine(store, registry, sink) -> WorkflowEngine:
    return WorkflowEngine(
        store=store,
        registry=registry,
        recorder=ExecutionRecorder(sink, record_steps=True),
    )


# ---------------------------------------------------------------------------
# Database fixtures
# ---------------------------------------------------------------------------

@pytest_asyncio.fixture
async def db_engine():
    """Fresh in-memory database per test."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)
    # Import all models so Base.metadata knows about them
    import db.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return sessionmaker(
        db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


# ---------------------------------------------------------------------------
# App / HTTP client fixtures
# ---------------------------------------------------------------------------

@pytest_asyncio.fixture
async def app(db_engine, engine):
    """Create a FastAPI app wired to the test database and in-memory engine."""
    import db.database as db_mod
    original_engine = db_mod.engine
    db_mod.engine = db_engine

    from app.dependencies import get_workflow_engine
    from app.main import create_app

    test_app = create_app()
    test_app.dependency_overrides[get_workflow_engine] = lambda: engine

    yield test_app

    test_app.dependency_overrides.clear()
    db_mod.engine = original_engine


@pytest_asyncio.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
