"""
Shared pytest fixtures.

The app reads its settings at import time, so the database location and a
dummy AI key are set here, before any test module imports `app`.
"""
import os
import sys
import tempfile

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

_DB_DIR = tempfile.mkdtemp(prefix="hr_nexus_test_")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_DB_DIR, 'hr_nexus_test.db')}"
os.environ["GEMINI_API_KEY"] = "test-key"

import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.services.ai_gateway import get_ai_gateway


class FakeAIGateway:
    """Records every prompt call instead of reaching the provider."""

    def __init__(self, error: Exception = None):
        self.calls = []
        self.error = error

    def _record(self, name, *args):
        self.calls.append((name,) + args)
        if self.error:
            raise self.error

    def generate_job_description(self, brief):
        self._record("job_description", brief)
        return f"## Scope of Work\n{brief}"

    def analyze_bid(self, project_description, bid_proposal):
        self._record("bid_analysis", project_description, bid_proposal)
        return "Score: 8/10"

    def get_matchmaking_advice(self, project_description, consultant_bios):
        self._record("matchmaking", project_description, consultant_bios)
        return "1. Sarah Jenkins"


@pytest.fixture
def fake_ai():
    fake = FakeAIGateway()
    app.dependency_overrides[get_ai_gateway] = lambda: fake
    yield fake
    app.dependency_overrides.pop(get_ai_gateway, None)


@pytest.fixture
def client():
    # entering the context runs the startup event (schema + seed rows)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def db():
    """Schema + seed rows without going through the HTTP app."""
    from app.db.sqlite import init_db

    init_db()
