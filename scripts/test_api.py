#!/usr/bin/env python3
"""
REST API Test Script

Tests:
1. Project posting + auto milestones (end-to-end budget split)
2. Project listing with buyer name
3. Bid submission and listing with seller name
4. User get/upsert
5. Matchmaking advice (404 before any AI call)
6. AI drafting endpoints
7. Store/AI failures surface as raw 500s
8. A slow AI call does not stall other requests
9. Response status fields are typed by their enums

Run: pytest scripts/test_api.py
"""
import threading
import uuid

import httpx
import openai
import pytest
from pydantic import ValidationError

from app.main import app
from app.services.ai_gateway import get_ai_gateway
from app.schemas.schemas import ProjectResponse, BidResponse, MilestoneStatus, ProjectStatus
from conftest import FakeAIGateway


def unique(prefix: str) -> str:
    return f"{prefix}_{uuid.uuid4().hex[:8]}"


def post_project(client, **overrides):
    payload = {
        "id": unique("proj"),
        "buyer_id": "buyer_1",
        "title": "X",
        "description": "Hire an HR lead",
        "budget_min": 1000,
        "budget_max": 2000,
    }
    payload.update(overrides)
    return payload, client.post("/api/projects", json=payload)


# ============================================================
# PROJECTS
# ============================================================

def test_post_project_creates_milestones_totalling_budget_min(client):
    project, response = post_project(client)

    assert response.status_code == 201
    assert response.json() == {"success": True}

    milestones = client.get(f"/api/projects/{project['id']}/milestones").json()
    assert len(milestones) == 3
    assert [m["amount"] for m in milestones] == [200, 400, 400]
    assert sum(m["amount"] for m in milestones) == 1000


def test_listing_includes_new_project_once_with_buyer_name(client):
    project, _ = post_project(client, title="Culture survey")

    projects = client.get("/api/projects").json()
    matches = [p for p in projects if p["id"] == project["id"]]
    assert len(matches) == 1
    assert matches[0]["buyer_name"] == "Acme Corp HR"
    assert matches[0]["status"] == "open"
    assert matches[0]["created_at"]


def test_project_without_id_gets_generated_one(client):
    title = unique("untitled")
    _, response = post_project(client, id=None, title=title)

    assert response.status_code == 201
    assert any(p["title"] == title for p in client.get("/api/projects").json())


def test_non_numeric_budget_is_coerced_to_null(client):
    project, response = post_project(client, budget_min="lots", budget_max="more")

    assert response.status_code == 201
    milestones = client.get(f"/api/projects/{project['id']}/milestones").json()
    assert [m["amount"] for m in milestones] == [0, 0, 0]


def test_numeric_strings_are_accepted(client):
    project, response = post_project(client, budget_min="1500", budget_max="3000")

    assert response.status_code == 201
    milestones = client.get(f"/api/projects/{project['id']}/milestones").json()
    assert [m["amount"] for m in milestones] == [300, 600, 600]


def test_missing_title_is_raw_store_error(client):
    _, response = post_project(client, title=None)

    assert response.status_code == 500
    assert "NOT NULL constraint failed: projects.title" in response.json()["detail"]


def test_unknown_buyer_is_raw_store_error(client):
    _, response = post_project(client, buyer_id=unique("ghost"))

    assert response.status_code == 500
    assert "FOREIGN KEY constraint failed" in response.json()["detail"]


def test_unknown_project_lists_are_empty(client):
    missing = unique("missing")
    assert client.get(f"/api/projects/{missing}/bids").json() == []
    assert client.get(f"/api/projects/{missing}/milestones").json() == []


# ============================================================
# BIDS + MILESTONES
# ============================================================

def test_bid_listing_includes_seller_name(client):
    project, _ = post_project(client)
    bid = {
        "id": unique("bid"), "project_id": project["id"], "seller_id": "seller_1",
        "amount": 1200, "proposal": "I have placed 40 engineers this year.",
    }

    response = client.post("/api/bids", json=bid)
    assert response.status_code == 201

    bids = client.get(f"/api/projects/{project['id']}/bids").json()
    assert len(bids) == 1
    assert bids[0]["id"] == bid["id"]
    assert bids[0]["seller_name"] == "Sarah Jenkins"
    assert bids[0]["status"] == "pending"


def test_same_seller_can_bid_twice(client):
    project, _ = post_project(client)
    for amount in (900, 950):
        client.post("/api/bids", json={
            "project_id": project["id"], "seller_id": "seller_1", "amount": amount, "proposal": "again",
        })

    assert len(client.get(f"/api/projects/{project['id']}/bids").json()) == 2


def test_bid_without_proposal_fails(client):
    response = client.post("/api/bids", json={"project_id": "p1", "seller_id": "seller_1", "amount": 10})

    assert response.status_code == 500
    assert "NOT NULL constraint failed: bids.proposal" in response.json()["detail"]


def test_manual_milestone(client):
    project, _ = post_project(client)
    response = client.post("/api/milestones", json={
        "id": unique("ms"), "project_id": project["id"], "title": "Bonus phase", "amount": 250,
    })

    assert response.status_code == 201
    milestones = client.get(f"/api/projects/{project['id']}/milestones").json()
    assert len(milestones) == 4
    assert milestones[-1]["title"] == "Bonus phase"


# ============================================================
# USERS
# ============================================================

def test_get_seed_user(client):
    response = client.get("/api/users/seller_1")

    assert response.status_code == 200
    assert response.json()["name"] == "Sarah Jenkins"
    assert response.json()["role"] == "seller"


def test_get_unknown_user_is_404(client):
    response = client.get(f"/api/users/{unique('nobody')}")

    assert response.status_code == 404
    assert response.json()["detail"] == "User not found"


def test_upsert_user_updates_existing_row(client):
    user_id = unique("seller")
    user = {"id": user_id, "name": "Jo", "email": f"{user_id}@hr.io", "role": "seller", "bio": "Recruiter"}

    assert client.post("/api/users", json=user).status_code == 201
    assert client.post("/api/users", json={**user, "name": "Jo Smith"}).status_code == 201

    assert client.get(f"/api/users/{user_id}").json()["name"] == "Jo Smith"


def test_upsert_with_taken_email_fails(client):
    response = client.post("/api/users", json={
        "id": unique("buyer"), "name": "Clone", "email": "hr@acme.com", "role": "buyer",
    })

    assert response.status_code == 500
    assert "UNIQUE constraint failed: users.email" in response.json()["detail"]


# ============================================================
# AI
# ============================================================

def test_matchmaking_sends_numbered_sellers(client, fake_ai):
    response = client.get("/api/projects/p1/matchmaking")

    assert response.status_code == 200
    assert response.json() == {"advice": "1. Sarah Jenkins"}

    name, description, bios = fake_ai.calls[0]
    assert name == "matchmaking"
    assert description.startswith("We are looking for a specialized recruiter")
    assert any(b.startswith("Sarah Jenkins: Senior HR Consultant") for b in bios)


def test_matchmaking_unknown_project_is_404_without_ai_call(client, fake_ai):
    response = client.get(f"/api/projects/{unique('missing')}/matchmaking")

    assert response.status_code == 404
    assert response.json()["detail"] == "Project not found"
    assert fake_ai.calls == []


def test_job_description_draft(client, fake_ai):
    response = client.post("/api/ai/job-description", json={"brief": "Hire 3 recruiters"})

    assert response.status_code == 200
    assert "Hire 3 recruiters" in response.json()["description"]


def test_job_description_defaults_brief(client, fake_ai):
    client.post("/api/ai/job-description", json={})

    assert fake_ai.calls == [("job_description", "HR Project")]


def test_bid_analysis(client, fake_ai):
    response = client.post("/api/ai/bid-analysis", json={
        "project_description": "Culture audit", "proposal": "I ran 20 audits",
    })

    assert response.json() == {"analysis": "Score: 8/10"}
    assert fake_ai.calls == [("bid_analysis", "Culture audit", "I ran 20 audits")]


def test_ai_provider_failure_is_500(client):
    error = openai.APIConnectionError(request=httpx.Request("POST", "https://ai.example/chat"))
    app.dependency_overrides[get_ai_gateway] = lambda: FakeAIGateway(error=error)
    try:
        response = client.get("/api/projects/p1/matchmaking")
    finally:
        app.dependency_overrides.pop(get_ai_gateway, None)

    assert response.status_code == 500
    assert response.json()["detail"]


# ============================================================
# HEALTH
# ============================================================

def test_health(client):
    body = client.get("/health").json()

    assert body["sqlite"] == "connected"
    assert body["ai"] == "configured"


# ============================================================
# CONCURRENCY
# ============================================================

class SlowAIGateway(FakeAIGateway):
    """Holds the matchmaking call open until released."""

    def __init__(self):
        super().__init__()
        self.started = threading.Event()
        self.release = threading.Event()
        self.finished = False

    def get_matchmaking_advice(self, project_description, consultant_bios):
        self.started.set()
        self.release.wait(timeout=5)
        self.finished = True
        return super().get_matchmaking_advice(project_description, consultant_bios)


def test_health_answers_while_ai_call_in_flight(client):
    slow = SlowAIGateway()
    app.dependency_overrides[get_ai_gateway] = lambda: slow
    responses = []
    worker = threading.Thread(target=lambda: responses.append(client.get("/api/projects/p1/matchmaking")))
    try:
        worker.start()
        assert slow.started.wait(timeout=5)

        health = client.get("/health")

        assert health.status_code == 200
        assert not slow.finished
    finally:
        slow.release.set()
        worker.join(timeout=10)
        app.dependency_overrides.pop(get_ai_gateway, None)

    assert responses[0].json() == {"advice": "1. Sarah Jenkins"}


# ============================================================
# RESPONSE SCHEMAS
# ============================================================

def test_listed_statuses_are_known_values(client):
    project, _ = post_project(client)

    listed = [p for p in client.get("/api/projects").json() if p["id"] == project["id"]]
    assert ProjectStatus(listed[0]["status"]) is ProjectStatus.open
    milestones = client.get(f"/api/projects/{project['id']}/milestones").json()
    assert {MilestoneStatus(m["status"]) for m in milestones} == {MilestoneStatus.pending}


def test_response_status_rejects_unknown_value():
    row = {"id": "b1", "project_id": "p1", "seller_id": "seller_1", "amount": 10, "proposal": "x"}

    assert BidResponse(**row).status.value == "pending"
    assert ProjectResponse(
        id="p9", buyer_id="buyer_1", title="t", description="d", status="in-progress"
    ).status is ProjectStatus.in_progress
    with pytest.raises(ValidationError):
        BidResponse(**row, status="lost")
