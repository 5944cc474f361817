"""
REST client used by the application state container.

Reads raise on HTTP errors. Writes return True/False and never raise on a
bad status: the views re-fetch afterwards whatever the outcome.
"""
from __future__ import annotations

import os
import typing as t

import requests

BASE_URL = os.getenv("API_BASE_URL") or "http://localhost:3000"
TIMEOUT = 30


def _headers(extra: dict[str, str] | None = None) -> dict[str, str]:
    h = {"Accept": "application/json"}
    if extra:
        h.update(extra)
    return h


class ApiClient:
    def __init__(self, base_url: str = BASE_URL, session: t.Any = None):
        self.base_url = base_url.rstrip("/")
        # anything with requests-style get/post (requests.Session, TestClient)
        self.session = session or requests.Session()

    # ---------------- transport ----------------
    def get(self, path: str, params: dict | None = None):
        r = self.session.get(f"{self.base_url}{path}", headers=_headers(), params=params, timeout=TIMEOUT)
        r.raise_for_status()
        return r.json()

    def post_json(self, path: str, payload: dict):
        r = self.session.post(
            f"{self.base_url}{path}",
            headers=_headers({"Content-Type": "application/json"}),
            json=payload,
            timeout=TIMEOUT,
        )
        r.raise_for_status()
        return r.json()

    def post_unchecked(self, path: str, payload: dict) -> bool:
        r = self.session.post(
            f"{self.base_url}{path}",
            headers=_headers({"Content-Type": "application/json"}),
            json=payload,
            timeout=TIMEOUT,
        )
        return r.status_code < 400

    # ---------------- users ----------------
    def upsert_user(self, user: dict) -> bool:
        return self.post_unchecked("/api/users", user)

    # ---------------- projects ----------------
    def list_projects(self) -> list[dict]:
        return self.get("/api/projects")

    def create_project(self, project: dict) -> bool:
        return self.post_unchecked("/api/projects", project)

    def list_bids(self, project_id: str) -> list[dict]:
        return self.get(f"/api/projects/{project_id}/bids")

    def list_milestones(self, project_id: str) -> list[dict]:
        return self.get(f"/api/projects/{project_id}/milestones")

    # ---------------- bids ----------------
    def create_bid(self, bid: dict) -> bool:
        return self.post_unchecked("/api/bids", bid)

    # ---------------- AI ----------------
    def get_matchmaking_advice(self, project_id: str) -> str | None:
        return self.get(f"/api/projects/{project_id}/matchmaking").get("advice")

    def generate_job_description(self, brief: str) -> str | None:
        return self.post_json("/api/ai/job-description", {"brief": brief}).get("description")

    def analyze_bid(self, project_description: str, proposal: str) -> str | None:
        payload = {"project_description": project_description, "proposal": proposal}
        return self.post_json("/api/ai/bid-analysis", payload).get("analysis")
