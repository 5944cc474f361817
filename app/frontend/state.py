"""
Application state container for the marketplace UI.

The UI is one of six views. Each view is a frozen dataclass carrying
exactly the data it renders; `AppState` owns the current view, the
logged-in user and the chat messages received so far, and moves between
views through the transition methods below. Every transition that enters
a view re-fetches that view's data from the API.

Nothing here depends on a UI toolkit: a renderer only needs `view_name()`
and the fields of the current view.
"""
from __future__ import annotations

import logging
import typing as t
import uuid
from dataclasses import dataclass, field, replace

from app.frontend.api_client import ApiClient
from app.frontend.chat_client import ChatClient

logger = logging.getLogger(__name__)


# ============================================================
# MOCK LOGIN PROFILES
# The role picked on the login screen decides who you are.
# ============================================================

MOCK_USERS = {
    "buyer": {
        "id": "buyer_1",
        "name": "Acme Corp HR",
        "email": "hr@acme.com",
        "role": "buyer",
        "bio": "Fast-growing tech startup looking for HR expertise.",
        "avatar": "https://api.dicebear.com/7.x/avataaars/svg?seed=Acme",
    },
    "seller": {
        "id": "seller_1",
        "name": "Sarah Jenkins",
        "email": "sarah@hrconsulting.com",
        "role": "seller",
        "bio": "Senior HR Consultant with 10 years experience in tech recruitment and organizational design.",
        "avatar": "https://api.dicebear.com/7.x/avataaars/svg?seed=Sarah",
    },
}

DASHBOARD_PREVIEW = 3


# ============================================================
# VIEWS
# ============================================================

@dataclass(frozen=True)
class Landing:
    pass


@dataclass(frozen=True)
class Login:
    pass


@dataclass(frozen=True)
class Dashboard:
    projects: tuple = ()
    posting_project: bool = False
    draft_description: t.Optional[str] = None


@dataclass(frozen=True)
class Marketplace:
    projects: tuple = ()


@dataclass(frozen=True)
class ProjectDetail:
    project: dict
    bids: tuple = ()
    milestones: tuple = ()
    matchmaking_advice: t.Optional[str] = None
    bid_analysis: t.Optional[str] = None


@dataclass(frozen=True)
class Chat:
    partner: dict
    messages: tuple = ()


View = t.Union[Landing, Login, Dashboard, Marketplace, ProjectDetail, Chat]


def view_name(view: View) -> str:
    if isinstance(view, Landing):
        return "landing"
    if isinstance(view, Login):
        return "login"
    if isinstance(view, Dashboard):
        return "dashboard"
    if isinstance(view, Marketplace):
        return "marketplace"
    if isinstance(view, ProjectDetail):
        return "project-detail"
    if isinstance(view, Chat):
        return "chat"
    raise TypeError(f"Unknown view: {view!r}")


def conversation(messages: t.Iterable[dict], user_id: str, partner_id: str) -> tuple:
    """Messages exchanged between two users, in arrival order."""
    return tuple(
        m for m in messages
        if (m.get("sender_id") == user_id and m.get("receiver_id") == partner_id)
        or (m.get("sender_id") == partner_id and m.get("receiver_id") == user_id)
    )


class InvalidTransition(Exception):
    """Raised when a transition is not possible from the current view."""


# ============================================================
# STATE CONTAINER
# ============================================================

@dataclass
class AppState:
    api: ApiClient
    chat: t.Optional[ChatClient] = None
    view: View = field(default_factory=Landing)
    current_user: t.Optional[dict] = None
    messages: list = field(default_factory=list)

    @property
    def name(self) -> str:
        return view_name(self.view)

    @property
    def is_buyer(self) -> bool:
        return bool(self.current_user) and self.current_user.get("role") == "buyer"

    def active_projects(self) -> list[dict]:
        """Dashboard preview: a buyer's own projects, or everything for a seller."""
        projects = getattr(self.view, "projects", ())
        if self.is_buyer:
            projects = [p for p in projects if p.get("buyer_id") == self.current_user["id"]]
        return list(projects)[:DASHBOARD_PREVIEW]

    def _require(self, *view_types):
        if not isinstance(self.view, view_types):
            raise InvalidTransition(f"not allowed from {self.name}")

    def _require_user(self) -> dict:
        if not self.current_user:
            raise InvalidTransition("no user logged in")
        return self.current_user

    # ---------------- session ----------------
    def go_to_login(self) -> None:
        self.view = Login()

    def login(self, role: str) -> None:
        """Upsert the mock profile for `role`, join its chat room, open the dashboard."""
        user = dict(MOCK_USERS[role])
        self.api.upsert_user(user)
        self.current_user = user
        if self.chat:
            self.chat.join(user["id"])
        logger.info("Logged in as %s", user["id"])
        self.show_dashboard()

    def logout(self) -> None:
        self.current_user = None
        self.view = Landing()

    # ---------------- navigation ----------------
    def show_dashboard(self) -> None:
        self._require_user()
        self.view = Dashboard(projects=tuple(self.api.list_projects()))

    def show_marketplace(self) -> None:
        self._require_user()
        self.view = Marketplace(projects=tuple(self.api.list_projects()))

    def open_project(self, project: dict) -> None:
        self._require(Dashboard, Marketplace)
        self.view = ProjectDetail(
            project=project,
            bids=tuple(self.api.list_bids(project["id"])),
            milestones=tuple(self.api.list_milestones(project["id"])),
        )

    def back_from_project(self) -> None:
        self._require(ProjectDetail)
        if self.is_buyer:
            self.show_dashboard()
        else:
            self.show_marketplace()

    def open_chat(self, partner: dict) -> None:
        user = self._require_user()
        self.view = Chat(partner=partner, messages=conversation(self.messages, user["id"], partner["id"]))

    # ---------------- dashboard ----------------
    def start_posting_project(self) -> None:
        self._require(Dashboard)
        self.view = replace(self.view, posting_project=True)

    def draft_description(self, brief: str) -> t.Optional[str]:
        """Ask the AI for a description; keep it on the open posting form."""
        self._require(Dashboard)
        text = self.api.generate_job_description(brief or "HR Project")
        self.view = replace(self.view, draft_description=text)
        return text

    def post_project(self, title: str, description: str, budget_min: t.Any, budget_max: t.Any) -> bool:
        """Post as the current buyer, close the form and re-fetch, whatever the API said."""
        user = self._require_user()
        ok = self.api.create_project({
            "id": str(uuid.uuid4()),
            "buyer_id": user["id"],
            "title": title,
            "description": description,
            "budget_min": budget_min,
            "budget_max": budget_max,
            "status": "open",
        })
        self.show_dashboard()
        return ok

    # ---------------- project detail ----------------
    def place_bid(self, amount: t.Any, proposal: str) -> bool:
        self._require(ProjectDetail)
        user = self._require_user()
        ok = self.api.create_bid({
            "id": str(uuid.uuid4()),
            "project_id": self.view.project["id"],
            "seller_id": user["id"],
            "amount": amount,
            "proposal": proposal,
        })
        self.show_dashboard()
        return ok

    def request_matchmaking(self) -> t.Optional[str]:
        self._require(ProjectDetail)
        advice = self.api.get_matchmaking_advice(self.view.project["id"])
        self.view = replace(self.view, matchmaking_advice=advice)
        return advice

    def analyze_bid(self, bid: dict) -> t.Optional[str]:
        self._require(ProjectDetail)
        analysis = self.api.analyze_bid(self.view.project["description"], bid["proposal"])
        self.view = replace(self.view, bid_analysis=analysis)
        return analysis

    def dismiss_ai_result(self) -> None:
        self._require(ProjectDetail)
        self.view = replace(self.view, matchmaking_advice=None, bid_analysis=None)

    def message_bidder(self, bid: dict) -> None:
        """Open a chat with the seller behind a bid."""
        self._require(ProjectDetail)
        self.open_chat({"id": bid["seller_id"], "name": bid.get("seller_name"), "email": "", "role": "seller"})

    # ---------------- chat ----------------
    def send_message(self, content: str) -> bool:
        """Send to the open chat partner. The relay echoes it back to us."""
        if not self.chat or not self.current_user or not isinstance(self.view, Chat):
            return False
        self.chat.send_message(self.current_user["id"], self.view.partner["id"], content)
        return True

    def receive_message(self, message: dict) -> None:
        self.messages.append(message)
        if isinstance(self.view, Chat) and self.current_user:
            self.view = replace(
                self.view,
                messages=conversation(self.messages, self.current_user["id"], self.view.partner["id"]),
            )

    def pump_chat(self) -> t.Optional[dict]:
        """Block for one frame from the relay and apply it."""
        if not self.chat:
            return None
        message = self.chat.receive()
        if message is not None:
            self.receive_message(message)
        return message
