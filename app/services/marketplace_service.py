"""
Marketplace Service - CRUD operations for the SQLite tables.

Tables in this database:
1. users       - buyers and sellers (upserted on login)
2. projects    - posted by buyers, listed newest first
3. bids        - proposals from sellers against a project
4. milestones  - payment checkpoints, three auto-created per project
5. messages    - chat history written by the real-time relay

Only create and read are exposed. Nothing here updates a project, bid or
milestone after creation, and nothing is ever deleted.
"""

import logging
import math
import uuid
from typing import Optional, List, Dict, Any

from sqlalchemy import text

from app.db.sqlite import get_db_session, execute_raw_sql

logger = logging.getLogger(__name__)


# ============================================================
# AUTO MILESTONES
# Three checkpoints derived from budget_min only
# ============================================================

DEFAULT_MILESTONES = [
    ("Project Kickoff & Strategy", 0.2),
    ("Initial Talent Sourcing", 0.4),
    ("Final Placement & Onboarding", 0.4),
]


def new_id() -> str:
    return str(uuid.uuid4())


def build_default_milestones(project_id: str, budget_min: Optional[float]) -> List[dict]:
    """
    Build the three milestone rows for a freshly posted project.

    Amounts are floor(share * budget_min). A missing budget counts as 0.
    """
    budget = budget_min or 0
    return [
        {
            "id": new_id(),
            "project_id": project_id,
            "title": title,
            "amount": math.floor(budget * share),
        }
        for title, share in DEFAULT_MILESTONES
    ]


# ============================================================
# USERS TABLE
# ============================================================

class UserService:
    """Handles user lookup and the create-or-update used by login."""

    def get_by_id(self, user_id: str) -> Optional[dict]:
        rows = execute_raw_sql("SELECT * FROM users WHERE id = :id", {"id": user_id})
        return rows[0] if rows else None

    def upsert(self, user: Dict[str, Any]) -> None:
        """
        Insert a user, or update name/email/bio/avatar when the id exists.

        The role column is left untouched on conflict: a user's role is
        fixed the first time the row is written.
        """
        with get_db_session() as db:
            db.execute(
                text("""
                    INSERT INTO users (id, name, email, role, bio, avatar)
                    VALUES (:id, :name, :email, :role, :bio, :avatar)
                    ON CONFLICT(id) DO UPDATE SET
                        name = excluded.name,
                        email = excluded.email,
                        bio = excluded.bio,
                        avatar = excluded.avatar
                """),
                {
                    "id": user.get("id"),
                    "name": user.get("name"),
                    "email": user.get("email"),
                    "role": user.get("role"),
                    "bio": user.get("bio"),
                    "avatar": user.get("avatar"),
                }
            )

    def list_sellers(self) -> List[dict]:
        return execute_raw_sql("SELECT * FROM users WHERE role = 'seller'")


# ============================================================
# PROJECTS TABLE
# ============================================================

class ProjectService:
    """Handles project posting and the marketplace listing."""

    def list_all(self) -> List[dict]:
        """All projects with the buyer's name, newest first."""
        return execute_raw_sql("""
            SELECT projects.*, users.name AS buyer_name
            FROM projects JOIN users ON projects.buyer_id = users.id
            ORDER BY projects.created_at DESC, projects.rowid DESC
        """)

    def get_by_id(self, project_id: str) -> Optional[dict]:
        rows = execute_raw_sql("SELECT * FROM projects WHERE id = :id", {"id": project_id})
        return rows[0] if rows else None

    def create(self, project: Dict[str, Any]) -> str:
        """
        Insert a project, then its three default milestones.

        The two steps commit separately: a failure while inserting
        milestones leaves the project row in place.
        """
        project_id = project.get("id") or new_id()

        with get_db_session() as db:
            db.execute(
                text("""
                    INSERT INTO projects (id, buyer_id, title, description, budget_min, budget_max)
                    VALUES (:id, :buyer_id, :title, :description, :budget_min, :budget_max)
                """),
                {
                    "id": project_id,
                    "buyer_id": project.get("buyer_id"),
                    "title": project.get("title"),
                    "description": project.get("description"),
                    "budget_min": project.get("budget_min"),
                    "budget_max": project.get("budget_max"),
                }
            )

        milestone_service = MilestoneService()
        for milestone in build_default_milestones(project_id, project.get("budget_min")):
            milestone_service.create(milestone)

        logger.info("Project %s posted by %s", project_id, project.get("buyer_id"))
        return project_id


# ============================================================
# BIDS TABLE
# ============================================================

class BidService:
    """Handles seller proposals. A seller may bid on a project many times."""

    def create(self, bid: Dict[str, Any]) -> str:
        bid_id = bid.get("id") or new_id()
        with get_db_session() as db:
            db.execute(
                text("""
                    INSERT INTO bids (id, project_id, seller_id, amount, proposal)
                    VALUES (:id, :project_id, :seller_id, :amount, :proposal)
                """),
                {
                    "id": bid_id,
                    "project_id": bid.get("project_id"),
                    "seller_id": bid.get("seller_id"),
                    "amount": bid.get("amount"),
                    "proposal": bid.get("proposal"),
                }
            )
        return bid_id

    def list_for_project(self, project_id: str) -> List[dict]:
        """Bids on a project with the seller's name joined in."""
        return execute_raw_sql(
            """
            SELECT bids.*, users.name AS seller_name
            FROM bids JOIN users ON bids.seller_id = users.id
            WHERE bids.project_id = :project_id
            """,
            {"project_id": project_id}
        )


# ============================================================
# MILESTONES TABLE
# ============================================================

class MilestoneService:

    def create(self, milestone: Dict[str, Any]) -> str:
        milestone_id = milestone.get("id") or new_id()
        with get_db_session() as db:
            db.execute(
                text("""
                    INSERT INTO milestones (id, project_id, title, amount)
                    VALUES (:id, :project_id, :title, :amount)
                """),
                {
                    "id": milestone_id,
                    "project_id": milestone.get("project_id"),
                    "title": milestone.get("title"),
                    "amount": milestone.get("amount"),
                }
            )
        return milestone_id

    def list_for_project(self, project_id: str) -> List[dict]:
        return execute_raw_sql(
            "SELECT * FROM milestones WHERE project_id = :project_id ORDER BY rowid",
            {"project_id": project_id}
        )


# ============================================================
# MESSAGES TABLE
# Append-only; written by the chat relay before fan-out
# ============================================================

class MessageService:

    def create(self, sender_id: str, receiver_id: str, content: str) -> int:
        with get_db_session() as db:
            result = db.execute(
                text("""
                    INSERT INTO messages (sender_id, receiver_id, content)
                    VALUES (:sender_id, :receiver_id, :content)
                """),
                {"sender_id": sender_id, "receiver_id": receiver_id, "content": content}
            )
            return result.lastrowid

    def list_between(self, user_a: str, user_b: str) -> List[dict]:
        """Conversation between two users in send order."""
        return execute_raw_sql(
            """
            SELECT * FROM messages
            WHERE (sender_id = :a AND receiver_id = :b)
               OR (sender_id = :b AND receiver_id = :a)
            ORDER BY id
            """,
            {"a": user_a, "b": user_b}
        )
