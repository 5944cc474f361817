"""
SQLite Connection Utility

One file holds the whole marketplace:
- users, projects, bids, milestones (foreign keys enforced)
- messages (chat history, append-only)

The schema is created idempotently on startup and the fixed seed rows are
inserted with INSERT OR IGNORE, so restarting never duplicates them.
"""
import logging

from sqlalchemy import create_engine, event, text
from sqlalchemy.orm import sessionmaker
from contextlib import contextmanager

from app.core.config import get_settings

logger = logging.getLogger(__name__)

settings = get_settings()

# check_same_thread=False: FastAPI runs sync work on a threadpool
engine = create_engine(
    settings.database_url,
    connect_args={"check_same_thread": False},
    echo=settings.debug  # Log SQL queries in debug mode
)


@event.listens_for(engine, "connect")
def _enable_foreign_keys(dbapi_connection, connection_record):
    """SQLite ships with foreign keys off; turn them on per connection."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


# Session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


SCHEMA_STATEMENTS = [
    """
    CREATE TABLE IF NOT EXISTS users (
        id TEXT PRIMARY KEY,
        name TEXT NOT NULL,
        email TEXT UNIQUE NOT NULL,
        role TEXT CHECK(role IN ('buyer', 'seller')) NOT NULL,
        bio TEXT,
        avatar TEXT
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS projects (
        id TEXT PRIMARY KEY,
        buyer_id TEXT NOT NULL,
        title TEXT NOT NULL,
        description TEXT NOT NULL,
        budget_min INTEGER,
        budget_max INTEGER,
        status TEXT DEFAULT 'open',
        created_at DATETIME DEFAULT CURRENT_TIMESTAMP,
        FOREIGN KEY(buyer_id) REFERENCES users(id)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS bids (
        id TEXT PRIMARY KEY,
        project_id TEXT NOT NULL,
        seller_id TEXT NOT NULL,
        amount INTEGER NOT NULL,
        proposal TEXT NOT NULL,
        status TEXT DEFAULT 'pending',
        created_at DATETIME DEFAULT CURRENT_TIMESTAMP,
        FOREIGN KEY(project_id) REFERENCES projects(id),
        FOREIGN KEY(seller_id) REFERENCES users(id)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS messages (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        sender_id TEXT NOT NULL,
        receiver_id TEXT NOT NULL,
        content TEXT NOT NULL,
        timestamp DATETIME DEFAULT CURRENT_TIMESTAMP
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS milestones (
        id TEXT PRIMARY KEY,
        project_id TEXT NOT NULL,
        title TEXT NOT NULL,
        amount INTEGER NOT NULL,
        status TEXT DEFAULT 'pending',
        FOREIGN KEY(project_id) REFERENCES projects(id)
    )
    """,
]

SEED_USERS = [
    {
        "id": "buyer_1",
        "name": "Acme Corp HR",
        "email": "hr@acme.com",
        "role": "buyer",
        "bio": "Fast-growing tech startup looking for HR expertise.",
        "avatar": "https://api.dicebear.com/7.x/avataaars/svg?seed=Acme",
    },
    {
        "id": "seller_1",
        "name": "Sarah Jenkins",
        "email": "sarah@hrconsulting.com",
        "role": "seller",
        "bio": "Senior HR Consultant with 10 years experience in tech recruitment and organizational design.",
        "avatar": "https://api.dicebear.com/7.x/avataaars/svg?seed=Sarah",
    },
]

SEED_PROJECTS = [
    {
        "id": "p1",
        "buyer_id": "buyer_1",
        "title": "Technical Recruitment for Engineering Team",
        "description": "We are looking for a specialized recruiter to help us hire 5 senior software engineers and 2 product managers over the next 3 months.",
        "budget_min": 5000,
        "budget_max": 15000,
    },
    {
        "id": "p2",
        "buyer_id": "buyer_1",
        "title": "Organizational Culture Audit",
        "description": "Need an HR expert to conduct a full culture audit and provide recommendations for improving employee engagement in a remote-first environment.",
        "budget_min": 3000,
        "budget_max": 8000,
    },
]


@contextmanager
def get_db_session():
    """
    Context manager for database sessions.
    Usage:
        with get_db_session() as db:
            db.execute(text("SELECT * FROM users"))
    """
    session = SessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def init_db() -> None:
    """Create tables if missing and insert the fixed seed rows."""
    with get_db_session() as db:
        for statement in SCHEMA_STATEMENTS:
            db.execute(text(statement))

        db.execute(
            text("""
                INSERT OR IGNORE INTO users (id, name, email, role, bio, avatar)
                VALUES (:id, :name, :email, :role, :bio, :avatar)
            """),
            SEED_USERS
        )
        db.execute(
            text("""
                INSERT OR IGNORE INTO projects (id, buyer_id, title, description, budget_min, budget_max)
                VALUES (:id, :buyer_id, :title, :description, :budget_min, :budget_max)
            """),
            SEED_PROJECTS
        )
    logger.info("Database schema ready (%s)", settings.database_url)


def test_sqlite_connection() -> bool:
    """
    Test if the SQLite file is reachable.
    Returns True if connection successful, False otherwise.
    """
    try:
        with get_db_session() as db:
            result = db.execute(text("SELECT 1 as test"))
            row = result.fetchone()
            return row[0] == 1
    except Exception as e:
        logger.error("SQLite connection failed: %s", e)
        return False


def execute_raw_sql(sql: str, params: dict = None) -> list:
    """
    Execute raw SQL and return results as list of dicts.
    This is useful for joins the API returns directly.
    """
    with get_db_session() as db:
        result = db.execute(text(sql), params or {})
        # Convert rows to dicts
        columns = result.keys()
        return [dict(zip(columns, row)) for row in result.fetchall()]
