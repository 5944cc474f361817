"""
HR Nexus
A two-sided marketplace for HR consulting gigs.

Architecture:
- SQLite: users, projects, bids, milestones, messages
- FastAPI: REST endpoints under /api and a /ws chat relay
- Generative text API: job descriptions, bid analysis, matchmaking advice
"""

__version__ = "1.0.0"
