"""
Schemas module - Request/Response schemas for API endpoints.

- Request schemas: permissive bodies, coerced rather than rejected
- Response schemas: rows as the store returns them (plus joined names)
"""

from app.schemas.schemas import (
    UserRole, ProjectStatus, BidStatus, MilestoneStatus,
    UserUpsert, UserResponse, ProjectCreate, ProjectResponse,
    BidCreate, BidResponse, MilestoneCreate, MilestoneResponse,
    SuccessResponse
)

__all__ = [
    "UserRole", "ProjectStatus", "BidStatus", "MilestoneStatus",
    "UserUpsert", "UserResponse", "ProjectCreate", "ProjectResponse",
    "BidCreate", "BidResponse", "MilestoneCreate", "MilestoneResponse",
    "SuccessResponse"
]
