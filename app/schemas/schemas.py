"""
Pydantic Schemas - Request/Response shapes

All API request and response schemas in one file for simplicity.

Request bodies are deliberately permissive: every field is optional and
unparseable numbers become None. Missing columns are rejected by the
store's NOT NULL / CHECK constraints, not by the API.
"""

from pydantic import BaseModel, BeforeValidator
from typing import Annotated, Optional, Any, Union
from enum import Enum


# ============================================================
# ENUMS
# ============================================================

class UserRole(str, Enum):
    buyer = "buyer"
    seller = "seller"


class ProjectStatus(str, Enum):
    open = "open"
    closed = "closed"
    in_progress = "in-progress"


class BidStatus(str, Enum):
    pending = "pending"
    accepted = "accepted"
    rejected = "rejected"


class MilestoneStatus(str, Enum):
    pending = "pending"
    completed = "completed"
    paid = "paid"


# ============================================================
# COERCION HELPERS
# ============================================================

Number = Union[int, float]


def coerce_number(value: Any) -> Optional[Number]:
    """
    Loose numeric coercion for form input.

    "1500" -> 1500, "12.5" -> 12.5, "abc" -> None, True -> None.
    Integral floats collapse to int so INTEGER columns stay integers.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = value
    else:
        try:
            number = float(str(value).strip())
        except ValueError:
            return None
    if number != number or number in (float("inf"), float("-inf")):  # NaN / inf
        return None
    if isinstance(number, float) and number.is_integer():
        return int(number)
    return number


def coerce_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    return value if isinstance(value, str) else str(value)


LooseNumber = Annotated[Optional[Number], BeforeValidator(coerce_number)]
LooseText = Annotated[Optional[str], BeforeValidator(coerce_text)]


# ============================================================
# USER SCHEMAS
# ============================================================

class UserUpsert(BaseModel):
    id: LooseText = None
    name: LooseText = None
    email: LooseText = None
    role: LooseText = None
    bio: LooseText = None
    avatar: LooseText = None


class UserResponse(BaseModel):
    id: str
    name: str
    email: str
    role: UserRole
    bio: Optional[str] = None
    avatar: Optional[str] = None


# ============================================================
# PROJECT SCHEMAS
# ============================================================

class ProjectCreate(BaseModel):
    id: LooseText = None
    buyer_id: LooseText = None
    title: LooseText = None
    description: LooseText = None
    budget_min: LooseNumber = None
    budget_max: LooseNumber = None


class ProjectResponse(BaseModel):
    id: str
    buyer_id: str
    buyer_name: Optional[str] = None
    title: str
    description: str
    budget_min: Optional[Number] = None
    budget_max: Optional[Number] = None
    status: Optional[ProjectStatus] = ProjectStatus.open
    created_at: Optional[str] = None


# ============================================================
# BID SCHEMAS
# ============================================================

class BidCreate(BaseModel):
    id: LooseText = None
    project_id: LooseText = None
    seller_id: LooseText = None
    amount: LooseNumber = None
    proposal: LooseText = None


class BidResponse(BaseModel):
    id: str
    project_id: str
    seller_id: str
    seller_name: Optional[str] = None
    amount: Number
    proposal: str
    status: Optional[BidStatus] = BidStatus.pending
    created_at: Optional[str] = None


# ============================================================
# MILESTONE SCHEMAS
# ============================================================

class MilestoneCreate(BaseModel):
    id: LooseText = None
    project_id: LooseText = None
    title: LooseText = None
    amount: LooseNumber = None


class MilestoneResponse(BaseModel):
    id: str
    project_id: str
    title: str
    amount: Number
    status: Optional[MilestoneStatus] = MilestoneStatus.pending


# ============================================================
# AI SCHEMAS
# ============================================================

class JobDescriptionRequest(BaseModel):
    brief: LooseText = None


class JobDescriptionResponse(BaseModel):
    description: Optional[str] = None


class BidAnalysisRequest(BaseModel):
    project_description: LooseText = None
    proposal: LooseText = None


class BidAnalysisResponse(BaseModel):
    analysis: Optional[str] = None


class MatchmakingResponse(BaseModel):
    advice: Optional[str] = None


# ============================================================
# COMMON SCHEMAS
# ============================================================

class SuccessResponse(BaseModel):
    success: bool = True
