"""
Milestone Routes

POST /milestones - Add a milestone to a project
"""

from fastapi import APIRouter

from app.services.marketplace_service import MilestoneService
from app.schemas.schemas import MilestoneCreate, SuccessResponse

router = APIRouter(prefix="/milestones", tags=["Milestones"])


@router.post("", response_model=SuccessResponse, status_code=201)
def create_milestone(milestone: MilestoneCreate):
    MilestoneService().create(milestone.model_dump())
    return SuccessResponse()
