"""
Project Routes

GET  /projects                    - List projects (with buyer name), newest first
POST /projects                    - Post a project (auto-creates 3 milestones)
GET  /projects/{project_id}/bids        - Bids on a project (with seller name)
GET  /projects/{project_id}/milestones  - Milestones of a project
GET  /projects/{project_id}/matchmaking - AI ranking of sellers for a project
"""

from fastapi import APIRouter, HTTPException, Depends
from typing import List

from app.services.marketplace_service import (
    ProjectService, BidService, MilestoneService, UserService
)
from app.services.ai_gateway import AIGateway, get_ai_gateway
from app.schemas.schemas import (
    ProjectCreate, ProjectResponse, BidResponse, MilestoneResponse,
    MatchmakingResponse, SuccessResponse
)

router = APIRouter(prefix="/projects", tags=["Projects"])


@router.get("", response_model=List[ProjectResponse])
def list_projects():
    """All projects joined with the buyer's name, newest first."""
    return ProjectService().list_all()


@router.post("", response_model=SuccessResponse, status_code=201)
def create_project(project: ProjectCreate):
    """
    Post a new project.

    Three milestones are created right after the project row:
    20% / 40% / 40% of budget_min, rounded down.
    """
    ProjectService().create(project.model_dump())
    return SuccessResponse()


@router.get("/{project_id}/bids", response_model=List[BidResponse])
def list_project_bids(project_id: str):
    return BidService().list_for_project(project_id)


@router.get("/{project_id}/milestones", response_model=List[MilestoneResponse])
def list_project_milestones(project_id: str):
    return MilestoneService().list_for_project(project_id)


@router.get("/{project_id}/matchmaking", response_model=MatchmakingResponse)
def get_matchmaking(project_id: str, ai: AIGateway = Depends(get_ai_gateway)):
    """
    Ask the AI to rank every seller against this project.

    Sellers are sent as a numbered "name: bio" list. Unknown project -> 404,
    checked before any AI call.
    """
    project = ProjectService().get_by_id(project_id)
    sellers = UserService().list_sellers()

    if not project:
        raise HTTPException(status_code=404, detail="Project not found")

    advice = ai.get_matchmaking_advice(
        project["description"],
        [f"{s['name']}: {s['bio']}" for s in sellers]
    )
    return MatchmakingResponse(advice=advice)
