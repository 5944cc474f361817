"""
AI Routes

POST /ai/job-description - Draft a project description from a brief
POST /ai/bid-analysis    - Score a bid proposal against a project description

Both return the model's text untouched (Markdown, not sanitised).
"""

from fastapi import APIRouter, Depends

from app.services.ai_gateway import AIGateway, get_ai_gateway
from app.schemas.schemas import (
    JobDescriptionRequest, JobDescriptionResponse,
    BidAnalysisRequest, BidAnalysisResponse
)

router = APIRouter(prefix="/ai", tags=["AI"])


@router.post("/job-description", response_model=JobDescriptionResponse)
def draft_job_description(request: JobDescriptionRequest, ai: AIGateway = Depends(get_ai_gateway)):
    """The UI falls back to "HR Project" when no title was typed."""
    description = ai.generate_job_description(request.brief or "HR Project")
    return JobDescriptionResponse(description=description)


@router.post("/bid-analysis", response_model=BidAnalysisResponse)
def analyze_bid(request: BidAnalysisRequest, ai: AIGateway = Depends(get_ai_gateway)):
    analysis = ai.analyze_bid(request.project_description, request.proposal)
    return BidAnalysisResponse(analysis=analysis)
