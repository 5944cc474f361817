"""
Bid Routes

POST /bids - Submit a proposal for a project
"""

from fastapi import APIRouter

from app.services.marketplace_service import BidService
from app.schemas.schemas import BidCreate, SuccessResponse

router = APIRouter(prefix="/bids", tags=["Bids"])


@router.post("", response_model=SuccessResponse, status_code=201)
def create_bid(bid: BidCreate):
    """Submit a bid. The same seller may bid on a project more than once."""
    BidService().create(bid.model_dump())
    return SuccessResponse()
