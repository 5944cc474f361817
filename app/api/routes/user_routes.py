"""
User Routes

GET  /users/{user_id} - Get a user profile
POST /users           - Create or update a user (login upserts the profile)
"""

from fastapi import APIRouter, HTTPException

from app.services.marketplace_service import UserService
from app.schemas.schemas import UserUpsert, UserResponse, SuccessResponse

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("/{user_id}", response_model=UserResponse)
def get_user(user_id: str):
    user = UserService().get_by_id(user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user


@router.post("", response_model=SuccessResponse, status_code=201)
def upsert_user(user: UserUpsert):
    """
    Create the user, or update it when the id already exists.

    The identity is trusted as sent; the stored role never changes.
    """
    UserService().upsert(user.model_dump())
    return SuccessResponse()
