"""
Authentication API endpoints.

Sign-up, login and token refresh happen against Supabase Auth directly
from the client. This router only exposes the local user record the
bearer token resolves to.
"""
from fastapi import APIRouter, Depends
import logging

from core.auth import get_current_user, is_admin
from models import User
from schemas import UserResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/auth", tags=["auth"])


@router.get("/user", response_model=UserResponse)
def get_me(current_user: User = Depends(get_current_user)):
    """Current user, created from token claims on first sight."""
    response = UserResponse.model_validate(current_user)
    response.is_admin = is_admin(current_user)
    return response
