"""
Authentication and authorization dependencies.

Provides FastAPI dependencies for:
- Getting the current user from a Supabase access token
- Admin gating for catalog management
"""
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from typing import Dict, Optional
from uuid import UUID
import logging

from core.config import settings
from core.database import get_db
from core.exceptions import ForbiddenError, UnauthorizedError
from core.security import decode_access_token
from models import User

logger = logging.getLogger(__name__)

# Use auto_error=False to handle missing credentials manually and return 401 (not 403)
security = HTTPBearer(auto_error=False)


def upsert_user_from_claims(db: Session, user_id: UUID, payload: Dict) -> User:
    """
    Ensure a local users row exists for the token subject.

    Profile fields come from Supabase `user_metadata`; missing values are
    stored as NULL rather than overwritten with empty strings.
    """
    metadata = payload.get("user_metadata") or {}
    user = db.query(User).filter(User.id == user_id).first()
    if user is None:
        user = User(id=user_id)
        db.add(user)
        logger.info(f"Created local user for Supabase subject {user_id}")

    user.email = payload.get("email") or user.email
    user.first_name = metadata.get("first_name") or user.first_name
    user.last_name = metadata.get("last_name") or user.last_name
    user.profile_image_url = metadata.get("avatar_url") or user.profile_image_url
    db.commit()
    db.refresh(user)
    return user


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db)
) -> User:
    """
    Get the current authenticated user from a Supabase JWT.

    Raises UnauthorizedError (401) if the token is missing or invalid.
    """
    if not credentials:
        raise UnauthorizedError("Not authenticated")

    payload = decode_access_token(credentials.credentials)
    if not payload:
        raise UnauthorizedError("Invalid authentication credentials")

    user_id = payload.get("sub")
    if not user_id:
        raise UnauthorizedError("Invalid token payload")

    try:
        user_id_uuid = UUID(user_id)
    except ValueError:
        raise UnauthorizedError("Invalid user ID format")

    return upsert_user_from_claims(db, user_id_uuid, payload)


def is_admin(user: User) -> bool:
    return bool(user.email) and user.email.lower() in settings.admin_emails


def require_admin(
    current_user: User = Depends(get_current_user)
) -> User:
    """Require an email listed in ADMIN_EMAILS."""
    if not is_admin(current_user):
        raise ForbiddenError("Admin access required")
    return current_user
