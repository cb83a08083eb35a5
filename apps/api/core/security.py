"""
Security utilities for authentication.

Access tokens are issued by Supabase Auth and verified here with the
project's JWT secret. Nothing in this service issues tokens to end users;
`create_access_token` exists for scripts and tests that need a token
Supabase would accept.

SECURITY REQUIREMENTS:
- SUPABASE_JWT_SECRET must be set via environment variable
- SUPABASE_JWT_SECRET must NEVER be committed to source control
"""
from datetime import datetime, timedelta, timezone
from typing import Optional, Dict
from jose import JWTError, jwt
from core.config import settings

SECRET_KEY = settings.SUPABASE_JWT_SECRET

# Validate secret strength at module load
if len(SECRET_KEY) < 32:
    raise ValueError(
        "SUPABASE_JWT_SECRET must be at least 32 characters. "
        "Copy it from the Supabase dashboard (Project Settings -> API)."
    )

ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = 60  # Supabase default access token lifetime


def create_access_token(data: Dict, expires_delta: Optional[timedelta] = None) -> str:
    """Create a Supabase-shaped JWT access token."""
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)

    to_encode.setdefault("aud", settings.SUPABASE_JWT_AUDIENCE)
    to_encode.setdefault("role", "authenticated")
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)


def decode_access_token(token: str) -> Optional[Dict]:
    """Decode and validate a Supabase access token. Returns None when invalid."""
    try:
        return jwt.decode(
            token,
            SECRET_KEY,
            algorithms=[ALGORITHM],
            audience=settings.SUPABASE_JWT_AUDIENCE,
        )
    except JWTError:
        return None

