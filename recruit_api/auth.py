"""
API key authentication for the recruiting API
Keys map to user ids; ADMIN_USERS lists the ids with the admin role
"""

import logging
import os
from typing import Dict, Optional, Set

from dotenv import load_dotenv
from fastapi import Security, HTTPException, status
from fastapi.security import APIKeyHeader

# Load .env file
load_dotenv()

logger = logging.getLogger(__name__)

# API Key header
API_KEY_HEADER = APIKeyHeader(name="X-API-Key", auto_error=False)


def get_valid_api_keys() -> Dict[str, str]:
    """Load valid API keys from environment variables"""
    keys = {}

    # Support up to 5 users
    for i in range(1, 6):
        key = os.getenv(f"API_KEY_USER{i}")
        if key:
            keys[key] = f"user{i}"

    if not keys:
        # Development fallback (never use in production)
        if os.getenv("ENVIRONMENT") == "development":
            keys["dev-key-insecure"] = "dev_user"
        else:
            raise ValueError("No API keys configured! Set API_KEY_USER1 in environment")

    return keys


def get_admin_users() -> Set[str]:
    raw = os.getenv("ADMIN_USERS", "user1")
    return {u.strip() for u in raw.split(",") if u.strip()}


def is_admin(user: Optional[str]) -> bool:
    return user is not None and user in get_admin_users()


async def optional_api_key(api_key: str = Security(API_KEY_HEADER)) -> Optional[str]:
    """
    Resolve the caller if a key was sent, else None.

    Used by routes that are public for public profiles.  A key that is
    present but wrong is still a 401.
    """
    if not api_key:
        return None

    valid_keys = get_valid_api_keys()
    if api_key not in valid_keys:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid API key",
            headers={"WWW-Authenticate": "ApiKey"},
        )

    return valid_keys[api_key]


async def verify_api_key(user: Optional[str] = Security(optional_api_key)) -> str:
    """
    Verify API key and return user identifier

    Usage in FastAPI routes:
        @app.post("/api/v1/athletes")
        async def create(user: str = Depends(verify_api_key)):
            ...
    """
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="API key required. Include 'X-API-Key' header.",
            headers={"WWW-Authenticate": "ApiKey"},
        )

    return user


async def verify_admin_api_key(user: str = Security(verify_api_key)) -> str:
    """
    Admin-only routes

    Usage:
        @app.post("/api/v1/ratings/calculate/{athlete_id}")
        async def recalc(user: str = Depends(verify_admin_api_key)):
            ...
    """
    if not is_admin(user):
        logger.warning("Admin route refused for %s", user)
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required"
        )

    return user
