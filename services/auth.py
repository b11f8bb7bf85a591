"""Resolve a Supabase session token to the member it belongs to."""

import logging

import httpx

from config import settings
from models.schemas.storage import CallerIdentity
from services.errors import AuthError

logger = logging.getLogger(__name__)


def parse_bearer_token(authorization: str | None) -> str:
    """Return the token from an ``Authorization: Bearer <token>`` header."""
    if not authorization or not authorization.startswith("Bearer "):
        raise AuthError("Unauthorized: No token")
    token = authorization[len("Bearer "):].strip()
    if not token:
        raise AuthError("Unauthorized: No token")
    return token


async def get_user(
    access_token: str,
    transport: httpx.AsyncBaseTransport | None = None,
) -> CallerIdentity:
    if not settings.supabase_url or not settings.supabase_anon_key:
        logger.error("Supabase auth is not configured")
        raise AuthError("Unauthorized")

    try:
        async with httpx.AsyncClient(timeout=10.0, transport=transport) as client:
            response = await client.get(
                f"{settings.supabase_url.rstrip('/')}/auth/v1/user",
                headers={
                    "Authorization": f"Bearer {access_token}",
                    "apikey": settings.supabase_anon_key,
                },
            )
    except httpx.HTTPError as e:
        logger.error("Auth request failed: %s", e)
        raise AuthError("Unauthorized") from e

    if response.status_code != 200:
        logger.info("Rejected session token (%s)", response.status_code)
        raise AuthError("Unauthorized")

    user = response.json()
    if not user.get("id"):
        raise AuthError("Unauthorized")
    metadata = user.get("user_metadata") or {}
    return CallerIdentity(
        id=user["id"],
        email=user.get("email") or None,
        username=metadata.get("username") or None,
    )
