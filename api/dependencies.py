"""Shared dependencies for API routes."""

from fastapi import Depends, Header

from models.schemas.storage import Caller
from services import auth
from services.storage import ResumeStorage


async def get_current_caller(authorization: str | None = Header(None)) -> Caller:
    token = auth.parse_bearer_token(authorization)
    identity = await auth.get_user(token)
    return Caller(identity=identity, access_token=token)


def get_resume_storage(caller: Caller = Depends(get_current_caller)) -> ResumeStorage:
    return ResumeStorage(access_token=caller.access_token)
