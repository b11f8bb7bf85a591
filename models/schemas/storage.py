"""Rows returned by the storage and identity collaborators."""

from datetime import datetime

from pydantic import BaseModel


class StoredObject(BaseModel):
    """One entry of a storage folder listing."""
    name: str
    created_at: datetime | None = None
    size: int = 0


class CallerIdentity(BaseModel):
    """The authenticated member behind a bearer token."""
    id: str
    email: str | None = None
    username: str | None = None

    @property
    def display_name(self) -> str:
        if self.username:
            return self.username
        if self.email:
            return self.email.split("@")[0]
        return self.id


class Caller(BaseModel):
    """Identity plus the token it was resolved from.

    The token is forwarded to storage so requests run with the member's
    own permissions.
    """
    identity: CallerIdentity
    access_token: str
