"""Listing and deleting a member's stored resume versions."""

import logging

from models.responses import ResumeVersion
from services.errors import ValidationError
from services.storage import ResumeStorage

logger = logging.getLogger(__name__)


async def list_versions(storage: ResumeStorage, member_id: str) -> list[ResumeVersion]:
    """Stored resumes for a member, newest first."""
    files = await storage.list(member_id)
    versions = [
        ResumeVersion(
            name=f.name,
            created_at=f.created_at,
            size=f.size,
            public_url=storage.public_url(f"{member_id}/{f.name}"),
        )
        for f in files
    ]
    versions.sort(key=lambda v: v.created_at.timestamp() if v.created_at else 0.0, reverse=True)
    return versions


async def delete_version(storage: ResumeStorage, member_id: str, file_name: str) -> None:
    if not file_name or "/" in file_name or "\\" in file_name or ".." in file_name:
        raise ValidationError("Invalid file name")
    await storage.remove([f"{member_id}/{file_name}"])
    logger.info("Deleted resume version %s/%s", member_id, file_name)
