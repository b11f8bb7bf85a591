"""Pydantic contracts shared by the ingestion pipeline and the API."""

from models.schemas.ingestion import ExtractedContent
from models.schemas.parsed_resume import (
    Certification,
    Experience,
    ParsedResumeData,
    Project,
)
from models.schemas.storage import Caller, CallerIdentity, StoredObject

__all__ = [
    "Caller",
    "CallerIdentity",
    "Certification",
    "Experience",
    "ExtractedContent",
    "ParsedResumeData",
    "Project",
    "StoredObject",
]
