"""Orchestrator: resume ingestion pipeline.

Pipeline:
1. Validate the upload (media type, size)
2. Extract text and embedded links from the PDF
3. Clean the text with Gemini (best effort, falls back to raw text)
4. Extract structured fields with Gemini
5. Require name and email
6. Rotate the member's stored resume versions
7. Upload the new file (never overwriting)
8. Attach the public URL to the result

Nothing is returned unless every step succeeds.
"""

import asyncio
import logging
import re
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime, timezone

from config import settings
from models.requests import RawUpload
from models.schemas.parsed_resume import ParsedResumeData
from models.schemas.storage import Caller, CallerIdentity, StoredObject
from services import pdf_parser, resume_extractor, text_cleaner
from services.errors import IngestionError, ValidationError
from services.storage import ResumeStorage

logger = logging.getLogger(__name__)

PDF_CONTENT_TYPE = "application/pdf"

_UNSAFE_NAME_RE = re.compile(r"[^A-Za-z0-9_-]+")
_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


@dataclass(frozen=True)
class IngestionResult:
    data: ParsedResumeData
    file_path: str


@contextmanager
def _stage(context: str):
    """Turn unclassified failures inside a step into a generic error."""
    try:
        yield
    except IngestionError:
        raise
    except Exception as e:
        logger.exception("Resume ingestion failed while %s", context)
        raise IngestionError(f"Failed to process resume while {context}") from e


def validate_upload(upload: RawUpload, max_bytes: int | None = None) -> None:
    if max_bytes is None:
        max_bytes = settings.max_upload_bytes
    media_type = upload.content_type.split(";")[0].strip().lower()
    if media_type != PDF_CONTENT_TYPE:
        raise ValidationError("Only PDF files are supported")
    if upload.size > max_bytes:
        raise ValidationError(f"File size exceeds {max_bytes // (1024 * 1024)}MB limit")


def build_object_name(identity: CallerIdentity, now: datetime | None = None) -> str:
    """``<member id>/<name>_<timestamp>.pdf`` with a filesystem-safe timestamp."""
    now = (now or datetime.now(timezone.utc)).astimezone(timezone.utc)
    timestamp = now.isoformat(timespec="milliseconds").replace("+00:00", "Z")
    timestamp = re.sub(r"[:.]", "-", timestamp)
    name = _UNSAFE_NAME_RE.sub("_", identity.display_name).strip("_") or identity.id
    return f"{identity.id}/{name}_{timestamp}.pdf"


def _age_key(obj: StoredObject) -> tuple:
    created_at = obj.created_at
    if created_at is not None and created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=timezone.utc)
    return (created_at is not None, created_at or _EPOCH, obj.name)


async def enforce_retention(
    storage: ResumeStorage,
    folder: str,
    max_versions: int | None = None,
) -> str | None:
    """Delete the oldest file in ``folder`` if it already holds the maximum.

    Returns the evicted file name, if any. Listing and deleting are separate
    calls, so two concurrent uploads can briefly leave one extra file.
    """
    if max_versions is None:
        max_versions = settings.max_resume_versions
    files = await storage.list(folder)
    if len(files) < max_versions:
        return None

    oldest = min(files, key=_age_key)
    await storage.remove([f"{folder}/{oldest.name}"])
    logger.info("Evicted oldest resume version %s/%s", folder, oldest.name)
    return oldest.name


async def ingest_resume(
    upload: RawUpload,
    caller: Caller,
    storage: ResumeStorage,
) -> IngestionResult:
    """Run the full pipeline for one uploaded resume."""
    identity = caller.identity

    # --- Step 1: Upload validation ---
    validate_upload(upload)

    # --- Step 2: Text and link extraction ---
    with _stage("reading the PDF"):
        content = await asyncio.to_thread(pdf_parser.extract_content, upload.content)
    if not content.text.strip():
        raise ValidationError("Could not extract text from PDF.")
    logger.info(
        "Extracted %d chars and %d links for member %s",
        len(content.text), len(content.links), identity.id,
    )

    # --- Step 3: Text cleanup (never fails) ---
    cleaned = await text_cleaner.clean_text(content.text)
    if cleaned.used_fallback:
        logger.info("Continuing with uncleaned resume text for member %s", identity.id)

    # --- Step 4: Structured extraction ---
    with _stage("extracting resume details"):
        data = await resume_extractor.extract_resume_data(cleaned.text, content.links)

    # --- Step 5: Key field check ---
    if not data.has_key_fields:
        raise ValidationError("Failed to parse key details from resume.")

    # --- Step 6: Retention ---
    folder = identity.id
    with _stage("rotating stored resume versions"):
        await enforce_retention(storage, folder)

    # --- Step 7: Upload ---
    object_name = build_object_name(identity)
    with _stage("uploading the resume"):
        file_path = await storage.upload(object_name, upload.content, PDF_CONTENT_TYPE, upsert=False)

    # --- Step 8: Public URL ---
    data = data.model_copy(update={"resume_url": storage.public_url(file_path)})
    return IngestionResult(data=data, file_path=file_path)
