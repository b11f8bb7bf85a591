import logging
import uuid

from fastapi import APIRouter, Depends, File, Request, UploadFile
from slowapi import Limiter
from slowapi.util import get_remote_address

from api.dependencies import get_current_caller, get_resume_storage
from config import settings
from models.requests import RawUpload
from models.responses import (
    ErrorResponse,
    MessageResponse,
    ResumeUploadResponse,
    ResumeVersionsResponse,
)
from models.schemas.storage import Caller
from services import resume_ingestion, resume_versions
from services.errors import ValidationError
from services.storage import ResumeStorage

logger = logging.getLogger(__name__)

router = APIRouter()
limiter = Limiter(key_func=get_remote_address)

_ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    401: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


@router.get("/health")
async def health():
    return {
        "status": "ok",
        "gemini_configured": bool(settings.gemini_api_key),
        "storage_configured": bool(settings.supabase_url and settings.supabase_anon_key),
    }


@router.post("/resume/upload", response_model=ResumeUploadResponse, responses=_ERROR_RESPONSES)
@limiter.limit(settings.upload_rate_limit)
async def upload_resume(
    request: Request,
    resume: UploadFile | None = File(None),
    caller: Caller = Depends(get_current_caller),
    storage: ResumeStorage = Depends(get_resume_storage),
):
    if resume is None:
        raise ValidationError("No resume file provided")

    upload = RawUpload(
        content=await resume.read(),
        content_type=resume.content_type or "",
        filename=resume.filename,
    )
    result = await resume_ingestion.ingest_resume(upload, caller, storage)
    logger.info("Resume ingested for member %s at %s", caller.identity.id, result.file_path)

    return ResumeUploadResponse(
        id=str(uuid.uuid4()),
        file_path=result.file_path,
        **result.data.model_dump(),
    )


@router.get("/resume/versions", response_model=ResumeVersionsResponse, responses=_ERROR_RESPONSES)
async def get_resume_versions(
    caller: Caller = Depends(get_current_caller),
    storage: ResumeStorage = Depends(get_resume_storage),
):
    versions = await resume_versions.list_versions(storage, caller.identity.id)
    return ResumeVersionsResponse(resume_versions=versions, count=len(versions))


@router.delete("/resume/versions/{file_name}", response_model=MessageResponse, responses=_ERROR_RESPONSES)
async def delete_resume_version(
    file_name: str,
    caller: Caller = Depends(get_current_caller),
    storage: ResumeStorage = Depends(get_resume_storage),
):
    await resume_versions.delete_version(storage, caller.identity.id, file_name)
    return MessageResponse(message="Resume version deleted successfully")
