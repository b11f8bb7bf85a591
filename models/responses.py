from datetime import datetime

from pydantic import BaseModel, model_serializer

from models.schemas.parsed_resume import ParsedResumeData


class ErrorResponse(BaseModel):
    success: bool = False
    message: str


class ResumeUploadResponse(ParsedResumeData):
    success: bool = True
    id: str
    file_path: str

    # Optional in the payload: left out rather than sent as null
    @model_serializer(mode="wrap")
    def _omit_absent_optionals(self, handler):
        data = handler(self)
        for key in ("year_of_study", "github_url", "linkedin_url"):
            if data.get(key) is None:
                data.pop(key, None)
        return data


class ResumeVersion(BaseModel):
    name: str
    created_at: datetime | None = None
    size: int = 0
    public_url: str


class ResumeVersionsResponse(BaseModel):
    resume_versions: list[ResumeVersion] = []
    count: int = 0


class MessageResponse(BaseModel):
    message: str
