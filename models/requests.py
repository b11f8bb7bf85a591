from pydantic import BaseModel, Field


class RawUpload(BaseModel):
    """A resume file as received from the multipart request."""

    content: bytes = Field(..., repr=False, description="Raw file bytes")
    content_type: str = Field("", description="Declared media type of the upload")
    filename: str | None = None

    model_config = {"frozen": True}

    @property
    def size(self) -> int:
        return len(self.content)
