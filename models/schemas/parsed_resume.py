"""Structured profile record produced from a resume."""

from pydantic import BaseModel, Field, field_validator


class Experience(BaseModel):
    """A single work experience entry."""
    company: str = ""
    role: str = ""
    description: str = ""
    start_date: str = ""
    end_date: str | None = None
    is_current: bool = False

    @field_validator("company", "role", "description", "start_date", mode="before")
    @classmethod
    def _null_to_empty(cls, value):
        return "" if value is None else value

    @field_validator("is_current", mode="before")
    @classmethod
    def _null_to_false(cls, value):
        return False if value is None else value


class Certification(BaseModel):
    """A certification and, when known, who issued it."""
    name: str = ""
    issuing_organization: str | None = None

    @field_validator("name", mode="before")
    @classmethod
    def _null_to_empty(cls, value):
        return "" if value is None else value


class Project(BaseModel):
    """A single project entry."""
    name: str = ""
    description: str = ""
    link: str | None = None

    @field_validator("name", "description", mode="before")
    @classmethod
    def _null_to_empty(cls, value):
        return "" if value is None else value


class ParsedResumeData(BaseModel):
    """Fields extracted from a resume.

    ``year_of_study`` is derived from the graduation year reported by the
    model, never copied from the response. ``extracted_links`` are the
    hyperlinks found in the PDF itself and ``resume_url`` is filled in once
    the file has been stored.
    """
    name: str = ""
    email: str = ""
    skills: list[str] = []
    domain: str | None = None
    year_of_study: int | None = Field(None, ge=1, le=4)
    achievements: list[str] = []
    experiences: list[Experience] = []
    certifications: list[Certification] = []
    projects: list[Project] = []
    github_url: str | None = None
    linkedin_url: str | None = None
    extracted_links: list[str] = []
    resume_url: str | None = None

    @property
    def has_key_fields(self) -> bool:
        return bool(self.name.strip() and self.email.strip())
