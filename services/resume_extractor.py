"""Gemini-backed extraction of structured profile fields from resume text."""

import json
import logging
import re
from datetime import date

import pydantic

from config import settings
from models.schemas.parsed_resume import ParsedResumeData
from services import gemini_client, prompt_builder
from services.errors import IngestionError, ParseError, TransportError
from services.retry import retry_with_delay

logger = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"```(?:json)?\s*\n?|\n?\s*```", re.IGNORECASE)

_STRING_LIST_FIELDS = ("skills", "achievements")
_LIST_FIELDS = _STRING_LIST_FIELDS + ("experiences", "certifications", "projects")


def strip_code_fences(text: str) -> str:
    """Remove markdown code fences the model sometimes adds around JSON."""
    return _FENCE_RE.sub("", text).strip()


def derive_year_of_study(graduation_year, current_year: int | None = None) -> int | None:
    """Year of study from graduation year, or None outside 1..4 years remaining."""
    if graduation_year is None or isinstance(graduation_year, bool):
        return None
    if isinstance(graduation_year, float):
        if not graduation_year.is_integer():
            return None
        graduation_year = int(graduation_year)
    else:
        try:
            graduation_year = int(str(graduation_year).strip())
        except ValueError:
            return None
    if current_year is None:
        current_year = date.today().year
    years_remaining = graduation_year - current_year
    if 1 <= years_remaining <= 4:
        return years_remaining
    return None


def parse_extraction_response(
    raw: str,
    extracted_links: list[str],
    current_year: int | None = None,
) -> ParsedResumeData:
    """Turn the model's raw response into a ParsedResumeData.

    Raises ParseError if the response is not a JSON object of the expected
    shape.
    """
    try:
        parsed = json.loads(strip_code_fences(raw))
    except json.JSONDecodeError as e:
        raise ParseError(f"Failed to parse AI response: {e}") from e
    if not isinstance(parsed, dict):
        raise ParseError("Failed to parse AI response: expected a JSON object")

    fields = {
        "name": parsed.get("name") or "",
        "email": parsed.get("email") or "",
        "domain": parsed.get("domain") or None,
        "year_of_study": derive_year_of_study(parsed.get("graduation_year"), current_year),
        "github_url": parsed.get("github_url") or None,
        "linkedin_url": parsed.get("linkedin_url") or None,
        "extracted_links": list(extracted_links),
    }
    for key in _LIST_FIELDS:
        fields[key] = parsed.get(key) or []
    for key in _STRING_LIST_FIELDS:
        if isinstance(fields[key], list):
            fields[key] = [item for item in fields[key] if item is not None]

    try:
        return ParsedResumeData.model_validate(fields)
    except pydantic.ValidationError as e:
        raise ParseError(f"Failed to parse AI response: {e.error_count()} invalid field(s)") from e


async def extract_resume_data(text: str, extracted_links: list[str]) -> ParsedResumeData:
    """Ask Gemini for the structured fields of a resume."""
    prompt = prompt_builder.build_extraction_prompt(text, extracted_links)
    try:
        raw = await retry_with_delay(
            lambda: gemini_client.generate_text(prompt),
            max_retries=settings.ai_max_retries,
            delay=settings.ai_retry_delay_seconds,
        )
    except IngestionError:
        raise
    except Exception as e:
        logger.error("Gemini extraction call failed: %s", e)
        raise TransportError(f"AI extraction request failed: {e}") from e

    data = parse_extraction_response(raw, extracted_links)
    logger.info(
        "Extracted resume fields: %d skills, %d experiences, %d projects",
        len(data.skills), len(data.experiences), len(data.projects),
    )
    return data
