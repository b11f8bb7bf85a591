"""Google Gemini API wrapper."""

import logging

from google import genai
from google.genai import types

from config import settings
from services.errors import TransportError

logger = logging.getLogger(__name__)

_client: genai.Client | None = None


def get_client() -> genai.Client | None:
    global _client
    if not settings.gemini_api_key:
        logger.warning("No GEMINI_API_KEY set - Gemini features disabled")
        return None
    if _client is None:
        _client = genai.Client(api_key=settings.gemini_api_key)
    return _client


async def generate_text(prompt: str) -> str:
    """Send a prompt to Gemini and return the stripped response text.

    API errors propagate as raised by the SDK so callers can classify them
    for retry.
    """
    client = get_client()
    if client is None:
        raise TransportError("AI service is not configured")

    response = await client.aio.models.generate_content(
        model=settings.gemini_model,
        contents=prompt,
        config=types.GenerateContentConfig(
            temperature=settings.gemini_temperature,
            max_output_tokens=8192,
        ),
    )
    return (response.text or "").strip()
