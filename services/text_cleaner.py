"""Best-effort Gemini cleanup of text pulled out of a PDF."""

import logging
from dataclasses import dataclass

from config import settings
from services import gemini_client, prompt_builder
from services.retry import retry_with_delay

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CleanedText:
    text: str
    used_fallback: bool = False


async def clean_text(text: str) -> CleanedText:
    """Reformat resume text with Gemini. Never raises.

    If the model cannot be reached after retries, or returns nothing, the
    input comes back unchanged with ``used_fallback`` set.
    """
    if not text.strip():
        return CleanedText(text=text, used_fallback=True)

    prompt = prompt_builder.build_cleanup_prompt(text)
    try:
        cleaned = await retry_with_delay(
            lambda: gemini_client.generate_text(prompt),
            max_retries=settings.ai_max_retries,
            delay=settings.ai_retry_delay_seconds,
        )
    except Exception as e:
        logger.error("Error cleaning text with AI, using raw text: %s", e)
        return CleanedText(text=text, used_fallback=True)

    if not cleaned:
        logger.warning("AI cleanup returned empty text, using raw text")
        return CleanedText(text=text, used_fallback=True)
    return CleanedText(text=cleaned)
