"""Intermediate values passed between ingestion stages."""

from pydantic import BaseModel


class ExtractedContent(BaseModel):
    """Text and hyperlinks pulled out of a PDF.

    ``links`` holds each URI once, in page then annotation order.
    """
    text: str = ""
    links: list[str] = []
