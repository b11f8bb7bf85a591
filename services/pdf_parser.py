import io
import logging
from typing import Any

import pdfplumber
from pdfminer.pdftypes import PDFObjRef
from pdfminer.psparser import PSLiteral
from pdfminer.utils import decode_text

from models.schemas.ingestion import ExtractedContent
from services.errors import ExtractionError

logger = logging.getLogger(__name__)


def extract_text(pdf_bytes: bytes) -> str:
    """Extract all text from a PDF file."""
    try:
        with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
            pages = [page.extract_text() or "" for page in pdf.pages]
    except Exception as e:
        logger.error("PDF text extraction failed: %s", e)
        raise ExtractionError("Could not parse PDF file") from e
    return "\n".join(pages).strip()


def _resolve(obj: Any) -> Any:
    """Follow a single indirect reference; direct objects pass through."""
    if isinstance(obj, PDFObjRef):
        return obj.resolve()
    return obj


def _as_text(obj: Any) -> str | None:
    value = _resolve(obj)
    if isinstance(value, bytes):
        return decode_text(value)
    if isinstance(value, str):
        return value
    return None


def _literal_name(obj: Any) -> str | None:
    value = _resolve(obj)
    if isinstance(value, PSLiteral):
        name = value.name
        return name.decode("latin-1") if isinstance(name, bytes) else str(name)
    text = _as_text(value)
    return text.lstrip("/") if text else None


def _page_links(page_obj: Any) -> list[str]:
    """URIs of the Link annotations on one page, in annotation order.

    Raises on malformed structures; the caller decides what to skip.
    """
    annots = _resolve(page_obj.annots)
    if annots is None:
        return []
    if not isinstance(annots, list):
        annots = [annots]

    uris = []
    for entry in annots:
        annot = _resolve(entry)
        if not isinstance(annot, dict):
            continue
        if _literal_name(annot.get("Subtype")) != "Link":
            continue
        action = _resolve(annot.get("A"))
        if action is None:
            continue
        uri = _as_text(action.get("URI"))
        if uri:
            uris.append(uri)
    return uris


def extract_links(pdf_bytes: bytes) -> list[str]:
    """Collect hyperlink URIs embedded in a PDF.

    Returns each URI once, in page order then annotation order. A page that
    cannot be read is logged and skipped; if the document itself cannot be
    opened the result is empty.
    """
    links: list[str] = []
    seen: set[str] = set()
    try:
        with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
            for number, page in enumerate(pdf.pages, start=1):
                try:
                    page_links = _page_links(page.page_obj)
                except Exception as e:
                    logger.warning("Skipping links on page %d: %s", number, e)
                    continue
                for uri in page_links:
                    if uri not in seen:
                        seen.add(uri)
                        links.append(uri)
    except Exception as e:
        logger.error("Failed to extract links from PDF: %s", e)
        return []
    return links


def extract_content(pdf_bytes: bytes) -> ExtractedContent:
    """Extract text and embedded links. Raises ExtractionError if undecodable."""
    text = extract_text(pdf_bytes)
    return ExtractedContent(text=text, links=extract_links(pdf_bytes))
