"""Shared test configuration, fixtures and helpers."""

from datetime import datetime, timezone

import pytest

from models.schemas.storage import Caller, CallerIdentity, StoredObject


@pytest.fixture(autouse=True)
def _no_retry_delay(monkeypatch):
    from config import settings

    monkeypatch.setattr(settings, "ai_retry_delay_seconds", 0)


class FakeGemini:
    """Replaces gemini_client.generate_text with scripted responses.

    Each item in ``responses`` is either a string to return or an exception
    to raise; the last item repeats once the script runs out.
    """

    def __init__(self, *responses):
        self.responses = list(responses)
        self.prompts: list[str] = []

    async def __call__(self, prompt: str) -> str:
        self.prompts.append(prompt)
        index = min(len(self.prompts), len(self.responses)) - 1
        item = self.responses[index]
        if isinstance(item, Exception):
            raise item
        return item


@pytest.fixture
def fake_gemini(monkeypatch):
    """Install a FakeGemini; call the fixture value with the script."""
    from services import gemini_client

    def install(*responses) -> FakeGemini:
        fake = FakeGemini(*responses)
        monkeypatch.setattr(gemini_client, "generate_text", fake)
        return fake

    return install


# ---------------------------------------------------------------------------
# Minimal PDF writer
# ---------------------------------------------------------------------------


def _pdf_string(text: str) -> str:
    return text.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")


def _link_annot(uri: str) -> str:
    return (
        "<< /Type /Annot /Subtype /Link /Rect [72 700 200 715] "
        f"/A << /S /URI /URI ({_pdf_string(uri)}) >> >>"
    )


def build_pdf(pages: list[dict], indirect_annots: bool = True) -> bytes:
    """Build a small valid PDF.

    Each page dict may have ``text`` (one line of Helvetica), ``links``
    (URIs turned into Link annotations) and ``raw_annots`` (annotation
    dictionaries inserted verbatim). Annotations are written as separate
    objects referenced from /Annots unless ``indirect_annots`` is False.
    """
    objects: dict[int, bytes] = {}
    next_num = 4
    kids = []

    for page in pages:
        stream = f"BT /F1 12 Tf 72 720 Td ({_pdf_string(page.get('text', ''))}) Tj ET".encode("latin-1")
        content_num = next_num
        next_num += 1
        objects[content_num] = b"<< /Length %d >>\nstream\n" % len(stream) + stream + b"\nendstream"

        annots = []
        for annot in [_link_annot(uri) for uri in page.get("links", [])] + page.get("raw_annots", []):
            if indirect_annots:
                objects[next_num] = annot.encode("latin-1")
                annots.append(f"{next_num} 0 R")
                next_num += 1
            else:
                annots.append(annot)

        page_num = next_num
        next_num += 1
        annots_entry = f" /Annots [{' '.join(annots)}]" if annots else ""
        objects[page_num] = (
            "<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
            f"/Resources << /Font << /F1 3 0 R >> >> /Contents {content_num} 0 R{annots_entry} >>"
        ).encode("latin-1")
        kids.append(page_num)

    objects[1] = b"<< /Type /Catalog /Pages 2 0 R >>"
    objects[2] = (
        f"<< /Type /Pages /Kids [{' '.join(f'{k} 0 R' for k in kids)}] /Count {len(kids)} >>"
    ).encode("latin-1")
    objects[3] = b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>"

    out = bytearray(b"%PDF-1.4\n")
    offsets = {}
    for num in sorted(objects):
        offsets[num] = len(out)
        out += b"%d 0 obj\n" % num + objects[num] + b"\nendobj\n"

    xref_pos = len(out)
    size = max(objects) + 1
    out += b"xref\n0 %d\n" % size
    out += b"0000000000 65535 f \n"
    for num in range(1, size):
        out += b"%010d 00000 n \n" % offsets[num]
    out += b"trailer\n<< /Size %d /Root 1 0 R >>\nstartxref\n%d\n%%%%EOF\n" % (size, xref_pos)
    return bytes(out)


@pytest.fixture
def pdf_factory():
    return build_pdf


@pytest.fixture
def resume_pdf() -> bytes:
    return build_pdf([
        {"text": "Jane Doe jane@example.com Python FastAPI", "links": ["https://github.com/janedoe"]},
        {"text": "Projects Talent Directory", "links": ["https://linkedin.com/in/janedoe"]},
    ])


# ---------------------------------------------------------------------------
# Storage and identity fakes
# ---------------------------------------------------------------------------


class FakeStorage:
    """In-memory stand-in for ResumeStorage that records every call."""

    def __init__(self, files: dict[str, list[StoredObject]] | None = None, fail_upload: bool = False):
        self.files = files or {}
        self.fail_upload = fail_upload
        self.removed: list[str] = []
        self.uploads: list[tuple[str, bytes, str, bool]] = []
        self.listed: list[str] = []

    async def list(self, folder):
        self.listed.append(folder)
        return list(self.files.get(folder, []))

    async def remove(self, paths):
        for path in paths:
            folder, name = path.rsplit("/", 1)
            self.files[folder] = [f for f in self.files.get(folder, []) if f.name != name]
            self.removed.append(path)

    async def upload(self, path, content, content_type, upsert=False):
        from services.errors import StorageError

        if self.fail_upload:
            raise StorageError("Failed to upload resume (500)")
        self.uploads.append((path, content, content_type, upsert))
        folder, name = path.rsplit("/", 1)
        self.files.setdefault(folder, []).append(
            StoredObject(name=name, created_at=datetime.now(timezone.utc), size=len(content))
        )
        return path

    def public_url(self, path):
        return f"https://project.supabase.co/storage/v1/object/public/resume/{path}"


@pytest.fixture
def fake_storage():
    return FakeStorage()


@pytest.fixture
def caller() -> Caller:
    return Caller(
        identity=CallerIdentity(id="user-123", email="jane@example.com", username="jane"),
        access_token="token-abc",
    )
