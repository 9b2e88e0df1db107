"""Shared test fixtures and factories."""

import asyncio
import io
import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pypdfium2 as pdfium
import pytest
from PIL import Image

from ugf.classify.types import ClassificationEntry, ClassificationRequest
from ugf.config import UgfConfig, get_ugf_home
from ugf.ingest.types import NormalizedImage, UploadedFile

# =============================================================================
# Environment Fixtures
# =============================================================================


@pytest.fixture
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run with no config files and no credentials in the environment."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("UGF_HOME", str(tmp_path / "ugf-home"))
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.delenv("API_KEY", raising=False)
    get_ugf_home.cache_clear()
    yield tmp_path
    get_ugf_home.cache_clear()


@pytest.fixture
def config() -> UgfConfig:
    return UgfConfig.model_validate({"gemini": {"api_key": "AIza-test-key"}})


# =============================================================================
# File Factories
# =============================================================================


def make_pdf(*page_sizes: tuple[float, float]) -> bytes:
    """Build a blank PDF with one page per (width, height) in points."""
    pdf = pdfium.PdfDocument.new()
    try:
        for width, height in page_sizes:
            page = pdf.new_page(width, height)
            page.close()
        buffer = io.BytesIO()
        pdf.save(buffer)
        return buffer.getvalue()
    finally:
        pdf.close()


def make_unloadable_page_pdf() -> bytes:
    """A PDF whose only page-tree kid is a font dictionary, not a page."""
    objects = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        b"<< /Type /Pages /Kids [3 0 R] /Count 1 >>",
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    ]
    out = bytearray(b"%PDF-1.7\n")
    offsets = []
    for number, body in enumerate(objects, start=1):
        offsets.append(len(out))
        out += b"%d 0 obj\n%s\nendobj\n" % (number, body)
    xref = len(out)
    out += b"xref\n0 %d\n0000000000 65535 f \n" % (len(objects) + 1)
    for offset in offsets:
        out += b"%010d 00000 n \n" % offset
    out += b"trailer\n<< /Size %d /Root 1 0 R >>\nstartxref\n%d\n%%EOF\n" % (
        len(objects) + 1,
        xref,
    )
    return bytes(out)


def make_png(size: tuple[int, int] = (8, 6), color: str = "green") -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", size, color).save(buffer, format="PNG")
    return buffer.getvalue()


def make_upload(
    data: bytes,
    mime_type: str,
    *,
    filename: str = "plan",
    size: int | None = None,
    on_read: Callable[[], None] | None = None,
) -> UploadedFile:
    async def _read() -> bytes:
        if on_read is not None:
            on_read()
        return data

    return UploadedFile(
        filename=filename,
        mime_type=mime_type,
        size=len(data) if size is None else size,
        reader=_read,
    )


def make_image(source_id: str = "upload-1") -> NormalizedImage:
    return NormalizedImage(data=b"jpeg-bytes", mime_type="image/jpeg", source_id=source_id)


# =============================================================================
# Classification Fakes
# =============================================================================

FIVE_ENTRIES: list[dict[str, Any]] = [
    {"category": "TREES_AND_SHRUBS", "description": "Trees T1-T7", "percentage": 20},
    {"category": "GREEN_OPEN_SPACE", "description": "Gardens", "percentage": 35.5},
    {"category": "PERMEABLE_SURFACES", "description": "Block paving", "percentage": 14.5},
    {"category": "IMPERMEABLE_SURFACES", "description": "Buildings", "percentage": 25},
    {"category": "INCIDENTAL_PLAY_AREA", "description": "LAP", "percentage": 5},
]


def entries_json(entries: list[Any]) -> str:
    return json.dumps(entries)


class FakeProvider:
    """Returns canned text, or raises, and records requests."""

    name = "fake"

    def __init__(
        self,
        text: str = "",
        *,
        error: Exception | None = None,
        delay: float = 0.0,
    ) -> None:
        self.text = text
        self.error = error
        self.delay = delay
        self.requests: list[ClassificationRequest] = []

    async def generate(self, request: ClassificationRequest) -> str:
        self.requests.append(request)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.text


class FakeClassifier:
    """Classifier double returning fixed entries."""

    def __init__(self, entries: list[ClassificationEntry] | None = None) -> None:
        self.entries = entries or [
            ClassificationEntry("TREES_AND_SHRUBS", "Trees", 35.0),
            ClassificationEntry("GREEN_OPEN_SPACE", "Gardens", 40.0),
            ClassificationEntry("IMPERMEABLE_SURFACES", "Buildings", 25.0),
        ]
        self.calls = 0

    async def classify(self, image: NormalizedImage) -> list[ClassificationEntry]:
        self.calls += 1
        return list(self.entries)
