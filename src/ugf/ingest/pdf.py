"""First-page PDF rasterization via pypdfium2."""

from __future__ import annotations

import io

import pypdfium2 as pdfium
from PIL import Image

from ugf.config.models import DEFAULT_MAX_RENDER_PIXELS
from ugf.ingest.errors import PDF_CORRUPT, PDF_EMPTY, NormalizationError


class PdfRasterizer:
    """Renders page 1 of a PDF to an RGB raster.

    Rendering is deterministic for a given document and scale. Pages whose
    raster would exceed ``max_pixels`` are refused before any bitmap is
    allocated.
    """

    def __init__(self, max_pixels: int = DEFAULT_MAX_RENDER_PIXELS) -> None:
        self._max_pixels = max_pixels

    def backend_id(self) -> str:
        return "pypdfium2"

    def render_first_page(self, data: bytes, *, scale: float) -> Image.Image:
        """Render page index 0 at ``scale`` times its native size.

        Raises:
            NormalizationError: ``pdf_corrupt`` if the document or its first
                page cannot be parsed or rendered, or the page is too large
                to rasterize; ``pdf_empty`` if it has no pages.
        """
        try:
            doc = pdfium.PdfDocument(data)
        except pdfium.PdfiumError as e:
            raise NormalizationError(PDF_CORRUPT, f"Unable to parse PDF: {e}") from e

        try:
            if len(doc) == 0:
                raise NormalizationError(PDF_EMPTY, "PDF has no pages")
            try:
                page = doc[0]
            except pdfium.PdfiumError as e:
                raise NormalizationError(
                    PDF_CORRUPT, f"Unable to load PDF page 1: {e}"
                ) from e
            try:
                self._check_pixels(page, scale)
                bitmap = page.render(scale=scale)
                try:
                    # convert() copies out of the pdfium-owned buffer
                    return bitmap.to_pil().convert("RGB")
                finally:
                    bitmap.close()
            except pdfium.PdfiumError as e:
                raise NormalizationError(
                    PDF_CORRUPT, f"Unable to render PDF page 1: {e}"
                ) from e
            finally:
                page.close()
        finally:
            doc.close()

    def _check_pixels(self, page: pdfium.PdfPage, scale: float) -> None:
        width, height = page.get_size()
        pixels = round(width * scale) * round(height * scale)
        if pixels > self._max_pixels:
            raise NormalizationError(
                PDF_CORRUPT,
                f"PDF page 1 renders to {pixels} pixels, limit is {self._max_pixels}",
            )


def encode_jpeg(image: Image.Image, *, quality: int) -> bytes:
    """Encode an RGB image as JPEG."""
    buffer = io.BytesIO()
    image.save(buffer, format="JPEG", quality=quality)
    return buffer.getvalue()
