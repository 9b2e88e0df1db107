"""Turns an uploaded masterplan into one image payload for classification."""

from __future__ import annotations

import asyncio
import logging

from ugf.config.models import UploadConfig
from ugf.ingest.errors import (
    FILE_READ_FAILURE,
    FILE_TOO_LARGE,
    UNSUPPORTED_FILE_TYPE,
    NormalizationError,
)
from ugf.ingest.pdf import PdfRasterizer, encode_jpeg
from ugf.ingest.types import NormalizedImage, UploadedFile, canonical_mime_type

logger = logging.getLogger(__name__)

PDF_MIME_TYPE = "application/pdf"
JPEG_MIME_TYPE = "image/jpeg"


class FileNormalizer:
    """Validates an upload and produces its NormalizedImage.

    PDFs are rasterized (page 1 only) and re-encoded as JPEG. Images pass
    through byte-for-byte with their declared MIME type.
    """

    def __init__(
        self,
        config: UploadConfig | None = None,
        rasterizer: PdfRasterizer | None = None,
    ) -> None:
        self._config = config or UploadConfig()
        self._rasterizer = rasterizer or PdfRasterizer(
            max_pixels=self._config.max_render_pixels
        )

    async def normalize(self, upload: UploadedFile) -> NormalizedImage:
        """Normalize ``upload``.

        Raises:
            NormalizationError: On any validation, read, or render failure.
        """
        self._check_size(upload.size)

        mime_type = canonical_mime_type(upload.mime_type)
        if mime_type not in self._config.allowed_mime_types:
            raise NormalizationError(
                UNSUPPORTED_FILE_TYPE,
                f"Unsupported file type: {upload.mime_type or 'unknown'}",
            )

        data = await self._read(upload)
        # Declared size can understate the real payload
        self._check_size(len(data))

        if mime_type == PDF_MIME_TYPE:
            return await self._normalize_pdf(upload, data)
        if mime_type.startswith("image/"):
            return NormalizedImage(
                data=data,
                mime_type=mime_type,
                source_id=upload.upload_id,
            )
        raise NormalizationError(
            UNSUPPORTED_FILE_TYPE, f"Unsupported file type: {mime_type}"
        )

    def _check_size(self, size: int) -> None:
        if size > self._config.max_bytes:
            raise NormalizationError(
                FILE_TOO_LARGE,
                f"File is {size} bytes, limit is {self._config.max_bytes}",
            )

    @staticmethod
    async def _read(upload: UploadedFile) -> bytes:
        try:
            return await upload.read()
        except OSError as e:
            raise NormalizationError(
                FILE_READ_FAILURE, f"Unable to read {upload.filename}: {e}"
            ) from e

    async def _normalize_pdf(
        self, upload: UploadedFile, data: bytes
    ) -> NormalizedImage:
        scale = self._config.pdf_render_scale
        quality = self._config.jpeg_quality

        def _render() -> tuple[bytes, int, int]:
            image = self._rasterizer.render_first_page(data, scale=scale)
            try:
                return encode_jpeg(image, quality=quality), image.width, image.height
            finally:
                image.close()

        jpeg, width, height = await asyncio.to_thread(_render)
        logger.debug(
            "pdf_rasterized",
            extra={
                "pdf.backend": self._rasterizer.backend_id(),
                "image.width": width,
                "image.height": height,
                "image.bytes": len(jpeg),
            },
        )
        return NormalizedImage(
            data=jpeg,
            mime_type=JPEG_MIME_TYPE,
            source_id=upload.upload_id,
            width=width,
            height=height,
        )
