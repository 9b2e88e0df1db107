"""Upload validation and normalization."""

from ugf.ingest.errors import NormalizationError
from ugf.ingest.normalizer import FileNormalizer
from ugf.ingest.pdf import PdfRasterizer
from ugf.ingest.types import NormalizedImage, UploadedFile

__all__ = [
    "FileNormalizer",
    "NormalizationError",
    "NormalizedImage",
    "PdfRasterizer",
    "UploadedFile",
]
