"""Normalization error codes."""

FILE_TOO_LARGE = "file_too_large"
UNSUPPORTED_FILE_TYPE = "unsupported_file_type"
PDF_CORRUPT = "pdf_corrupt"
PDF_EMPTY = "pdf_empty"
FILE_READ_FAILURE = "file_read_failure"


class NormalizationError(ValueError):
    """Uploaded file could not be turned into an image, with stable error code."""

    def __init__(self, code: str, message: str) -> None:
        super().__init__(message)
        self.code = code
