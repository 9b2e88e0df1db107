"""Classification error codes."""

INVALID_RESPONSE_FORMAT = "invalid_response_format"
EMPTY_RESULT = "empty_result"
CLASSIFICATION_FAILED = "classification_failed"


class ClassificationError(Exception):
    """Classification did not produce a usable result, with stable error code."""

    def __init__(self, code: str, message: str) -> None:
        super().__init__(message)
        self.code = code
