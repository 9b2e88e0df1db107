"""Types for uploaded masterplans and their normalized images."""

from __future__ import annotations

import base64
import uuid
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field


def canonical_mime_type(mime_type: str | None) -> str:
    """Lowercase a declared MIME type and drop any parameters."""
    return (mime_type or "").split(";", 1)[0].strip().lower()


@dataclass(frozen=True, slots=True)
class UploadedFile:
    """A user-selected file, read lazily.

    ``size`` is the declared byte size, known before any bytes are read.
    """

    filename: str
    mime_type: str
    size: int
    reader: Callable[[], Awaitable[bytes]] = field(repr=False, compare=False)
    upload_id: str = field(default_factory=lambda: uuid.uuid4().hex)

    async def read(self) -> bytes:
        return await self.reader()


@dataclass(frozen=True, slots=True)
class NormalizedImage:
    """The single image payload derived from an upload.

    ``source_id`` is the ``upload_id`` of the file it was derived from.
    """

    data: bytes = field(repr=False)
    mime_type: str
    source_id: str
    width: int | None = None
    height: int | None = None

    @property
    def size(self) -> int:
        return len(self.data)

    def to_base64(self) -> str:
        return base64.b64encode(self.data).decode("ascii")

    @property
    def data_url(self) -> str:
        return f"data:{self.mime_type};base64,{self.to_base64()}"
