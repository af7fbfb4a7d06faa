"""Upload ingestion for avatars and post attachments."""

import logging
from dataclasses import dataclass

from fastapi import UploadFile

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE = "application/octet-stream"


@dataclass(frozen=True)
class Attachment:
    """A fully buffered binary payload and the content type the client declared."""

    data: bytes
    content_type: str

    @property
    def size(self) -> int:
        return len(self.data)


async def read_attachment(upload: UploadFile | None) -> Attachment | None:
    """Read an uploaded file into memory.

    Browsers submit an empty, unnamed part for file inputs left blank, so a
    part with no filename or no bytes counts as no attachment. The declared
    content type is kept as-is; the payload is neither inspected nor
    re-encoded.

    Note: This must remain async because UploadFile.read() is async.
    """
    if upload is None or not upload.filename:
        return None

    data = await upload.read()
    if not data:
        return None

    content_type = upload.content_type or DEFAULT_CONTENT_TYPE
    logger.debug(f"Buffered upload '{upload.filename}' ({len(data)} bytes, {content_type})")
    return Attachment(data=data, content_type=content_type)
