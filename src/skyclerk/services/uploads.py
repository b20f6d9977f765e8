"""
File and receipt uploads.

Uploaded files are named "sc-mobile-{unix timestamp}.{extension}" so the
server can tell them apart from web uploads.
"""

import logging
import time

from ..api_client import PaginatedResult, SkyclerkClient
from ..schemas import FileModel, SnapClerk, list_of

logger = logging.getLogger(__name__)

MIME_TYPES = {
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "png": "image/png",
    "gif": "image/gif",
    "pdf": "application/pdf",
    "heic": "image/heic",
}
DEFAULT_MIME_TYPE = "application/octet-stream"


def mime_type_for_extension(extension: str) -> str:
    return MIME_TYPES.get(extension.lower().lstrip("."), DEFAULT_MIME_TYPE)


def upload_file_name(extension: str) -> str:
    return f"sc-mobile-{int(time.time())}.{extension.lstrip('.')}"


class FileService:
    """Uploads attachments (receipts, invoices) to the workspace file store."""

    def __init__(self, client: SkyclerkClient):
        self.client = client

    def upload_file(self, data: bytes, file_extension: str) -> FileModel:
        """
        Upload raw file bytes.

        Args:
            data: File contents
            file_extension: Extension without the dot (e.g., "jpg", "pdf")

        Returns:
            FileModel with the server-assigned id and URLs
        """
        file_name = upload_file_name(file_extension)
        uploaded = self.client.upload_file(
            self.client.workspace_url("files"),
            data,
            file_name,
            mime_type_for_extension(file_extension),
        )
        logger.info(f"Uploaded file {file_name} as id={uploaded.id} ({len(data)} bytes)")
        return uploaded


class SnapClerkService:
    """
    Receipt photos submitted for server-side OCR.

    The server processes uploads asynchronously and later turns them into
    ledger entries.
    """

    def __init__(self, client: SkyclerkClient):
        self.client = client

    def get_snapclerks(self, page: int) -> PaginatedResult[list[SnapClerk]]:
        """Fetch one page of submissions, newest first."""
        params = [
            ("page", str(page)),
            ("order", "desc"),
            ("sort", "created_at"),
        ]
        return self.client.get_paginated(
            self.client.workspace_url("snapclerk"), params, decoder=list_of(SnapClerk)
        )

    def upload_receipt(
        self,
        data: bytes,
        note: str = "",
        category_id: int | None = None,
        label_ids: list[int] | None = None,
        lat: float = 0.0,
        lon: float = 0.0,
    ) -> None:
        """
        Submit a receipt photo.

        Args:
            data: JPEG bytes
            note: Free-text note
            category_id: Category to pre-assign; None or 0 leaves it unset
            label_ids: Labels to apply, sent as a comma-separated list
            lat: Capture latitude (0.0 when unknown)
            lon: Capture longitude (0.0 when unknown)
        """
        fields: dict[str, str] = {
            "note": note,
            "lat": str(float(lat)),
            "lon": str(float(lon)),
        }
        if label_ids:
            fields["labels"] = ",".join(str(label_id) for label_id in label_ids)
        if category_id and category_id > 0:
            fields["category"] = str(category_id)

        file_name = upload_file_name("jpg")
        self.client.upload_multipart(
            self.client.workspace_url("snapclerk"),
            data,
            file_name,
            "image/jpeg",
            extra_fields=fields,
        )
        logger.info(f"Submitted receipt {file_name} ({len(data)} bytes)")
