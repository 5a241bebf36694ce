from __future__ import annotations

import json
import logging
import uuid

from quicklang.google.client import GoogleApiClient, require
from quicklang.google.models import DriveFile, FileList

logger = logging.getLogger(__name__)

DRIVE_API_URL = "https://www.googleapis.com/drive/v3/files"
DRIVE_UPLOAD_URL = "https://www.googleapis.com/upload/drive/v3/files"
FOLDER_MIME_TYPE = "application/vnd.google-apps.folder"

_LIST_FIELDS = "nextPageToken, files(id, name, mimeType, createdTime, modifiedTime, webViewLink)"
_FILE_FIELDS = "id, name, webViewLink"


def _multipart_related(metadata: dict, content: bytes, mime_type: str) -> tuple[bytes, str]:
    """Build a multipart/related body: JSON metadata part, then the media part."""
    boundary = f"quicklang-{uuid.uuid4().hex}"
    head = (
        f"--{boundary}\r\n"
        "Content-Type: application/json; charset=UTF-8\r\n\r\n"
        f"{json.dumps(metadata)}\r\n"
        f"--{boundary}\r\n"
        f"Content-Type: {mime_type}\r\n\r\n"
    ).encode()
    tail = f"\r\n--{boundary}--\r\n".encode()
    return head + content + tail, f"multipart/related; boundary={boundary}"


class DriveService:
    def __init__(self, client: GoogleApiClient):
        self._client = client

    async def list_files(
        self,
        query: str | None = None,
        page_size: int = 100,
        page_token: str | None = None,
    ) -> FileList:
        data = await self._client.request(
            "drive.files.list",
            "GET",
            DRIVE_API_URL,
            params={
                "q": query,
                "pageSize": page_size,
                "pageToken": page_token,
                "fields": _LIST_FIELDS,
            },
        )
        return FileList.model_validate(data)

    async def create_folder(self, name: str, parent_id: str | None = None) -> DriveFile:
        require(name=name)
        metadata: dict = {"name": name, "mimeType": FOLDER_MIME_TYPE}
        if parent_id:
            metadata["parents"] = [parent_id]
        data = await self._client.request(
            "drive.files.create",
            "POST",
            DRIVE_API_URL,
            params={"fields": _FILE_FIELDS},
            json=metadata,
        )
        return DriveFile.model_validate(data)

    async def upload_file(
        self,
        content: bytes,
        name: str,
        mime_type: str,
        parent_id: str | None = None,
    ) -> DriveFile:
        require(name=name, mime_type=mime_type)
        metadata: dict = {"name": name}
        if parent_id:
            metadata["parents"] = [parent_id]
        body, content_type = _multipart_related(metadata, content, mime_type)
        data = await self._client.request(
            "drive.files.upload",
            "POST",
            DRIVE_UPLOAD_URL,
            params={"uploadType": "multipart", "fields": _FILE_FIELDS},
            content=body,
            headers={"Content-Type": content_type},
        )
        uploaded = DriveFile.model_validate(data)
        logger.info("Uploaded %s to Drive (%d bytes)", name, len(content))
        return uploaded
