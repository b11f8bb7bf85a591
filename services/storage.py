"""Supabase Storage client for resume files.

Talks to the Storage REST API with httpx, authenticated as the calling
member (project anon key + the member's access token) so bucket policies
apply to each request.
"""

from __future__ import annotations

import logging

import httpx

from config import settings
from models.schemas.storage import StoredObject
from services.errors import StorageError

logger = logging.getLogger(__name__)

# Supabase creates this marker object in otherwise empty folders
PLACEHOLDER_NAME = ".emptyFolderPlaceholder"

LIST_PAGE_SIZE = 100


class ResumeStorage:
    def __init__(
        self,
        access_token: str,
        base_url: str | None = None,
        api_key: str | None = None,
        bucket: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = (base_url if base_url is not None else settings.supabase_url).rstrip("/")
        self.api_key = api_key if api_key is not None else settings.supabase_anon_key
        self.bucket = bucket or settings.resume_bucket
        self._access_token = access_token
        self._transport = transport

        if not self.base_url or not self.api_key:
            raise StorageError("Supabase configuration missing")

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=f"{self.base_url}/storage/v1",
            headers={
                "Authorization": f"Bearer {self._access_token}",
                "apikey": self.api_key,
            },
            timeout=settings.storage_timeout_seconds,
            transport=self._transport,
        )

    def public_url(self, path: str) -> str:
        return f"{self.base_url}/storage/v1/object/public/{self.bucket}/{path}"

    async def list(self, folder: str) -> list[StoredObject]:
        """List the files directly inside ``folder``."""
        body = {
            "prefix": folder,
            "limit": LIST_PAGE_SIZE,
            "offset": 0,
            "sortBy": {"column": "name", "order": "asc"},
        }
        try:
            async with self._client() as client:
                response = await client.post(f"/object/list/{self.bucket}", json=body)
        except httpx.HTTPError as e:
            raise StorageError(f"Failed to list resumes: {e}") from e
        _raise_for_status(response, "list resumes")

        objects = []
        for row in response.json():
            # Sub-folders come back without an id
            if row.get("name") == PLACEHOLDER_NAME or row.get("id") is None:
                continue
            metadata = row.get("metadata") or {}
            objects.append(
                StoredObject(
                    name=row["name"],
                    created_at=row.get("created_at"),
                    size=metadata.get("size") or 0,
                )
            )
        return objects

    async def remove(self, paths: list[str]) -> None:
        try:
            async with self._client() as client:
                response = await client.request(
                    "DELETE", f"/object/{self.bucket}", json={"prefixes": paths}
                )
        except httpx.HTTPError as e:
            raise StorageError(f"Failed to remove resumes: {e}") from e
        _raise_for_status(response, "remove resumes")
        logger.info("Removed %d object(s) from bucket %s", len(paths), self.bucket)

    async def upload(
        self,
        path: str,
        content: bytes,
        content_type: str,
        upsert: bool = False,
    ) -> str:
        """Store ``content`` at ``path`` and return the stored object's path."""
        try:
            async with self._client() as client:
                response = await client.post(
                    f"/object/{self.bucket}/{path}",
                    content=content,
                    headers={
                        "Content-Type": content_type,
                        "x-upsert": "true" if upsert else "false",
                    },
                )
        except httpx.HTTPError as e:
            raise StorageError(f"Failed to upload resume: {e}") from e
        _raise_for_status(response, "upload resume")

        # Key is "<bucket>/<path>"
        key = response.json().get("Key") or f"{self.bucket}/{path}"
        stored_path = key.split("/", 1)[1] if key.startswith(f"{self.bucket}/") else key
        logger.info("Uploaded %s (%d bytes)", stored_path, len(content))
        return stored_path


def _raise_for_status(response: httpx.Response, action: str) -> None:
    if response.status_code in (200, 201):
        return
    detail = response.text[:500] if response.text else "Unknown error"
    logger.error("Supabase failed to %s (%s): %s", action, response.status_code, detail)
    raise StorageError(f"Failed to {action} ({response.status_code})")
