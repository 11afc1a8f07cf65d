"""
Backblaze B2 client for product media.

The server never proxies file bytes. It mints short-lived upload credentials
(``get_upload_credentials``); the caller then sends the file straight to B2
with ``upload_file``, which streams the body and reports progress.
"""
import hashlib
import logging
import re
import time
import uuid
from typing import AsyncIterator, Callable, Optional
from urllib.parse import quote

import httpx

from app.core.config import settings
from app.core.exceptions import StorageConfigError, StorageError
from app.schemas.media import UploadCredentials

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]

UPLOAD_PREFIX = "products"
DEFAULT_CHUNK_SIZE = 64 * 1024

_UNSAFE_CHARS = re.compile(r"[^a-zA-Z0-9_.-]")


def build_final_file_name(original_file_name: str) -> str:
    """``products/<uuid>-<safe base>[.<ext>]`` for an uploaded file."""
    base, dot, extension = original_file_name.rpartition(".")
    if not dot:
        base, extension = original_file_name, ""
    safe_base = _UNSAFE_CHARS.sub("_", base)
    suffix = f".{_UNSAFE_CHARS.sub('_', extension)}" if extension else ""
    return f"{UPLOAD_PREFIX}/{uuid.uuid4()}-{safe_base}{suffix}"


def _error_detail(e: httpx.HTTPError) -> str:
    response = getattr(e, "response", None)
    if response is not None:
        return response.text
    return str(e)


class B2Client:
    def __init__(
        self,
        key_id: Optional[str] = None,
        application_key: Optional[str] = None,
        bucket_id: Optional[str] = None,
        bucket_name: Optional[str] = None,
        api_base: Optional[str] = None,
        cache_seconds: Optional[int] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.key_id = key_id if key_id is not None else settings.BACKBLAZE_B2_APPLICATION_KEY_ID
        self.application_key = application_key if application_key is not None else settings.BACKBLAZE_B2_APPLICATION_KEY
        self.bucket_id = bucket_id if bucket_id is not None else settings.BACKBLAZE_B2_BUCKET_ID
        self.bucket_name = bucket_name if bucket_name is not None else settings.BACKBLAZE_B2_BUCKET_NAME
        self.api_base = (api_base or settings.B2_API_BASE).rstrip("/")
        self.cache_seconds = cache_seconds if cache_seconds is not None else settings.B2_AUTH_CACHE_SECONDS
        self._http = http_client or httpx.AsyncClient(timeout=settings.HTTP_TIMEOUT_SECONDS)
        self._clock = clock
        self._auth_cache: Optional[tuple[dict, float]] = None

    async def aclose(self):
        await self._http.aclose()

    def clear_auth_cache(self):
        self._auth_cache = None

    async def authorize(self) -> dict:
        """Account authorization, reused until the cache window runs out."""
        if self._auth_cache is not None:
            data, fetched_at = self._auth_cache
            if self._clock() - fetched_at < self.cache_seconds:
                return data

        if not self.key_id or not self.application_key:
            raise StorageConfigError("Backblaze B2 credentials are not configured.")

        try:
            response = await self._http.get(
                f"{self.api_base}/b2api/v2/b2_authorize_account",
                auth=(self.key_id, self.application_key),
            )
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as e:
            logger.error("B2 Auth Error: %s", _error_detail(e))
            raise StorageError("Failed to authorize with Backblaze B2.") from e

        self._auth_cache = (data, self._clock())
        logger.debug("Authorized with B2 account %s", data.get("accountId"))
        return data

    async def _request_upload_url(self, auth: dict) -> httpx.Response:
        return await self._http.post(
            f"{auth['apiUrl']}/b2api/v2/b2_get_upload_url",
            json={"bucketId": self.bucket_id},
            headers={"Authorization": auth["authorizationToken"]},
        )

    async def get_upload_credentials(self, original_file_name: str) -> UploadCredentials:
        if not self.bucket_id or not self.bucket_name:
            raise StorageConfigError("Backblaze B2 bucket ID or name is not configured.")

        auth = await self.authorize()

        try:
            response = await self._request_upload_url(auth)
            if response.status_code == 401:
                # Cached account token was revoked or expired; re-authorize once
                logger.warning("B2 rejected cached authorization, re-authorizing")
                self.clear_auth_cache()
                auth = await self.authorize()
                response = await self._request_upload_url(auth)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as e:
            logger.error("B2 Get Upload URL Error: %s", _error_detail(e))
            raise StorageError("Failed to get Backblaze B2 upload URL.") from e

        return UploadCredentials(
            upload_url=data["uploadUrl"],
            auth_token=data["authorizationToken"],
            final_file_name=build_final_file_name(original_file_name),
            public_file_url_base=f"{auth['downloadUrl']}/file/{self.bucket_name}",
        )


async def _chunks(content: bytes, chunk_size: int, on_progress: Optional[ProgressCallback]) -> AsyncIterator[bytes]:
    total = len(content)
    sent = 0
    for start in range(0, total, chunk_size):
        chunk = content[start:start + chunk_size]
        yield chunk
        sent += len(chunk)
        if on_progress:
            on_progress(sent, total)


async def upload_file(
    credentials: UploadCredentials,
    content: bytes,
    content_type: str = "b2/x-auto",
    on_progress: Optional[ProgressCallback] = None,
    http_client: Optional[httpx.AsyncClient] = None,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> str:
    """
    Upload ``content`` directly to B2 using minted credentials.

    ``on_progress(sent, total)`` is called after every chunk leaves the
    client. Returns the public URL of the stored file.
    """
    headers = {
        "Authorization": credentials.auth_token,
        "X-Bz-File-Name": quote(credentials.final_file_name, safe="/"),
        "Content-Type": content_type,
        "Content-Length": str(len(content)),
        "X-Bz-Content-Sha1": hashlib.sha1(content).hexdigest(),
    }

    client = http_client or httpx.AsyncClient(timeout=settings.HTTP_TIMEOUT_SECONDS)
    try:
        response = await client.post(
            credentials.upload_url,
            content=_chunks(content, chunk_size, on_progress),
            headers=headers,
        )
        response.raise_for_status()
    except httpx.HTTPError as e:
        logger.error("B2 Upload Error: %s", _error_detail(e))
        raise StorageError("Failed to upload file to Backblaze B2.") from e
    finally:
        if http_client is None:
            await client.aclose()

    logger.info("Uploaded %s (%d bytes)", credentials.final_file_name, len(content))
    return credentials.public_url


_client: Optional[B2Client] = None


def get_b2_client() -> B2Client:
    """Shared client so the authorization cache outlives a single request."""
    global _client
    if _client is None:
        _client = B2Client()
    return _client


async def close_b2_client():
    global _client
    if _client is not None:
        await _client.aclose()
        _client = None
