"""Cloudinary media host client.

Wraps the blocking ``cloudinary.uploader`` calls so the catalog can upload
and delete images from async request handlers.
"""

import asyncio
import io
from dataclasses import dataclass
from typing import Any

import cloudinary.uploader
from cloudinary.exceptions import Error as CloudinaryError
from loguru import logger
from starlette.concurrency import run_in_threadpool

from src.storefront.runtime.config.config_data import MediaConfig


class MediaUploadError(RuntimeError):
    """Raised when the media host rejects or fails an upload."""


@dataclass(frozen=True)
class ImageFile:
    """An image received from a client, held in memory."""

    filename: str
    content: bytes
    content_type: str = "application/octet-stream"


@dataclass(frozen=True)
class UploadedImage:
    public_id: str
    secure_url: str


class CloudinaryService:
    """Upload and delete images on Cloudinary.

    Credentials are passed with every call instead of through the global
    ``cloudinary.config()``, so several services can coexist.
    """

    def __init__(self, config: MediaConfig, uploader: Any = cloudinary.uploader) -> None:
        self._config = config
        self._uploader = uploader

    @property
    def folder(self) -> str:
        return self._config.folder

    def _options(self, **extra: Any) -> dict[str, Any]:
        if not self._config.is_configured:
            raise MediaUploadError("Media host credentials are not configured")
        options = {
            "cloud_name": self._config.cloud_name,
            "api_key": self._config.api_key,
            "api_secret": self._config.api_secret,
            "timeout": self._config.timeout_seconds,
        }
        if self._config.upload_prefix:
            options["upload_prefix"] = self._config.upload_prefix
        options.update(extra)
        return options

    async def upload(self, image: ImageFile, folder: str | None = None) -> UploadedImage:
        options = self._options(
            folder=folder or self._config.folder, resource_type="image"
        )
        stream = io.BytesIO(image.content)
        stream.name = image.filename
        try:
            result = await run_in_threadpool(self._uploader.upload, stream, **options)
        except CloudinaryError as e:
            raise MediaUploadError(f"Upload of {image.filename!r} failed: {e}") from e

        uploaded = UploadedImage(
            public_id=result["public_id"], secure_url=result["secure_url"]
        )
        logger.debug("Uploaded {} as {}", image.filename, uploaded.public_id)
        return uploaded

    async def destroy(self, public_id: str) -> bool:
        """Delete an uploaded image. Returns False instead of raising on failure."""
        try:
            options = self._options(resource_type="image")
            result = await run_in_threadpool(self._uploader.destroy, public_id, **options)
        except (CloudinaryError, MediaUploadError) as e:
            logger.warning("Failed to delete image {}: {}", public_id, e)
            return False
        return result.get("result") == "ok"

    async def upload_many(
        self, images: list[ImageFile], folder: str | None = None
    ) -> list[UploadedImage]:
        """Upload all images concurrently, preserving input order.

        If any upload fails, the ones that succeeded are destroyed before the
        first error is raised.
        """
        results = await asyncio.gather(
            *(self.upload(image, folder) for image in images), return_exceptions=True
        )
        uploaded = [r for r in results if isinstance(r, UploadedImage)]
        errors = [r for r in results if isinstance(r, BaseException)]
        if errors:
            logger.error(
                "{} of {} image uploads failed; removing {} uploaded images",
                len(errors),
                len(images),
                len(uploaded),
            )
            await self.destroy_many(uploaded)
            raise errors[0]
        return uploaded

    async def destroy_many(self, images: list[UploadedImage]) -> None:
        await asyncio.gather(*(self.destroy(image.public_id) for image in images))
