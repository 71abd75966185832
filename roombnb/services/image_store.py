"""Image host adapter backed by the Cloudinary SDK."""

import io
import logging
from dataclasses import dataclass
from typing import Any

import cloudinary.exceptions
import cloudinary.uploader
from starlette.concurrency import run_in_threadpool

from roombnb.config import Settings

logger = logging.getLogger(__name__)


class ImageStoreError(Exception):
    """Raised when the image host rejects a request or cannot be reached."""


@dataclass
class UploadedImage:
    """Public URL and asset id of an image stored on the host."""

    url: str
    asset_id: str

    def as_photo(self) -> dict[str, str]:
        return {"url": self.url, "picture_id": self.asset_id}


class ImageStore:
    """Uploads, replaces and deletes photos on the remote image host.

    One instance is created at application startup and shared by all requests.
    Credentials are passed on every SDK call rather than through the global
    ``cloudinary.config``, so several stores can coexist.
    """

    def __init__(
        self,
        cloud_name: str | None,
        api_key: str | None,
        api_secret: str | None,
        upload_prefix: str = "https://api.cloudinary.com",
        root_folder: str = "airbnb",
        timeout: float = 30.0,
    ) -> None:
        self.cloud_name = cloud_name
        self.api_key = api_key
        self.api_secret = api_secret
        self.upload_prefix = upload_prefix.rstrip("/")
        self.root_folder = root_folder.strip("/")
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings: Settings) -> "ImageStore":
        return cls(
            cloud_name=settings.cloudinary_cloud_name,
            api_key=settings.cloudinary_api_key,
            api_secret=settings.cloudinary_api_secret,
            upload_prefix=settings.cloudinary_upload_prefix,
            root_folder=settings.image_folder,
            timeout=settings.image_upload_timeout,
        )

    @property
    def configured(self) -> bool:
        return bool(self.cloud_name and self.api_key and self.api_secret)

    def folder(self, *parts: Any) -> str:
        """Build a folder path below the configured root folder."""
        return "/".join([self.root_folder, *(str(part) for part in parts)])

    def _options(self, **options: Any) -> dict[str, Any]:
        if not self.configured:
            raise ImageStoreError("Image host is not configured")
        return {
            "cloud_name": self.cloud_name,
            "api_key": self.api_key,
            "api_secret": self.api_secret,
            "upload_prefix": self.upload_prefix,
            "timeout": self.timeout,
            **options,
        }

    async def _call(self, action: str, func, *args: Any, **options: Any) -> dict:
        try:
            return await run_in_threadpool(func, *args, **options)
        except cloudinary.exceptions.Error as e:
            logger.error(f"Image host rejected {action}: {e}")
            raise ImageStoreError(f"{action} failed: {e}") from e

    async def upload(
        self,
        content: bytes,
        filename: str,
        folder: str,
        asset_id: str | None = None,
    ) -> UploadedImage:
        """Upload an image into ``folder``.

        When ``asset_id`` is given the existing asset is overwritten in place
        and keeps its id; ``folder`` is then ignored since the id already
        carries the folder path.
        """
        if asset_id:
            options = self._options(public_id=asset_id, overwrite=True, invalidate=True)
        else:
            options = self._options(folder=folder)
        stream = io.BytesIO(content)
        stream.name = filename
        result = await self._call("upload", cloudinary.uploader.upload, stream, **options)

        try:
            uploaded = UploadedImage(url=result["secure_url"], asset_id=result["public_id"])
        except KeyError as e:
            raise ImageStoreError(f"Unexpected upload response: missing {e}") from e
        logger.info(f"Uploaded image {uploaded.asset_id}")
        return uploaded

    async def delete(self, asset_id: str) -> None:
        """Delete an asset. Deleting an asset that is already gone succeeds."""
        options = self._options(invalidate=True)
        result = await self._call("destroy", cloudinary.uploader.destroy, asset_id, **options)

        outcome = result.get("result")
        if outcome == "not found":
            logger.info(f"Image {asset_id} already absent from host")
        elif outcome != "ok":
            raise ImageStoreError(f"destroy returned {outcome!r} for {asset_id}")
        else:
            logger.info(f"Deleted image {asset_id}")


async def discard_images(store: ImageStore, asset_ids: list[str]) -> None:
    """Delete assets that no longer belong to anything. Failures are only logged."""
    for asset_id in asset_ids:
        try:
            await store.delete(asset_id)
        except ImageStoreError as e:
            logger.warning(f"Could not delete orphaned image {asset_id}: {e}")
