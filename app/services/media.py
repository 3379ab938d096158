import logging
import os
from datetime import datetime, timezone

import cloudinary
import cloudinary.uploader

from ..config import settings
from ..exceptions import ScreenshotValidationError, StorageError

logger = logging.getLogger(__name__)


def _sniff_image_type(data: bytes) -> str | None:
    """Return a lowercase extension if bytes look like a common image, else None."""
    if not data or len(data) < 12:
        return None
    if data.startswith(b"\xFF\xD8\xFF"):
        return "jpg"
    if data.startswith(b"\x89PNG\r\n\x1a\n"):
        return "png"
    if data[:6] in (b"GIF87a", b"GIF89a"):
        return "gif"
    if data.startswith(b"RIFF") and data[8:12] == b"WEBP":
        return "webp"
    if data.startswith(b"BM"):
        return "bmp"
    return None


def validate_screenshot(filename: str | None, content_type: str | None, data: bytes) -> str:
    """Check a transaction screenshot before it is attached to a booking.

    Every booking entry point goes through here. Returns the sniffed image
    extension; raises ScreenshotValidationError with a guest-facing message.
    """
    if not content_type or not content_type.lower().startswith("image/"):
        raise ScreenshotValidationError("Please upload an image file for the transaction screenshot")
    if not data:
        raise ScreenshotValidationError("The transaction screenshot is empty")
    if len(data) > settings.UPLOAD_IMAGE_MAX_BYTES:
        raise ScreenshotValidationError(f"Please upload an image smaller than {settings.UPLOAD_IMAGE_MAX_MB}MB")
    kind = _sniff_image_type(data)
    if not kind:
        raise ScreenshotValidationError("Please upload an image file for the transaction screenshot")
    return kind


def screenshot_name(booking_id: int, filename: str | None, data: bytes = b"", now: datetime | None = None) -> str:
    """Object name `{booking_id}_{epoch millis}.{ext}` for a booking's screenshot."""
    now = now or datetime.now(timezone.utc)
    stamp = int(now.timestamp() * 1000)
    ext = ""
    if filename and "." in filename:
        ext = filename.rsplit(".", 1)[-1].lower()
    if not ext:
        ext = _sniff_image_type(data) or "bin"
    return f"{booking_id}_{stamp}.{ext}"


def _ensure_cloudinary_configured() -> bool:
    """
    Configure cloudinary from CLOUDINARY_URL if available.
    Returns True if Cloudinary is configured and usable.
    """
    url = settings.CLOUDINARY_URL or os.getenv("CLOUDINARY_URL", "")
    if not url:
        return False
    cloudinary.config(cloudinary_url=url)
    return True


def _local_path(name: str) -> str:
    return os.path.join(settings.UPLOAD_DIR, settings.SCREENSHOT_BUCKET, name)


def upload_screenshot(file_bytes: bytes, name: str) -> str:
    """Store the screenshot under the bucket and return its public URL.

    Cloudinary when configured, local uploads directory otherwise. Any
    failure raises StorageError so the booking sequence can stop.
    """
    bucket = settings.SCREENSHOT_BUCKET
    if _ensure_cloudinary_configured():
        public_id = name.rsplit(".", 1)[0]
        try:
            upload_res = cloudinary.uploader.upload(
                file_bytes,
                folder=bucket,
                public_id=public_id,
                resource_type="image",
                overwrite=False,
            )
        except Exception as exc:
            logger.error("Cloudinary upload of %s failed: %s", name, exc)
            raise StorageError() from exc
        # Prefer secure_url
        url = upload_res.get("secure_url") or upload_res.get("url")
        if not url:
            raise StorageError()
        logger.info("Uploaded screenshot %s to Cloudinary", name)
        return url

    try:
        path = _local_path(name)
        os.makedirs(os.path.dirname(path), exist_ok=True)
        with open(path, "wb") as f:
            f.write(file_bytes)
    except OSError as exc:
        logger.error("Saving screenshot %s locally failed: %s", name, exc)
        raise StorageError() from exc
    logger.info("Saved screenshot %s to %s", name, settings.UPLOAD_DIR)
    return f"/static/uploads/{bucket}/{name}"


def remove_screenshot(name: str) -> None:
    """Best-effort delete of an uploaded screenshot whose booking was rolled back."""
    try:
        if _ensure_cloudinary_configured():
            public_id = f"{settings.SCREENSHOT_BUCKET}/{name.rsplit('.', 1)[0]}"
            cloudinary.uploader.destroy(public_id, resource_type="image")
        else:
            path = _local_path(name)
            if os.path.exists(path):
                os.remove(path)
        logger.info("Removed orphaned screenshot %s", name)
    except Exception:
        logger.warning("Could not remove orphaned screenshot %s", name, exc_info=True)
