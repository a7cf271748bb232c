from tablesnap.config import Settings
from tablesnap.errors import InvalidUpload
from tablesnap.models import ImageAsset

ALLOWED_MIME_TYPES = {
    "image/jpeg",
    "image/jpg",
    "image/png",
    "image/webp",
    "image/heic",
    "image/heif",
}

UPLOAD_EXTENSIONS = ["png", "jpg", "jpeg", "webp", "heic", "heif"]


def _looks_like_image(content: bytes) -> bool:
    if content.startswith(b"\xff\xd8\xff"):  # JPEG
        return True
    if content.startswith(b"\x89PNG\r\n\x1a\n"):  # PNG
        return True
    if len(content) >= 12 and content[:4] == b"RIFF" and content[8:12] == b"WEBP":
        return True
    if len(content) >= 12 and content[4:8] == b"ftyp":  # HEIC/HEIF family
        brand = content[8:12]
        return brand in {b"heic", b"heix", b"hevc", b"hevx", b"mif1", b"msf1"}
    return False


def check_upload(content: bytes, mime_type: str | None, settings: Settings) -> ImageAsset:
    """Validate an uploaded file and wrap it as an ImageAsset."""
    if mime_type not in ALLOWED_MIME_TYPES:
        raise InvalidUpload(f"Unsupported media type: {mime_type}")
    if not content:
        raise InvalidUpload("Image is empty.")
    if len(content) > settings.max_image_bytes:
        raise InvalidUpload(f"Image exceeds max size of {settings.max_image_bytes} bytes.")
    if not _looks_like_image(content):
        raise InvalidUpload("Uploaded file does not look like a valid supported image.")
    return ImageAsset(data=content, mime_type=mime_type)
