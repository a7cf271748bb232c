"""Error taxonomy for table extraction and image editing.

Every failure the UI can show maps to exactly one of these exceptions. Each
carries a stable `error_code` so pages and logs can branch on it without
string matching. `user_message` is the single place where an error becomes
text for the user.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True, eq=False)
class TableSnapError(Exception):
    """Base class for domain errors."""

    message: str
    error_code: str

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"{self.error_code}: {self.message}"


class ConfigurationError(TableSnapError):
    def __init__(self, message: str = "API key is not configured") -> None:
        super().__init__(message=message, error_code="configuration")


class ServiceError(TableSnapError):
    def __init__(self, message: str = "Remote generation call failed") -> None:
        super().__init__(message=message, error_code="service_error")


class NoImageReturned(TableSnapError):
    def __init__(self, message: str = "Response contained no image data") -> None:
        super().__init__(message=message, error_code="no_image_returned")


class InvalidUpload(TableSnapError):
    def __init__(self, message: str = "Uploaded file is not a supported image") -> None:
        super().__init__(message=message, error_code="invalid_upload")


class ActionInProgress(TableSnapError):
    def __init__(self, message: str = "A request for this action is already running") -> None:
        super().__init__(message=message, error_code="action_in_progress")


USER_MESSAGES: dict[str, str] = {
    "configuration": (
        "API key is missing. Set TABLESNAP_API_KEY in the environment or .env and restart the app."
    ),
    "service_error": "Failed to process image. Please try again.",
    "no_image_returned": (
        "The model did not return an image. Try rephrasing your instruction."
    ),
    "invalid_upload": "Please upload a PNG, JPEG, WEBP or HEIC image within the size limit.",
    "action_in_progress": "Please wait until the current request has finished.",
}


def user_message(exc: BaseException) -> str:
    """Return the one user-visible message for `exc`.

    Anything outside the taxonomy is reported like a service failure.
    """
    code = exc.error_code if isinstance(exc, TableSnapError) else "service_error"
    return USER_MESSAGES.get(code, USER_MESSAGES["service_error"])
