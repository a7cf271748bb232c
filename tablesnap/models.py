from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass
from typing import Any, Generic, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_IMAGE_MIME_TYPE = "image/png"

Cell = str
Row = list[Cell]
Table = list[Row]

_EXTENSIONS = {
    "image/png": "png",
    "image/jpeg": "jpg",
    "image/jpg": "jpg",
    "image/webp": "webp",
    "image/heic": "heic",
    "image/heif": "heif",
    "image/gif": "gif",
}


class ImageAsset(BaseModel):
    """Image bytes plus their media type. Replaced, never mutated."""

    model_config = ConfigDict(frozen=True)

    data: bytes = Field(..., repr=False)
    mime_type: str = Field(default=DEFAULT_IMAGE_MIME_TYPE)

    @field_validator("mime_type", mode="before")
    @classmethod
    def _default_mime_type(cls, value: Any) -> Any:
        if value is None or (isinstance(value, str) and not value.strip()):
            return DEFAULT_IMAGE_MIME_TYPE
        return value.strip().lower() if isinstance(value, str) else value

    def to_base64(self) -> str:
        return base64.b64encode(self.data).decode("ascii")

    def to_data_uri(self) -> str:
        return f"data:{self.mime_type};base64,{self.to_base64()}"

    @classmethod
    def from_data_uri(cls, uri: str) -> ImageAsset:
        header, sep, payload = uri.partition(",")
        if not sep or not header.startswith("data:") or not header.endswith(";base64"):
            raise ValueError("Not a base64 data URI.")
        mime_type = header[len("data:") : -len(";base64")]
        try:
            data = base64.b64decode(payload, validate=True)
        except binascii.Error as exc:
            raise ValueError("Data URI payload is not valid base64.") from exc
        return cls(data=data, mime_type=mime_type)

    def suggested_filename(self, stem: str = "edited-image") -> str:
        return f"{stem}.{_EXTENSIONS.get(self.mime_type, 'png')}"


class EditRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    image: ImageAsset
    instruction: str

    @field_validator("instruction")
    @classmethod
    def _require_text(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Instruction must contain non-whitespace text.")
        return value


PayloadT = TypeVar("PayloadT")


@dataclass(frozen=True)
class Pending:
    request_id: str


@dataclass(frozen=True)
class Success(Generic[PayloadT]):
    request_id: str
    payload: PayloadT


@dataclass(frozen=True)
class Failure:
    request_id: str
    reason: str
    kind: str


RequestOutcome = Union[Pending, Success[Any], Failure]
