"""Transport seam between the facade and a remote generation service.

The facade only ever sees the small value types in this module. Real
transports translate them to a vendor SDK; `ScriptedTransport` replays canned
responses so the facade can be exercised without network access.
"""

from __future__ import annotations

import base64
from collections import deque
from dataclasses import dataclass, field
from typing import Iterable, Literal, Protocol

Modality = Literal["text", "image"]


@dataclass(frozen=True)
class EncodedImage:
    mime_type: str
    data_b64: str

    def to_bytes(self) -> bytes:
        return base64.b64decode(self.data_b64)

    def to_data_url(self) -> str:
        return f"data:{self.mime_type};base64,{self.data_b64}"


@dataclass(frozen=True)
class GenerationRequest:
    model: str
    image: EncodedImage
    instruction: str
    modality: Modality = "text"


@dataclass(frozen=True)
class ResponsePart:
    text: str | None = None
    data: bytes | None = field(default=None, repr=False)
    mime_type: str | None = None

    @property
    def has_image(self) -> bool:
        return bool(self.data)


@dataclass(frozen=True)
class GenerationResponse:
    text: str | None = None
    parts: tuple[ResponsePart, ...] = ()

    def first_image_part(self) -> ResponsePart | None:
        for part in self.parts:
            if part.has_image:
                return part
        return None


class GenerationTransport(Protocol):
    """Performs exactly one remote round-trip per `generate` call."""

    async def generate(self, request: GenerationRequest) -> GenerationResponse:
        ...


class ScriptedTransport:
    """Replays queued responses (or raises queued exceptions) in order."""

    def __init__(self, responses: Iterable[GenerationResponse | BaseException] = ()) -> None:
        self._script: deque[GenerationResponse | BaseException] = deque(responses)
        self.calls: list[GenerationRequest] = []

    def queue(self, response: GenerationResponse | BaseException) -> None:
        self._script.append(response)

    @property
    def call_count(self) -> int:
        return len(self.calls)

    async def generate(self, request: GenerationRequest) -> GenerationResponse:
        self.calls.append(request)
        if not self._script:
            raise AssertionError("ScriptedTransport has no scripted response left.")
        item = self._script.popleft()
        if isinstance(item, BaseException):
            raise item
        return item
