from __future__ import annotations

from typing import Any

from google import genai
from google.genai import errors, types

from tablesnap.errors import ServiceError
from tablesnap.transport import GenerationRequest, GenerationResponse, ResponsePart


class GeminiTransport:
    """One `generate_content` call with an inline image part and a text part.

    Without an injected client, each call opens its own async client and
    closes it before returning.
    """

    def __init__(
        self,
        api_key: str,
        timeout: float = 120.0,
        client: Any | None = None,
    ) -> None:
        self._api_key = api_key
        self._timeout = timeout
        self._client = client

    def _new_client(self) -> Any:
        return genai.Client(
            api_key=self._api_key,
            http_options=types.HttpOptions(timeout=int(self._timeout * 1000)),
        )

    async def generate(self, request: GenerationRequest) -> GenerationResponse:
        contents = [
            types.Part.from_bytes(data=request.image.to_bytes(), mime_type=request.image.mime_type),
            types.Part.from_text(text=request.instruction),
        ]
        try:
            if self._client is not None:
                response = await self._client.aio.models.generate_content(
                    model=request.model,
                    contents=contents,
                )
            else:
                async with self._new_client().aio as aclient:
                    response = await aclient.models.generate_content(
                        model=request.model,
                        contents=contents,
                    )
        except errors.APIError as exc:
            raise ServiceError(f"Gemini request failed ({exc.code}).") from exc
        return _to_generation_response(response)


def _to_generation_response(response: Any) -> GenerationResponse:
    parts: list[ResponsePart] = []
    candidates = getattr(response, "candidates", None) or []
    content = getattr(candidates[0], "content", None) if candidates else None
    for part in getattr(content, "parts", None) or []:
        inline = getattr(part, "inline_data", None)
        if inline is not None and inline.data:
            parts.append(ResponsePart(data=inline.data, mime_type=inline.mime_type))
        elif getattr(part, "text", None) is not None:
            parts.append(ResponsePart(text=part.text))

    text_parts = [part.text for part in parts if part.text is not None]
    text = "".join(text_parts) if text_parts else None
    return GenerationResponse(text=text, parts=tuple(parts))
