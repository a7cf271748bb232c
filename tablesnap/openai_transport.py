from __future__ import annotations

import base64
from typing import Any

from openai import APIError, AsyncOpenAI

from tablesnap.errors import ServiceError
from tablesnap.transport import GenerationRequest, GenerationResponse, ResponsePart

_OUTPUT_FORMAT_MIME = {
    "png": "image/png",
    "jpeg": "image/jpeg",
    "webp": "image/webp",
}


class OpenAITransport:
    """Chat Completions for text replies, the Images edit endpoint for image replies.

    Without an injected client, every call opens and closes its own
    `AsyncOpenAI` client so no connection pool outlives the event loop it was
    created on.
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

    async def generate(self, request: GenerationRequest) -> GenerationResponse:
        try:
            if self._client is not None:
                return await self._dispatch(self._client, request)
            async with AsyncOpenAI(api_key=self._api_key, timeout=self._timeout) as client:
                return await self._dispatch(client, request)
        except APIError as exc:
            raise ServiceError(f"OpenAI request failed ({exc.__class__.__name__}).") from exc

    async def _dispatch(self, client: Any, request: GenerationRequest) -> GenerationResponse:
        if request.modality == "image":
            return await self._edit(client, request)
        return await self._complete(client, request)

    async def _complete(self, client: Any, request: GenerationRequest) -> GenerationResponse:
        user_content = [
            {"type": "image_url", "image_url": {"url": request.image.to_data_url()}},
            {"type": "text", "text": request.instruction},
        ]
        resp = await client.chat.completions.create(
            model=request.model,
            messages=[{"role": "user", "content": user_content}],
            temperature=0,
        )
        if not resp.choices:
            return GenerationResponse(text=None)
        text = resp.choices[0].message.content
        parts = (ResponsePart(text=text),) if text is not None else ()
        return GenerationResponse(text=text, parts=parts)

    async def _edit(self, client: Any, request: GenerationRequest) -> GenerationResponse:
        extension = request.image.mime_type.rsplit("/", 1)[-1]
        resp = await client.images.edit(
            model=request.model,
            image=(f"source.{extension}", request.image.to_bytes(), request.image.mime_type),
            prompt=request.instruction,
        )
        mime_type = _OUTPUT_FORMAT_MIME.get(getattr(resp, "output_format", None) or "")
        parts: list[ResponsePart] = []
        for item in resp.data or []:
            b64_json = getattr(item, "b64_json", None)
            if b64_json:
                parts.append(ResponsePart(data=base64.b64decode(b64_json), mime_type=mime_type))
            else:
                parts.append(ResponsePart(text=getattr(item, "revised_prompt", None)))
        return GenerationResponse(parts=tuple(parts))
