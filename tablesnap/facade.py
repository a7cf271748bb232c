"""Generation request facade.

Everything that knows about the remote service's request/response shape lives
behind `GenerationTransport`; callers only deal with ImageAsset, EditRequest
and raw CSV text. A facade instance is built explicitly from settings and a
transport and may be shared across concurrent calls: the only state it holds
is read-only.

Each operation performs exactly one transport call and never retries.
"""

from __future__ import annotations

import uuid
from time import perf_counter

from tablesnap.config import Settings
from tablesnap.errors import ConfigurationError, NoImageReturned, ServiceError, TableSnapError
from tablesnap.logging_config import logger
from tablesnap.models import DEFAULT_IMAGE_MIME_TYPE, EditRequest, ImageAsset
from tablesnap.prompts import CSV_EXTRACTION_PROMPT, CSV_EXTRACTION_PROMPT_VERSION
from tablesnap.transport import (
    EncodedImage,
    GenerationRequest,
    GenerationResponse,
    GenerationTransport,
)


def encode_image(image: ImageAsset) -> EncodedImage:
    return EncodedImage(mime_type=image.mime_type, data_b64=image.to_base64())


class GenerationFacade:
    def __init__(self, settings: Settings, transport: GenerationTransport) -> None:
        self.settings = settings
        self.transport = transport

    def _require_credential(self) -> None:
        if not self.settings.has_credential:
            raise ConfigurationError(
                f"No API key configured for provider '{self.settings.provider}'."
            )

    async def _round_trip(self, request: GenerationRequest, call_id: str) -> GenerationResponse:
        try:
            return await self.transport.generate(request)
        except TableSnapError:
            raise
        except Exception as exc:  # noqa: BLE001
            logger.exception(
                "Generation call failed call_id=%s model=%s error=%s",
                call_id,
                request.model,
                exc.__class__.__name__,
            )
            raise ServiceError(f"Remote call failed ({exc.__class__.__name__}).") from exc

    async def extract_table(self, image: ImageAsset) -> str:
        """Send `image` with the fixed CSV instruction and return the reply verbatim.

        An empty reply is returned as-is; only a reply without any text is
        treated as a failure.
        """
        self._require_credential()
        call_id = uuid.uuid4().hex[:12]
        started_at = perf_counter()
        request = GenerationRequest(
            model=self.settings.extraction_model,
            image=encode_image(image),
            instruction=CSV_EXTRACTION_PROMPT,
            modality="text",
        )
        logger.info(
            "Table extraction start call_id=%s model=%s prompt=%s content_type=%s image_bytes=%s",
            call_id,
            request.model,
            CSV_EXTRACTION_PROMPT_VERSION,
            image.mime_type,
            len(image.data),
        )

        response = await self._round_trip(request, call_id)
        if response.text is None:
            logger.warning("Table extraction call_id=%s: response carried no text.", call_id)
            raise ServiceError("Response contained no text.")

        logger.info(
            "Table extraction done call_id=%s text_chars=%s duration_ms=%s",
            call_id,
            len(response.text),
            round((perf_counter() - started_at) * 1000, 1),
        )
        return response.text

    async def edit_image(self, request: EditRequest) -> ImageAsset:
        """Apply the free-form instruction to the image and return the first image part."""
        self._require_credential()
        call_id = uuid.uuid4().hex[:12]
        started_at = perf_counter()
        generation_request = GenerationRequest(
            model=self.settings.edit_model,
            image=encode_image(request.image),
            instruction=request.instruction,
            modality="image",
        )
        logger.info(
            "Image edit start call_id=%s model=%s content_type=%s image_bytes=%s instruction_chars=%s",
            call_id,
            generation_request.model,
            request.image.mime_type,
            len(request.image.data),
            len(request.instruction),
        )

        response = await self._round_trip(generation_request, call_id)
        part = response.first_image_part()
        if part is None or part.data is None:
            logger.warning(
                "Image edit call_id=%s: no image part among %s part(s).",
                call_id,
                len(response.parts),
            )
            raise NoImageReturned()

        result = ImageAsset(data=part.data, mime_type=part.mime_type or DEFAULT_IMAGE_MIME_TYPE)
        logger.info(
            "Image edit done call_id=%s result_type=%s result_bytes=%s duration_ms=%s",
            call_id,
            result.mime_type,
            len(result.data),
            round((perf_counter() - started_at) * 1000, 1),
        )
        return result


def build_facade(settings: Settings) -> GenerationFacade:
    """Facade wired to the real transport for `settings.provider`."""
    if settings.provider == "gemini":
        from tablesnap.gemini_transport import GeminiTransport

        transport: GenerationTransport = GeminiTransport(
            api_key=settings.api_key, timeout=settings.request_timeout
        )
    elif settings.provider == "openai":
        from tablesnap.openai_transport import OpenAITransport

        transport = OpenAITransport(api_key=settings.api_key, timeout=settings.request_timeout)
    else:
        raise ConfigurationError(f"Unknown provider: {settings.provider}")
    return GenerationFacade(settings, transport)
