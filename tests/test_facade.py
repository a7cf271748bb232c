"""Tests for GenerationFacade against a scripted transport."""

import asyncio

import pytest

from tablesnap.config import Settings
from tablesnap.errors import ConfigurationError, NoImageReturned, ServiceError
from tablesnap.facade import GenerationFacade, build_facade
from tablesnap.models import EditRequest, ImageAsset
from tablesnap.prompts import CSV_EXTRACTION_PROMPT
from tablesnap.transport import GenerationResponse, ResponsePart


async def test_extract_table_returns_text_verbatim(facade, transport, png_image):
    raw = 'Company,"Revenue, FY24",Profit\r\nAcme, 10 ,2\n'
    transport.queue(GenerationResponse(text=raw))

    result = await facade.extract_table(png_image)

    assert result == raw
    assert transport.call_count == 1


async def test_extract_table_sends_fixed_instruction_and_encoded_image(
    facade, transport, settings, png_image
):
    transport.queue(GenerationResponse(text="a,b"))

    await facade.extract_table(png_image)

    request = transport.calls[0]
    assert request.instruction == CSV_EXTRACTION_PROMPT
    assert request.model == settings.extraction_model
    assert request.modality == "text"
    assert request.image.mime_type == "image/png"
    assert request.image.to_bytes() == png_image.data


async def test_extract_table_passes_empty_text_through(facade, transport, png_image):
    transport.queue(GenerationResponse(text=""))

    assert await facade.extract_table(png_image) == ""


async def test_extract_table_without_text_is_service_error(facade, transport, png_image):
    transport.queue(GenerationResponse(text=None))

    with pytest.raises(ServiceError):
        await facade.extract_table(png_image)


async def test_transport_failure_becomes_service_error(facade, transport, png_image):
    transport.queue(TimeoutError("read timed out"))

    with pytest.raises(ServiceError) as excinfo:
        await facade.extract_table(png_image)

    assert isinstance(excinfo.value.__cause__, TimeoutError)
    assert transport.call_count == 1


async def test_missing_credential_fails_before_any_call(settings_without_key, transport, png_image):
    facade = GenerationFacade(settings_without_key, transport)

    with pytest.raises(ConfigurationError):
        await facade.extract_table(png_image)
    with pytest.raises(ConfigurationError):
        await facade.edit_image(EditRequest(image=png_image, instruction="make it blue"))

    assert transport.call_count == 0


async def test_edit_image_returns_first_image_part(facade, transport, settings, png_image):
    transport.queue(
        GenerationResponse(
            parts=(
                ResponsePart(text="Here you go"),
                ResponsePart(data=b"first", mime_type="image/jpeg"),
                ResponsePart(data=b"second", mime_type="image/png"),
            )
        )
    )

    result = await facade.edit_image(EditRequest(image=png_image, instruction="add a hat"))

    assert result == ImageAsset(data=b"first", mime_type="image/jpeg")
    request = transport.calls[0]
    assert request.instruction == "add a hat"
    assert request.modality == "image"
    assert request.model == settings.edit_model
    assert transport.call_count == 1


async def test_edit_image_defaults_media_type_to_png(facade, transport, png_image):
    transport.queue(GenerationResponse(parts=(ResponsePart(data=b"img"),)))

    result = await facade.edit_image(EditRequest(image=png_image, instruction="crop"))

    assert result.mime_type == "image/png"
    assert result.data == b"img"


async def test_edit_image_without_image_part_raises(facade, transport, png_image):
    transport.queue(GenerationResponse(text="I cannot do that", parts=(ResponsePart(text="no"),)))

    with pytest.raises(NoImageReturned):
        await facade.edit_image(EditRequest(image=png_image, instruction="do it"))


async def test_edit_image_with_empty_image_data_raises(facade, transport, png_image):
    transport.queue(GenerationResponse(parts=(ResponsePart(data=b"", mime_type="image/png"),)))

    with pytest.raises(NoImageReturned):
        await facade.edit_image(EditRequest(image=png_image, instruction="do it"))


async def test_edit_image_transport_failure_is_service_error(facade, transport, png_image):
    transport.queue(ConnectionError("refused"))

    with pytest.raises(ServiceError):
        await facade.edit_image(EditRequest(image=png_image, instruction="do it"))


async def test_concurrent_calls_are_independent(facade, transport, png_image):
    transport.queue(GenerationResponse(text="a,b"))
    transport.queue(GenerationResponse(parts=(ResponsePart(data=b"img"),)))

    text, edited = await asyncio.gather(
        facade.extract_table(png_image),
        facade.edit_image(EditRequest(image=png_image, instruction="blur")),
    )

    assert text == "a,b"
    assert edited.data == b"img"
    assert transport.call_count == 2


def test_build_facade_picks_transport_for_provider():
    from tablesnap.gemini_transport import GeminiTransport
    from tablesnap.openai_transport import OpenAITransport

    assert isinstance(build_facade(Settings(api_key="k")).transport, OpenAITransport)
    assert isinstance(
        build_facade(Settings(api_key="k", provider="gemini")).transport, GeminiTransport
    )


def test_build_facade_rejects_unknown_provider():
    with pytest.raises(ConfigurationError):
        build_facade(Settings(api_key="k", provider="nope"))

