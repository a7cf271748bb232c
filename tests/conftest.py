"""Shared fixtures: settings with and without a credential, a tiny PNG."""

import pytest

from tablesnap.config import Settings
from tablesnap.facade import GenerationFacade
from tablesnap.models import ImageAsset
from tablesnap.transport import ScriptedTransport

# 1x1 transparent PNG
PNG_BYTES = bytes.fromhex(
    "89504e470d0a1a0a0000000d4948445200000001000000010806000000"
    "1f15c4890000000d49444154789c6300010000000500010d0a2db40000"
    "000049454e44ae426082"
)


@pytest.fixture
def settings() -> Settings:
    return Settings(api_key="test-key")


@pytest.fixture
def settings_without_key() -> Settings:
    return Settings(api_key="")


@pytest.fixture
def png_image() -> ImageAsset:
    return ImageAsset(data=PNG_BYTES, mime_type="image/png")


@pytest.fixture
def transport() -> ScriptedTransport:
    return ScriptedTransport()


@pytest.fixture
def facade(settings: Settings, transport: ScriptedTransport) -> GenerationFacade:
    return GenerationFacade(settings, transport)
