"""Tests for ImageAsset and EditRequest."""

import pytest
from pydantic import ValidationError

from tablesnap.models import EditRequest, ImageAsset


def test_image_asset_defaults_to_png():
    assert ImageAsset(data=b"x").mime_type == "image/png"
    assert ImageAsset(data=b"x", mime_type=None).mime_type == "image/png"
    assert ImageAsset(data=b"x", mime_type="  ").mime_type == "image/png"


def test_image_asset_is_immutable(png_image):
    with pytest.raises(ValidationError):
        png_image.mime_type = "image/jpeg"


def test_data_uri_round_trip_keeps_bytes(png_image):
    uri = png_image.to_data_uri()

    assert uri.startswith("data:image/png;base64,")
    assert ImageAsset.from_data_uri(uri) == png_image


@pytest.mark.parametrize(
    "uri",
    ["image/png;base64,AAAA", "data:image/png,AAAA", "data:image/png;base64", "data:image/png;base64,@@@"],
)
def test_from_data_uri_rejects_malformed_input(uri):
    with pytest.raises(ValueError):
        ImageAsset.from_data_uri(uri)


def test_suggested_filename():
    assert ImageAsset(data=b"x").suggested_filename() == "edited-image.png"
    assert ImageAsset(data=b"x", mime_type="image/jpeg").suggested_filename() == "edited-image.jpg"
    assert ImageAsset(data=b"x", mime_type="image/x-unknown").suggested_filename() == "edited-image.png"


def test_edit_request_keeps_instruction_verbatim(png_image):
    request = EditRequest(image=png_image, instruction="  add a hat ")
    assert request.instruction == "  add a hat "


@pytest.mark.parametrize("instruction", ["", "   ", "\n\t"])
def test_edit_request_requires_non_whitespace_instruction(png_image, instruction):
    with pytest.raises(ValidationError):
        EditRequest(image=png_image, instruction=instruction)
