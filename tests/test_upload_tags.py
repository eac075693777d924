"""
Tests for upload inputs and signed upload forms.
"""

import json

import pytest
from bs4 import BeautifulSoup

from media_tags.config import MediaConfig
from media_tags.delivery.signing import RequestSigner
from media_tags.rendering.upload_tags import UploadTagRenderer


API_URL = "https://api.cloudinary.com/v1_1/demo"


@pytest.fixture
def renderer(config, url_builder):
    return UploadTagRenderer(config, url_builder)


def parse_input(html):
    return BeautifulSoup(html, "html.parser").find("input")


def test_upload_url(renderer):
    assert renderer.upload_url() == f"{API_URL}/auto/upload"
    assert renderer.upload_url({"resource_type": "image"}) == f"{API_URL}/image/upload"
    assert renderer.upload_url({"chunk_size": 5000000}) == f"{API_URL}/auto/upload_chunked"


def test_unsigned_upload_tag_params(renderer):
    params = json.loads(renderer.upload_tag_params({"unsigned": True, "upload_preset": "preset1", "timestamp": 10}))

    assert params == {"timestamp": 10, "upload_preset": "preset1"}


def test_signed_upload_tag_params(renderer):
    params = json.loads(renderer.upload_tag_params({"public_id": "sample", "timestamp": 10}))

    assert params["api_key"] == "1234"
    assert params["signature"] == RequestSigner.api_sign_request({"public_id": "sample", "timestamp": 10}, "b")


def test_unsigned_image_upload_tag(renderer):
    """Test the input attributes of an unsigned upload."""
    tag = parse_input(renderer.unsigned_image_upload_tag("image_id", "preset1", {"tags": ["a", "b"]}))

    assert tag["type"] == "file"
    assert tag["name"] == "file"
    assert tag["data-url"] == f"{API_URL}/auto/upload"
    assert tag["data-cloudinary-field"] == "image_id"
    assert tag["class"] == ["cloudinary-fileupload"]

    form_data = json.loads(tag["data-form-data"])
    assert form_data["upload_preset"] == "preset1"
    assert form_data["tags"] == "a,b"
    assert "signature" not in form_data
    assert not tag.has_attr("data-max-chunk-size")


def test_signed_image_upload_tag(renderer):
    tag = parse_input(renderer.image_upload_tag("image_id", {"public_id": "sample", "timestamp": 10}))

    form_data = json.loads(tag["data-form-data"])
    assert form_data["api_key"] == "1234"
    assert form_data["signature"] == RequestSigner.api_sign_request({"public_id": "sample", "timestamp": 10}, "b")


def test_upload_tag_html_options(renderer):
    tag = parse_input(renderer.upload_tag(
        "image_id",
        {"unsigned": True, "html": {"class": "uploader", "id": "upload-1", "type": "text"}},
    ))

    assert tag["class"] == ["uploader", "cloudinary-fileupload"]
    assert tag["id"] == "upload-1"
    assert tag["type"] == "file"


def test_upload_tag_chunk_size(renderer):
    tag = parse_input(renderer.upload_tag("image_id", {"unsigned": True, "chunk_size": 5000000}))

    assert tag["data-max-chunk-size"] == "5000000"
    assert tag["data-url"] == f"{API_URL}/auto/upload_chunked"


def test_upload_tag_does_not_mutate_options(renderer):
    options = {"unsigned": True, "html": {"class": "uploader"}}

    renderer.upload_tag("image_id", options)

    assert options == {"unsigned": True, "html": {"class": "uploader"}}


def test_form_tag(renderer):
    """Test a signed upload form with hidden inputs."""
    html = renderer.form_tag(
        "http://example.com/callback",
        {"timestamp": 10, "public_id": "sample", "form": {"id": "upload-form"}},
    )

    form = BeautifulSoup(html, "html.parser").find("form")
    assert form["action"] == f"{API_URL}/image/upload"
    assert form["method"] == "POST"
    assert form["enctype"] == "multipart/form-data"
    assert form["id"] == "upload-form"

    fields = {field["name"]: field["value"] for field in form.find_all("input")}
    assert all(field["type"] == "hidden" for field in form.find_all("input"))
    assert fields["callback"] == "http://example.com/callback"
    assert fields["api_key"] == "1234"
    assert fields["signature"] == RequestSigner.api_sign_request(
        {"callback": "http://example.com/callback", "public_id": "sample", "timestamp": 10},
        "b",
    )
    assert html.endswith("</form>\n")


def test_form_tag_requires_credentials(url_builder):
    renderer = UploadTagRenderer(MediaConfig(cloud_name="demo"), url_builder)

    with pytest.raises(ValueError, match="MEDIA_API_KEY"):
        renderer.form_tag("http://example.com/callback")
