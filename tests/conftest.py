"""
Shared fixtures.
"""

import pytest

from media_tags.config import MediaConfig, reset_config
from media_tags.delivery.urls import DeliveryUrlBuilder
from media_tags.utils.tag_logger import reset_logger


MEDIA_ENV_VARS = (
    "MEDIA_CLOUD_NAME",
    "MEDIA_API_KEY",
    "MEDIA_API_SECRET",
    "MEDIA_SECURE",
    "MEDIA_CLIENT_HINTS",
    "MEDIA_RESPONSIVE_PLACEHOLDER",
    "MEDIA_PRIVATE_CDN",
    "MEDIA_SECURE_DISTRIBUTION",
    "MEDIA_CDN_SUBDOMAIN",
    "MEDIA_UPLOAD_PREFIX",
    "MEDIA_DEBUG_LEVEL",
    "MEDIA_LOG_TO_FILE",
    "MEDIA_LOG_DIR",
)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Isolate tests from MEDIA_* variables and cached singletons."""
    for name in MEDIA_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    reset_config()
    reset_logger()
    yield
    reset_config()
    reset_logger()


@pytest.fixture
def config():
    return MediaConfig(cloud_name="demo", api_key="1234", api_secret="b")


@pytest.fixture
def url_builder(config):
    return DeliveryUrlBuilder(config)
