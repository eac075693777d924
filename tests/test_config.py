"""
Tests for environment configuration.
"""

from media_tags.config import DEFAULT_UPLOAD_PREFIX, MediaConfig, get_config, reset_config


def test_from_env(monkeypatch):
    monkeypatch.setenv("MEDIA_CLOUD_NAME", "demo")
    monkeypatch.setenv("MEDIA_API_KEY", "1234")
    monkeypatch.setenv("MEDIA_API_SECRET", "secret")
    monkeypatch.setenv("MEDIA_SECURE", "true")
    monkeypatch.setenv("MEDIA_CLIENT_HINTS", "0")
    monkeypatch.setenv("MEDIA_RESPONSIVE_PLACEHOLDER", "blank")

    config = MediaConfig.from_env()

    assert config.cloud_name == "demo"
    assert config.api_key == "1234"
    assert config.api_secret == "secret"
    assert config.secure is True
    assert config.client_hints is False
    assert config.responsive_placeholder == "blank"
    assert config.upload_prefix == DEFAULT_UPLOAD_PREFIX


def test_from_env_defaults():
    config = MediaConfig.from_env()

    assert config.cloud_name is None
    assert config.secure is False
    assert config.private_cdn is False


def test_get_config_is_cached(monkeypatch):
    monkeypatch.setenv("MEDIA_CLOUD_NAME", "first")
    first = get_config()

    monkeypatch.setenv("MEDIA_CLOUD_NAME", "second")
    assert get_config() is first

    reset_config()
    assert get_config().cloud_name == "second"


def test_js_params():
    config = MediaConfig(cloud_name="demo", api_key="1234", api_secret="hidden", private_cdn=True)

    assert config.js_params() == {"api_key": "1234", "cloud_name": "demo", "private_cdn": True}
