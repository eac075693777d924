"""
Account configuration for the media service, sourced from the environment.
"""

import os
from functools import lru_cache
from typing import Any, Dict, Optional

from dotenv import load_dotenv
from pydantic import BaseModel


DEFAULT_UPLOAD_PREFIX = "https://api.cloudinary.com"
SHARED_CDN = "res.cloudinary.com"

# Keys exported to the client-side widget by js_config()
JS_CONFIG_PARAMS = ("api_key", "cloud_name", "private_cdn", "secure_distribution", "cdn_subdomain")


def _env_bool(key: str, default: bool = False) -> bool:
    raw_value = os.getenv(key)
    if raw_value is None or raw_value == "":
        return default
    return raw_value.strip().lower() in ("1", "true", "yes", "on")


class MediaConfig(BaseModel):
    """Account and delivery settings."""
    cloud_name: Optional[str] = None
    api_key: Optional[str] = None
    api_secret: Optional[str] = None
    secure: bool = False
    client_hints: bool = False
    responsive_placeholder: Optional[str] = None
    private_cdn: bool = False
    secure_distribution: Optional[str] = None
    cdn_subdomain: bool = False
    upload_prefix: str = DEFAULT_UPLOAD_PREFIX

    @classmethod
    def from_env(cls) -> "MediaConfig":
        """
        Read configuration from MEDIA_* environment variables.

        A .env file in the working directory is loaded first.
        """
        load_dotenv()

        return cls(
            cloud_name=os.getenv("MEDIA_CLOUD_NAME") or None,
            api_key=os.getenv("MEDIA_API_KEY") or None,
            api_secret=os.getenv("MEDIA_API_SECRET") or None,
            secure=_env_bool("MEDIA_SECURE"),
            client_hints=_env_bool("MEDIA_CLIENT_HINTS"),
            responsive_placeholder=os.getenv("MEDIA_RESPONSIVE_PLACEHOLDER") or None,
            private_cdn=_env_bool("MEDIA_PRIVATE_CDN"),
            secure_distribution=os.getenv("MEDIA_SECURE_DISTRIBUTION") or None,
            cdn_subdomain=_env_bool("MEDIA_CDN_SUBDOMAIN"),
            upload_prefix=os.getenv("MEDIA_UPLOAD_PREFIX", DEFAULT_UPLOAD_PREFIX),
        )

    def js_params(self) -> Dict[str, Any]:
        """Truthy values of JS_CONFIG_PARAMS, in declaration order."""
        params = {}
        for name in JS_CONFIG_PARAMS:
            value = getattr(self, name)
            if value:
                params[name] = value
        return params


@lru_cache(maxsize=1)
def get_config() -> MediaConfig:
    """Return the cached environment configuration."""
    return MediaConfig.from_env()


def reset_config() -> None:
    """Drop the cached configuration so the next get_config() re-reads it."""
    get_config.cache_clear()
