"""
Upload parameter collection and request signing.
"""

import hashlib
import time
from typing import Any, Dict, Mapping, Optional

from media_tags.config import MediaConfig
from media_tags.delivery.urls import DeliveryUrlBuilder


# Upload options passed through as request parameters
UPLOAD_PARAMS = (
    "public_id",
    "folder",
    "tags",
    "context",
    "callback",
    "upload_preset",
    "format",
    "type",
    "transformation",
    "eager",
    "overwrite",
    "invalidate",
    "use_filename",
    "unique_filename",
    "allowed_formats",
    "notification_url",
    "moderation",
    "backup",
    "faces",
    "colors",
    "image_metadata",
)


def _serialize_param(value: Any) -> Any:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Mapping):
        return "|".join(f"{key}={item}" for key, item in value.items())
    if isinstance(value, (list, tuple)):
        return ",".join(str(item) for item in value)
    return value


class RequestSigner:
    """Builds and signs upload request parameters."""

    def __init__(
        self,
        config: Optional[MediaConfig] = None,
        url_builder: Optional[DeliveryUrlBuilder] = None
    ):
        """
        Initialize the signer.

        Args:
            config: Account configuration providing api_key/api_secret.
            url_builder: Serializes `transformation` and `eager` values.
        """
        self.config = config or MediaConfig()
        self.url_builder = url_builder or DeliveryUrlBuilder(self.config)

    def _transformation_param(self, value: Any) -> str:
        if isinstance(value, Mapping):
            return self.url_builder.transformation_string(value)
        return self.url_builder.transformation_string({"transformation": value})

    def _eager_param(self, value: Any) -> str:
        """Eager transformations joined with "|", each with an optional /format."""
        if isinstance(value, (Mapping, str)):
            value = [value]

        eager = []
        for item in value:
            if isinstance(item, str):
                eager.append(item)
                continue
            item = dict(item)
            file_format = item.pop("format", None)
            parts = [self.url_builder.transformation_string(item), file_format]
            eager.append("/".join(part for part in parts if part))
        return "|".join(eager)

    def build_upload_params(
        self,
        options: Mapping[str, Any],
        timestamp: Optional[int] = None
    ) -> Dict[str, Any]:
        """
        Collect upload parameters from options.

        Args:
            options: Upload options. `callback_url` is sent as `callback`;
                `transformation` and `eager` are sent as transformation strings.
            timestamp: Epoch seconds (defaults to options["timestamp"] or now).

        Returns:
            Parameters in request order, unset values left as None.
        """
        if timestamp is None:
            timestamp = options.get("timestamp") or int(time.time())

        params: Dict[str, Any] = {"timestamp": timestamp}
        for name in UPLOAD_PARAMS:
            value = options.get(name)
            if name == "callback" and value is None:
                value = options.get("callback_url")
            if value is None:
                params[name] = None
            elif name == "transformation":
                params[name] = self._transformation_param(value)
            elif name == "eager":
                params[name] = self._eager_param(value)
            else:
                params[name] = _serialize_param(value)

        return params

    @staticmethod
    def api_sign_request(params: Mapping[str, Any], api_secret: str) -> str:
        """
        Compute the request signature.

        Empty values are skipped, the rest sorted by key and joined as
        k=v pairs with '&', then the secret is appended and SHA-1 hashed.
        """
        to_sign = "&".join(
            f"{key}={_serialize_param(params[key])}"
            for key in sorted(params)
            if params[key] is not None and params[key] != ""
        )
        return hashlib.sha1(f"{to_sign}{api_secret}".encode("utf-8")).hexdigest()

    def sign_request(
        self,
        params: Mapping[str, Any],
        options: Optional[Mapping[str, Any]] = None
    ) -> Dict[str, Any]:
        """
        Sign upload parameters.

        Args:
            params: Parameters from build_upload_params().
            options: May override api_key/api_secret.

        Returns:
            Non-empty parameters plus `signature` and `api_key`.

        Raises:
            ValueError: If the key or secret is not configured.
        """
        options = options or {}
        api_key = options.get("api_key") or self.config.api_key
        if not api_key:
            raise ValueError("MEDIA_API_KEY environment variable not set")
        api_secret = options.get("api_secret") or self.config.api_secret
        if not api_secret:
            raise ValueError("MEDIA_API_SECRET environment variable not set")

        signed = {
            key: value
            for key, value in params.items()
            if value is not None and value != ""
        }
        signed["signature"] = self.api_sign_request(signed, api_secret)
        signed["api_key"] = api_key
        return signed
