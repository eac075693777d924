"""
Delivery and API URL construction.
"""

import zlib
from typing import Any, Dict, Mapping, Optional
from urllib.parse import quote

from media_tags.config import SHARED_CDN, MediaConfig
from media_tags.models import DeliveryType, ResourceType


# Option name -> transformation short code
TRANSFORMATION_PARAMS = {
    "angle": "a",
    "background": "b",
    "crop": "c",
    "dpr": "dpr",
    "effect": "e",
    "fetch_format": "f",
    "gravity": "g",
    "height": "h",
    "quality": "q",
    "radius": "r",
    "video_codec": "vc",
    "width": "w",
    "x": "x",
    "y": "y",
}

# Options consumed by build() that never reach HTML attributes
URL_OPTIONS = (
    "cloud_name",
    "secure",
    "type",
    "resource_type",
    "format",
    "version",
    "transformation",
    "raw_transformation",
    "private_cdn",
    "secure_distribution",
    "cdn_subdomain",
    "upload_prefix",
)

# width/height are sent to the service but also stay as HTML attributes
HTML_SIZE_OPTIONS = ("width", "height")


class DeliveryUrlBuilder:
    """Builds delivery URLs and upload API endpoints for an account."""

    def __init__(self, config: Optional[MediaConfig] = None):
        """
        Initialize the builder.

        Args:
            config: Account configuration (defaults to an empty config;
                per-call options may still supply cloud_name etc.).
        """
        self.config = config or MediaConfig()

    def _cloud_name(self, options: Mapping[str, Any]) -> str:
        cloud_name = options.get("cloud_name") or self.config.cloud_name
        if not cloud_name:
            raise ValueError("MEDIA_CLOUD_NAME environment variable not set")
        return cloud_name

    def _option(self, options: Mapping[str, Any], name: str) -> Any:
        value = options.get(name)
        if value is None:
            return getattr(self.config, name)
        return value

    def transformation_string(self, options: Mapping[str, Any]) -> str:
        """
        Serialize transformation options.

        Args:
            options: Options holding transformation parameters, an optional
                named/nested `transformation` and `raw_transformation`.

        Returns:
            Slash separated transformation segments (may be empty).
        """
        components = []
        chained = []

        named = options.get("transformation")
        if isinstance(named, str) and named:
            components.append(f"t_{named}")
        elif isinstance(named, Mapping):
            chained.append(self.transformation_string(named))
        elif isinstance(named, (list, tuple)):
            for item in named:
                if isinstance(item, Mapping):
                    chained.append(self.transformation_string(item))
                else:
                    chained.append(f"t_{item}")

        has_crop = bool(options.get("crop"))
        for name, code in TRANSFORMATION_PARAMS.items():
            if name in HTML_SIZE_OPTIONS and not has_crop:
                continue
            value = options.get(name)
            if value is None or value == "":
                continue
            components.append(f"{code}_{value}")

        components.sort()

        raw = options.get("raw_transformation")
        if raw:
            components.append(raw)

        segments = [segment for segment in chained if segment]
        if components:
            segments.append(",".join(components))

        return "/".join(segments)

    def _prefix(self, source: str, cloud_name: str, options: Mapping[str, Any]) -> str:
        secure = bool(self._option(options, "secure"))
        private_cdn = bool(self._option(options, "private_cdn"))
        secure_distribution = self._option(options, "secure_distribution")

        private_host = f"{cloud_name}-{SHARED_CDN}"
        if secure:
            scheme = "https"
            host = secure_distribution or (private_host if private_cdn else SHARED_CDN)
        else:
            scheme = "http"
            if private_cdn:
                host = private_host
            elif self._option(options, "cdn_subdomain"):
                shard = zlib.crc32(source.encode("utf-8")) % 5 + 1
                host = f"res-{shard}.{SHARED_CDN.split('.', 1)[1]}"
            else:
                host = SHARED_CDN

        prefix = f"{scheme}://{host}"
        if not private_cdn:
            prefix += f"/{cloud_name}"
        return prefix

    def build(self, source: str, options: Optional[Mapping[str, Any]] = None) -> str:
        """
        Build the delivery URL of a resource.

        `secure` comes from the options or the config only; pass
        secure=True explicitly for pages served over HTTPS.

        Args:
            source: Public ID (or remote URL for fetch delivery).
            options: Transformation and delivery options.

        Returns:
            Delivery URL.
        """
        options = dict(options or {})
        cloud_name = self._cloud_name(options)

        resource_type = options.get("resource_type") or ResourceType.IMAGE.value
        delivery_type = options.get("type") or DeliveryType.UPLOAD.value
        file_format = options.get("format")

        if delivery_type == DeliveryType.FETCH.value:
            if not options.get("fetch_format") and file_format:
                options["fetch_format"] = file_format
            path = quote(source, safe=":/")
        else:
            path = quote(source, safe="/")
            if file_format:
                path = f"{path}.{file_format}"

        version = options.get("version")
        parts = [
            self._prefix(source, cloud_name, options),
            resource_type,
            delivery_type,
            self.transformation_string(options),
            f"v{version}" if version else "",
            path,
        ]
        return "/".join(part for part in parts if part)

    def __call__(self, source: str, options: Optional[Mapping[str, Any]] = None) -> str:
        return self.build(source, options)

    def api_url(self, action: str = "upload", options: Optional[Mapping[str, Any]] = None) -> str:
        """
        Build an upload API endpoint.

        Args:
            action: API action (upload, upload_chunked, ...).
            options: May override cloud_name, resource_type, upload_prefix.

        Returns:
            Endpoint URL.
        """
        options = options or {}
        cloud_name = self._cloud_name(options)
        resource_type = options.get("resource_type") or ResourceType.IMAGE.value
        prefix = (options.get("upload_prefix") or self.config.upload_prefix).rstrip("/")
        return f"{prefix}/v1_1/{cloud_name}/{resource_type}/{action}"

    def html_options(self, options: Mapping[str, Any]) -> Dict[str, Any]:
        """Copy of the options without keys consumed by build()."""
        consumed = set(URL_OPTIONS) | (set(TRANSFORMATION_PARAMS) - set(HTML_SIZE_OPTIONS))
        return {key: value for key, value in options.items() if key not in consumed}
