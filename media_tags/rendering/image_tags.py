"""
Image tag, srcset and sprite helpers.
"""

import hashlib
import json
from functools import partial
from typing import Any, Dict, Mapping, Optional, Union

from media_tags.config import MediaConfig, get_config
from media_tags.delivery.urls import (
    HTML_SIZE_OPTIONS,
    TRANSFORMATION_PARAMS,
    DeliveryUrlBuilder,
)
from media_tags.models import DeliveryType
from media_tags.rendering.attributes import html_attrs, html_escape
from media_tags.responsive.breakpoints import (
    build_sizes_attribute,
    build_srcset_attribute,
    get_breakpoints,
)
from media_tags.utils.tag_logger import get_logger


BLANK = "data:image/gif;base64,R0lGODlhAQABAIAAAAAAAP///yH5BAEAAAAALAAAAAABAAEAAAIBRAA7"

CLIENT_HINTS_META_TAG = "<meta http-equiv='Accept-CH' content='DPR, Viewport-Width, Width' />"


class ImageTagRenderer:
    """Renders <img> tags and related markup for media resources."""

    def __init__(
        self,
        config: Optional[MediaConfig] = None,
        url_builder: Optional[DeliveryUrlBuilder] = None
    ):
        """
        Initialize the renderer.

        Args:
            config: Account configuration (defaults to the environment).
            url_builder: URL builder (defaults to one built from config).
        """
        self.config = config or get_config()
        self.url_builder = url_builder or DeliveryUrlBuilder(self.config)
        self.logger = get_logger()

    def url(self, source: str, options: Optional[Mapping[str, Any]] = None) -> str:
        """Delivery URL for a resource."""
        return self.url_builder.build(source, options or {})

    def srcset_url(self, public_id: str, width: int, options: Mapping[str, Any]) -> str:
        """
        URL of a single srcset candidate.

        The base transformation (or srcset.transformation when present) is
        followed by a scale to the requested width.
        """
        srcset_data = options.get("srcset")
        custom = srcset_data.get("transformation") if isinstance(srcset_data, Mapping) else None

        if custom:
            raw_transformation = self.url_builder.transformation_string({"transformation": custom})
        else:
            raw_transformation = self.url_builder.transformation_string(options)

        scale = f"c_scale,w_{width}"
        current = {
            key: value
            for key, value in options.items()
            if key not in TRANSFORMATION_PARAMS
            and key not in ("srcset", "transformation", "raw_transformation")
        }
        current["raw_transformation"] = f"{raw_transformation}/{scale}" if raw_transformation else scale

        return self.url_builder.build(public_id, current)

    def srcset_attribute(
        self,
        public_id: str,
        srcset_data: Union[str, Mapping[str, Any], None],
        options: Optional[Mapping[str, Any]] = None
    ) -> Optional[str]:
        """
        srcset attribute value for an image.

        Args:
            public_id: Public ID of the image.
            srcset_data: Breakpoint options, or a prebuilt srcset string.
            options: Image options the candidates are derived from.

        Returns:
            srcset value, or None when srcset_data is empty.

        Raises:
            InvalidInput: If the breakpoint options are invalid.
        """
        if not srcset_data:
            return None
        if isinstance(srcset_data, str):
            return srcset_data

        options = dict(options or {})
        options["srcset"] = srcset_data
        if options.get("type") == DeliveryType.FETCH.value and "fetch_format" not in options:
            options["fetch_format"] = options.pop("format", None)

        breakpoints = get_breakpoints(srcset_data)
        return build_srcset_attribute(breakpoints, partial(self.srcset_url, public_id, options=options))

    def sizes_attribute(self, srcset_data: Union[str, Mapping[str, Any], None]) -> Optional[str]:
        """sizes attribute value; None for empty or prebuilt srcset data."""
        if not srcset_data or isinstance(srcset_data, str):
            return None
        return build_sizes_attribute(get_breakpoints(srcset_data))

    def image_tag(self, public_id: str, options: Optional[Mapping[str, Any]] = None) -> str:
        """
        Generate an <img> tag.

        width/height stay as HTML attributes; they are sent to the service
        only together with a crop mode. With `srcset` both are dropped.

        Args:
            public_id: Public ID of the image.
            options: Transformation, delivery and HTML options.

        Returns:
            The <img .../> markup.
        """
        original = dict(options or {})

        try:
            source = self.url_builder.build(public_id, original)
            attributes = self.url_builder.html_options(original)

            if "html_width" in attributes:
                attributes["width"] = attributes.pop("html_width")
            if "html_height" in attributes:
                attributes["height"] = attributes.pop("html_height")

            client_hints = attributes.pop("client_hints", self.config.client_hints)
            responsive = attributes.pop("responsive", None)
            hidpi = attributes.pop("hidpi", None)
            placeholder = attributes.pop("responsive_placeholder", self.config.responsive_placeholder)

            if (responsive or hidpi) and not client_hints:
                attributes["data-src"] = source
                classes = ["cld-responsive" if responsive else "cld-hidpi"]
                current_class = attributes.pop("class", None)
                if current_class:
                    classes.insert(0, current_class)
                attributes["class"] = " ".join(classes)
                source = BLANK if placeholder == "blank" else placeholder

            html = "<img "
            if source:
                html += f"src='{html_escape(source)}' "

            srcset_data = attributes.pop("srcset", None)
            if srcset_data:
                attributes["srcset"] = self.srcset_attribute(public_id, srcset_data, original)
                if isinstance(srcset_data, Mapping) and srcset_data.get("sizes") is True:
                    attributes["sizes"] = self.sizes_attribute(srcset_data)
                for key in HTML_SIZE_OPTIONS:
                    attributes.pop(key, None)

            explicit = attributes.pop("attributes", None) or {}
            attributes.update(explicit)

            html += html_attrs(attributes) + "/>"
        except ValueError as e:
            self.logger.log_error("image", e)
            raise

        self.logger.log_markup("image", public_id, html, metadata=original)
        return html

    def fetch_image_tag(self, url: str, options: Optional[Mapping[str, Any]] = None) -> str:
        """<img> for a remote image delivered through the service."""
        return self.image_tag(url, {**(options or {}), "type": DeliveryType.FETCH.value})

    def facebook_profile_image_tag(self, profile: str, options: Optional[Mapping[str, Any]] = None) -> str:
        return self.image_tag(profile, {**(options or {}), "type": DeliveryType.FACEBOOK.value})

    def gravatar_profile_image_tag(self, email: str, options: Optional[Mapping[str, Any]] = None) -> str:
        """<img> for a Gravatar, addressed by the md5 of the normalized email."""
        digest = hashlib.md5(email.strip().lower().encode("utf-8")).hexdigest()
        return self.image_tag(digest, {**(options or {}), "type": DeliveryType.GRAVATAR.value, "format": "jpg"})

    def twitter_profile_image_tag(self, profile: str, options: Optional[Mapping[str, Any]] = None) -> str:
        return self.image_tag(profile, {**(options or {}), "type": DeliveryType.TWITTER.value})

    def twitter_name_profile_image_tag(self, profile: str, options: Optional[Mapping[str, Any]] = None) -> str:
        return self.image_tag(profile, {**(options or {}), "type": DeliveryType.TWITTER_NAME.value})

    def sprite_url(self, tag: str, options: Optional[Mapping[str, Any]] = None) -> str:
        """URL of the CSS sprite generated for a tag."""
        sprite_options: Dict[str, Any] = {**(options or {}), "type": DeliveryType.SPRITE.value}
        if not tag.endswith(".css"):
            sprite_options["format"] = "css"
        return self.url_builder.build(tag, sprite_options)

    def sprite_tag(self, tag: str, options: Optional[Mapping[str, Any]] = None) -> str:
        """Stylesheet <link> for a CSS sprite."""
        href = html_escape(self.sprite_url(tag, options))
        return f"<link rel='stylesheet' type='text/css' href='{href}'>"

    @staticmethod
    def client_hints_meta_tag() -> str:
        """Meta tag that enables Client-Hints."""
        return CLIENT_HINTS_META_TAG

    def js_config(self) -> str:
        """Script tag configuring the client-side widget."""
        params = json.dumps(self.config.js_params(), separators=(",", ":"))
        return (
            "<script type='text/javascript'>\n"
            f"$.cloudinary.config({params});\n"
            "</script>\n"
        )
