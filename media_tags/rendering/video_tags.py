"""
Video tag helpers: <video> with <source> children, posters and thumbnails.
"""

import re
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from media_tags.config import MediaConfig, get_config
from media_tags.delivery.urls import DeliveryUrlBuilder
from media_tags.models import ResourceType, VideoSource
from media_tags.rendering.attributes import html_attrs
from media_tags.rendering.image_tags import ImageTagRenderer
from media_tags.utils.tag_logger import get_logger


def default_video_sources() -> List[VideoSource]:
    """Recommended sources for the video tag, most efficient codec first."""
    return [
        VideoSource(type="mp4", codecs="hevc", transformations={"video_codec": "h265"}),
        VideoSource(type="webm", codecs="vp9", transformations={"video_codec": "vp9"}),
        VideoSource(type="mp4", transformations={"video_codec": "auto"}),
        VideoSource(type="webm", transformations={"video_codec": "auto"}),
    ]


def default_poster_options() -> Dict[str, Any]:
    return {"format": "jpg", "resource_type": ResourceType.VIDEO.value}


def default_source_types() -> List[str]:
    return ["webm", "mp4", "ogv"]


def video_mime_type(source_type: Optional[str], codecs: Union[str, Sequence[str], None] = None) -> Optional[str]:
    """
    MIME type for a <source> element.

    Args:
        source_type: Container/extension (ogv maps to video/ogg).
        codecs: Codec name or list of names.

    Returns:
        e.g. "video/mp4; codecs=hevc", or None without a source type.
    """
    if not source_type:
        return None

    video_type = "ogg" if source_type == "ogv" else source_type

    if codecs and not isinstance(codecs, str):
        codecs = ", ".join(codecs)
    codecs_str = f"codecs={codecs}" if codecs else None

    return "; ".join(part for part in (f"video/{video_type}", codecs_str) if part)


def collect_video_tag_attributes(video_options: Mapping[str, Any]) -> Dict[str, Any]:
    """Turn leftover video options into <video> attributes."""
    attributes = dict(video_options)

    if "html_width" in attributes:
        attributes["width"] = attributes.pop("html_width")
    if "html_height" in attributes:
        attributes["height"] = attributes.pop("html_height")

    if not attributes.get("poster"):
        attributes.pop("poster", None)

    return attributes


class VideoTagRenderer:
    """Renders <video> tags and video thumbnails."""

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
        self.image_renderer = ImageTagRenderer(self.config, self.url_builder)
        self.logger = get_logger()

    def video_path(self, source: str, options: Optional[Mapping[str, Any]] = None) -> str:
        """Delivery URL of a video."""
        return self.url_builder.build(source, {"resource_type": ResourceType.VIDEO.value, **(options or {})})

    def video_thumbnail_path(self, source: str, options: Optional[Mapping[str, Any]] = None) -> str:
        """URL of the jpg thumbnail of a video."""
        return self.url_builder.build(source, {**default_poster_options(), **(options or {})})

    def video_thumbnail_tag(self, source: str, options: Optional[Mapping[str, Any]] = None) -> str:
        """<img> tag showing the thumbnail of a video."""
        return self.image_renderer.image_tag(source, {**default_poster_options(), **(options or {})})

    def video_poster_attr(self, source: str, video_options: Mapping[str, Any]) -> Optional[str]:
        """
        Poster URL for a video.

        `poster` may be absent (default thumbnail), a URL string, or a dict of
        thumbnail options with an optional `public_id` of another resource.
        """
        if "poster" not in video_options:
            return self.video_thumbnail_path(source, video_options)

        poster = video_options["poster"]
        if not isinstance(poster, Mapping):
            return poster

        if "public_id" not in poster:
            return self.video_thumbnail_path(source, poster)

        return self.url_builder.build(poster["public_id"], poster)

    def _source_tag(self, src: str, mime_type: Optional[str]) -> str:
        return "<source " + html_attrs({"src": src, "type": mime_type}) + ">"

    def source_tags(self, source: str, options: Mapping[str, Any]) -> Tuple[List[str], Dict[str, Any]]:
        """
        Build <source> tags from `sources` or `source_types`.

        The two options are mutually exclusive; `sources` wins. Without
        either, the default source types are used.

        Args:
            source: Public ID without extension.
            options: Video options.

        Returns:
            Tuple of (source tags, options without the consumed keys).
        """
        remaining = dict(options)
        sources = remaining.pop("sources", None)
        source_types = remaining.pop("source_types", None)
        source_transformation = dict(remaining.pop("source_transformation", None) or {})

        tags: List[str] = []

        if isinstance(sources, (list, tuple)) and sources:
            for source_data in sources:
                if isinstance(source_data, VideoSource):
                    source_data = source_data.to_options()
                transformation = {**remaining, **(source_data.get("transformations") or {})}
                source_type = source_data.get("type")
                src = self.video_path(f"{source}.{source_type}", transformation)
                mime_type = video_mime_type(source_type, source_data.get("codecs"))
                tags.append(self._source_tag(src, mime_type))
            return tags, remaining

        if not source_types:
            source_types = default_source_types()

        if not isinstance(source_types, (list, tuple)):
            return tags, remaining

        for source_type in source_types:
            transformation = {**remaining, **(source_transformation.get(source_type) or {})}
            src = self.video_path(f"{source}.{source_type}", transformation)
            tags.append(self._source_tag(src, video_mime_type(source_type)))

        return tags, remaining

    def video_tag(self, source: str, options: Optional[Mapping[str, Any]] = None) -> str:
        """
        Generate a <video> tag.

        Args:
            source: Public ID of the video; a trailing webm/mp4/ogv
                extension is ignored.
            options: Transformation, source and HTML options.

        Returns:
            The <video>...</video> markup.
        """
        options = dict(options or {})
        public_id = re.sub(r"\.(" + "|".join(default_source_types()) + r")$", "", source)

        attributes = dict(options.pop("attributes", None) or {})
        fallback = options.pop("fallback_content", "")

        # kept for the single-source case, where it is the file extension
        source_types = options.get("source_types", "")

        try:
            if "poster" not in attributes:
                options["poster"] = self.video_poster_attr(public_id, options)

            options = {"resource_type": ResourceType.VIDEO.value, **options}

            tags, options = self.source_tags(public_id, options)

            if not tags:
                public_id = f"{public_id}.{source_types}"
                attributes["src"] = self.url_builder.build(public_id, options)

            attributes = {
                **collect_video_tag_attributes(self.url_builder.html_options(options)),
                **attributes,
            }
        except ValueError as e:
            self.logger.log_error("video", e)
            raise

        html = "<video " + html_attrs(attributes) + ">" + "".join(tags) + fallback + "</video>"

        self.logger.log_markup("video", source, html)
        return html
