"""
Data models for breakpoint requests, srcset entries and video sources.
"""

from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class ResourceType(str, Enum):
    """Resource types understood by the delivery service."""
    IMAGE = "image"
    VIDEO = "video"
    RAW = "raw"
    AUTO = "auto"


class DeliveryType(str, Enum):
    """Delivery types (how the source is resolved by the service)."""
    UPLOAD = "upload"
    FETCH = "fetch"
    SPRITE = "sprite"
    FACEBOOK = "facebook"
    GRAVATAR = "gravatar"
    TWITTER = "twitter"
    TWITTER_NAME = "twitter_name"


class ExplicitBreakpoints(BaseModel):
    """Caller-supplied widths, used as-is (never coerced)."""
    model_config = ConfigDict(frozen=True)

    widths: List[Any] = Field(default_factory=list)


class RangeBreakpoints(BaseModel):
    """Evenly spaced widths between min_width and max_width."""
    model_config = ConfigDict(frozen=True)

    min_width: int
    max_width: int
    max_images: int


BreakpointRequest = Union[ExplicitBreakpoints, RangeBreakpoints]


class SrcsetEntry(BaseModel):
    """A single srcset candidate."""
    model_config = ConfigDict(frozen=True)

    url: str
    width: Any

    def descriptor(self) -> str:
        """Format as a srcset candidate string."""
        return f"{self.url} {self.width}w"


class VideoSource(BaseModel):
    """A <source> definition for a video tag."""
    type: str
    codecs: Optional[Union[str, List[str]]] = None
    transformations: Dict[str, Any] = Field(default_factory=dict)

    def to_options(self) -> Dict[str, Any]:
        """Plain dict form, as accepted by the `sources` option."""
        return self.model_dump(exclude_none=True)
