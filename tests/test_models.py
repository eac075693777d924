"""
Tests for data models.
"""

import pytest
from pydantic import ValidationError

from media_tags.models import (
    DeliveryType,
    ExplicitBreakpoints,
    RangeBreakpoints,
    ResourceType,
    SrcsetEntry,
)


def test_srcset_entry_descriptor():
    """Test srcset candidate formatting."""
    entry = SrcsetEntry(url="http://example.com/a.jpg", width=320)
    assert entry.descriptor() == "http://example.com/a.jpg 320w"


def test_breakpoint_models_are_frozen():
    request = RangeBreakpoints(min_width=100, max_width=300, max_images=3)

    with pytest.raises(ValidationError):
        request.max_width = 500


def test_explicit_breakpoints_default():
    assert ExplicitBreakpoints().widths == []


def test_enum_values():
    assert ResourceType.VIDEO.value == "video"
    assert DeliveryType.FETCH.value == "fetch"
