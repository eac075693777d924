"""
Breakpoint generation for responsive image sets.

Turns either an explicit list of widths or a (min_width, max_width,
max_images) range into the widths used for srcset candidates, and formats
the srcset and sizes attribute values from them.
"""

from typing import Any, Callable, List, Mapping, Sequence, Tuple, Union

from media_tags.models import (
    BreakpointRequest,
    ExplicitBreakpoints,
    RangeBreakpoints,
    SrcsetEntry,
)


RANGE_FIELDS = ("min_width", "max_width", "max_images")

BreakpointSet = Tuple[int, ...]


class InvalidInput(ValueError):
    """Raised when breakpoint parameters are missing or inconsistent."""


def _is_positive_number(value: Any) -> bool:
    # bool is an int subclass; numeric strings are not numbers here
    if isinstance(value, bool):
        return False
    if isinstance(value, float):
        return value.is_integer() and value > 0
    return isinstance(value, int) and value > 0


def _validate_range(min_width: Any, max_width: Any, max_images: Any) -> None:
    for value in (min_width, max_width, max_images):
        if not _is_positive_number(value):
            raise InvalidInput(
                "Either valid (min_width, max_width, max_images) "
                "or breakpoints must be provided to the image srcset attribute"
            )

    if min_width > max_width:
        raise InvalidInput("min_width must be less than max_width")


def parse_breakpoint_request(options: Mapping[str, Any]) -> BreakpointRequest:
    """
    Build a breakpoint request from srcset options.

    An explicit `breakpoints` list short-circuits validation; its widths
    are kept exactly as given.

    Args:
        options: Mapping with either `breakpoints` or
            `min_width`, `max_width` and `max_images`.

    Returns:
        ExplicitBreakpoints or RangeBreakpoints.

    Raises:
        InvalidInput: If `breakpoints` is not a list, or the range
            parameters are missing or invalid.
    """
    breakpoints = options.get("breakpoints")
    if breakpoints is not None:
        if not isinstance(breakpoints, (list, tuple)):
            raise InvalidInput("breakpoints must be a list of widths")
        return ExplicitBreakpoints(widths=list(breakpoints))

    min_width, max_width, max_images = (options.get(name) for name in RANGE_FIELDS)
    _validate_range(min_width, max_width, max_images)

    return RangeBreakpoints(
        min_width=int(min_width),
        max_width=int(max_width),
        max_images=int(max_images),
    )


def compute_breakpoints(request: BreakpointRequest) -> BreakpointSet:
    """
    Compute srcset widths for a breakpoint request.

    For the range form the step is ceil((max - min) / (max_images - 1)).
    Values are emitted from min_width while strictly below max_width, then
    max_width is appended, so the result always ends on max_width exactly
    once.

    Args:
        request: Explicit or range breakpoint request.

    Returns:
        Tuple of widths in emission order.

    Raises:
        InvalidInput: If a range request holds non-positive values or
            min_width > max_width.
    """
    if isinstance(request, ExplicitBreakpoints):
        return tuple(request.widths)

    _validate_range(request.min_width, request.max_width, request.max_images)

    min_width = request.min_width
    max_width = request.max_width
    max_images = request.max_images

    if max_images == 1:
        # a single image is always the largest one
        min_width = max_width

    divisor = max(max_images - 1, 1)
    step_size = -(-(max_width - min_width) // divisor)

    widths: List[int] = []
    current = min_width
    while current < max_width:
        widths.append(current)
        current += step_size

    widths.append(max_width)

    return tuple(widths)


def get_breakpoints(options: Mapping[str, Any]) -> BreakpointSet:
    """Parse srcset options and compute their breakpoints."""
    return compute_breakpoints(parse_breakpoint_request(options))


def srcset_entries(
    breakpoints: Sequence[int],
    url_builder: Callable[[int], str]
) -> List[SrcsetEntry]:
    """Call url_builder once per width, in order."""
    return [SrcsetEntry(url=url_builder(width), width=width) for width in breakpoints]


def build_srcset_attribute(
    breakpoints: Union[str, Sequence[int]],
    url_builder: Callable[[int], str]
) -> str:
    """
    Format the srcset attribute value.

    Args:
        breakpoints: Widths, or an already formatted srcset string which is
            returned unchanged.
        url_builder: Callable producing the candidate URL for a width.

    Returns:
        Candidates formatted as "{url} {width}w" joined with ", ".
    """
    if isinstance(breakpoints, str):
        return breakpoints

    return ", ".join(entry.descriptor() for entry in srcset_entries(breakpoints, url_builder))


def build_sizes_attribute(breakpoints: Sequence[int]) -> str:
    """Format the sizes attribute value for the given widths."""
    return ", ".join(f"(max-width: {width}px) {width}px" for width in breakpoints)
