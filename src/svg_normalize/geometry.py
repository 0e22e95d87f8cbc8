"""Coordinate frames and the scale transform between them."""

from dataclasses import dataclass

from .utils import (
    find_root_tag,
    format_number,
    get_attribute,
    parse_number,
)

# Unit suffixes accepted on root width/height attributes
LENGTH_UNITS = ("px",)


@dataclass
class SourceFrame:
    """Coordinate space detected for one input document."""

    origin_x: float
    origin_y: float
    width: float
    height: float

    @property
    def has_offset(self) -> bool:
        """Check if the frame does not start at (0, 0)."""
        return self.origin_x != 0 or self.origin_y != 0


@dataclass
class TargetFrame:
    """Square output canvas shared by every file in a run."""

    size: float

    @property
    def size_text(self) -> str:
        """Size as written into attributes."""
        return format_number(self.size)

    @property
    def view_box(self) -> str:
        """Canonical viewBox value."""
        size = self.size_text
        return f"0 0 {size} {size}"


@dataclass
class ScaleTransform:
    """Origin translation followed by per-axis scaling."""

    scale_x: float
    scale_y: float
    translate_x: float = 0.0
    translate_y: float = 0.0

    @property
    def has_translation(self) -> bool:
        """Check if the transform moves the origin."""
        return self.translate_x != 0 or self.translate_y != 0

    @property
    def is_mirroring(self) -> bool:
        """Check if the transform flips orientation (one negative axis)."""
        return self.scale_x * self.scale_y < 0

    def apply_point(self, x: float, y: float) -> tuple[float, float]:
        """Map an absolute point into the target frame."""
        if self.has_translation:
            x += self.translate_x
            y += self.translate_y
        return (x * self.scale_x, y * self.scale_y)

    def apply_vector(self, dx: float, dy: float) -> tuple[float, float]:
        """Map a relative offset (scale only, no translation)."""
        return (dx * self.scale_x, dy * self.scale_y)


def _parse_view_box(value: str) -> SourceFrame | None:
    """Parse a viewBox value of exactly four whitespace-separated numbers."""
    tokens = value.split()
    if len(tokens) != 4:
        return None

    numbers = [parse_number(token) for token in tokens]
    if any(n is None for n in numbers):
        return None

    min_x, min_y, width, height = numbers
    return SourceFrame(origin_x=min_x, origin_y=min_y, width=width, height=height)


def parse_length(value: str) -> float | None:
    """Parse a width/height attribute value.

    Accepts a non-negative bare number or a number with a ``px`` suffix.
    Any other unit (``em``, ``%``, ``mm`` ...) is rejected.

    Args:
        value: Raw attribute value.

    Returns:
        Length in user units, or None if not parseable.
    """
    text = value.strip()
    for unit in LENGTH_UNITS:
        if text.lower().endswith(unit):
            text = text[: -len(unit)]
            break

    if text.startswith(("-", "+")):
        return None
    return parse_number(text)


def detect_source_frame(document: str) -> SourceFrame | None:
    """Detect the original coordinate space of an SVG document.

    Detection order:
    1. viewBox on the root element (four numbers: min-x min-y width height).
    2. width and height on the root element, with origin (0, 0).

    A well-formed viewBox is authoritative; width/height are only consulted
    when the viewBox is missing or unparseable.

    Args:
        document: Full SVG text.

    Returns:
        SourceFrame, or None if no usable non-zero size was found.
    """
    root = find_root_tag(document)
    if root is None:
        return None

    frame = None

    view_box = get_attribute(root.attributes, "viewBox")
    if view_box is not None:
        frame = _parse_view_box(view_box)

    if frame is None:
        width_text = get_attribute(root.attributes, "width")
        height_text = get_attribute(root.attributes, "height")
        if width_text is not None and height_text is not None:
            width = parse_length(width_text)
            height = parse_length(height_text)
            if width is not None and height is not None:
                frame = SourceFrame(origin_x=0.0, origin_y=0.0, width=width, height=height)

    # Zero size gives no scale factor
    if frame is None or frame.width == 0 or frame.height == 0:
        return None

    return frame


def compute_scale_transform(source: SourceFrame, target: TargetFrame) -> ScaleTransform:
    """Compute the transform mapping a source frame onto the target canvas.

    Args:
        source: Detected source frame (width and height must be non-zero).
        target: Output canvas.

    Returns:
        ScaleTransform with ``scale = size / extent`` and
        ``translate = -origin`` per axis.
    """
    return ScaleTransform(
        scale_x=target.size / source.width,
        scale_y=target.size / source.height,
        translate_x=-source.origin_x,
        translate_y=-source.origin_y,
    )
