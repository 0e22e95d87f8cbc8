"""Utility functions for text-level SVG inspection and number handling."""

import math
import re
from dataclasses import dataclass

# Plain decimal number as it appears in SVG attributes and path data
NUMBER_PATTERN = r"[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?"
NUMBER_RE = re.compile(NUMBER_PATTERN)

# Decimal places kept when writing coordinates back out
COORDINATE_PRECISION = 6

# Root <svg> start tag (first occurrence, attributes may span lines)
ROOT_TAG_RE = re.compile(r"<svg(?=[\s/>])([^>]*?)(/?)>", re.IGNORECASE)


def parse_number(text: str) -> float | None:
    """Parse a plain decimal number.

    Unlike ``float()``, rejects ``nan``, ``inf``, underscores and surrounding
    garbage, so only values that could appear in SVG markup are accepted.

    Args:
        text: Candidate number string.

    Returns:
        The parsed finite value, or None if the text is not a plain number.

    Example:
        >>> parse_number("1.5e2")
        150.0
        >>> parse_number("12px") is None
        True
    """
    if not NUMBER_RE.fullmatch(text):
        return None
    value = float(text)
    if not math.isfinite(value):
        return None
    return value


def format_number(value: float, precision: int = COORDINATE_PRECISION) -> str:
    """Format a number in its shortest decimal form.

    Args:
        value: Number to format.
        precision: Maximum number of decimal places.

    Returns:
        Formatted string without trailing zeros, ``-0`` is written as ``0``.

    Example:
        >>> format_number(24.0)
        '24'
        >>> format_number(0.1 + 0.2)
        '0.3'
    """
    text = f"{round(value, precision):.{precision}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text == "-0":
        return "0"
    return text


@dataclass
class RootTag:
    """Location of the root <svg> start tag inside a document."""

    start: int
    end: int
    attributes: str
    self_closing: bool


def find_root_tag(document: str) -> RootTag | None:
    """Find the root <svg> start tag.

    Args:
        document: Full SVG text.

    Returns:
        RootTag or None if the document has no <svg> element.
    """
    match = ROOT_TAG_RE.search(document)
    if match is None:
        return None
    return RootTag(
        start=match.start(),
        end=match.end(),
        attributes=match.group(1),
        self_closing=match.group(2) == "/",
    )


def attribute_pattern(name: str) -> re.Pattern[str]:
    """Build a regex matching ``name="value"`` (or single-quoted) in a tag.

    The attribute must be preceded by whitespace so that e.g. ``stroke-width``
    does not match ``width``. Group ``value`` holds the unquoted value.

    Args:
        name: Attribute name, matched case-insensitively.

    Returns:
        Compiled pattern.
    """
    return re.compile(
        rf"\s{re.escape(name)}\s*=\s*(?P<quote>[\"'])(?P<value>.*?)(?P=quote)",
        re.IGNORECASE | re.DOTALL,
    )


def get_attribute(tag_text: str, name: str) -> str | None:
    """Get the raw value of an attribute from start-tag text.

    Args:
        tag_text: Attribute portion of a start tag.
        name: Attribute name.

    Returns:
        Attribute value or None if not present.
    """
    match = attribute_pattern(name).search(tag_text)
    if match is None:
        return None
    return match.group("value")
