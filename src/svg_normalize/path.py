"""Path data parsing, transformation and serialization.

Handles the full SVG path grammar (M, L, H, V, C, S, Q, T, A, Z in absolute
and relative form). Command letters are preserved through a transform: only
the numeric operands change.
"""

import math
import re
from dataclasses import dataclass, field

from .geometry import ScaleTransform
from .utils import NUMBER_RE, format_number

# Operand count for one group of each command
PARAM_COUNTS = {
    "m": 2,
    "l": 2,
    "h": 1,
    "v": 1,
    "c": 6,
    "s": 4,
    "q": 4,
    "t": 2,
    "a": 7,
    "z": 0,
}

# Arc operand positions holding flags (large-arc, sweep)
ARC_FLAG_INDEXES = (3, 4)

_SEPARATOR_RE = re.compile(r"[\s,]*")


class PathDataError(ValueError):
    """Raised when path data cannot be parsed."""

    def __init__(self, message: str, position: int):
        super().__init__(f"{message} at position {position}")
        self.position = position


@dataclass
class PathSegment:
    """One path command with a single group of operands."""

    command: str
    params: list[float] = field(default_factory=list)

    @property
    def is_relative(self) -> bool:
        """Check if operands are relative to the current point."""
        return self.command.islower()


def _skip_separators(d: str, pos: int) -> int:
    return _SEPARATOR_RE.match(d, pos).end()


def _read_number(d: str, pos: int) -> tuple[float, int]:
    pos = _skip_separators(d, pos)
    match = NUMBER_RE.match(d, pos)
    if match is None:
        if pos >= len(d):
            raise PathDataError("Unexpected end of path data", pos)
        raise PathDataError(f"Expected number, found {d[pos]!r}", pos)
    return float(match.group()), match.end()


def _read_flag(d: str, pos: int) -> tuple[float, int]:
    # Flags are single characters and may be written without separators
    pos = _skip_separators(d, pos)
    if pos >= len(d) or d[pos] not in "01":
        raise PathDataError("Expected arc flag (0 or 1)", pos)
    return float(d[pos]), pos + 1


def _read_params(d: str, pos: int, command: str) -> tuple[list[float], int]:
    """Read one operand group for a command."""
    params: list[float] = []
    is_arc = command.lower() == "a"
    for index in range(PARAM_COUNTS[command.lower()]):
        if is_arc and index in ARC_FLAG_INDEXES:
            value, pos = _read_flag(d, pos)
        else:
            value, pos = _read_number(d, pos)
        params.append(value)
    return params, pos


def parse_path_data(d: str) -> list[PathSegment]:
    """Parse a path d attribute into segments.

    Repeated operand groups after a command are split into separate
    segments. Extra pairs after a moveto become linetos (``L`` after ``M``,
    ``l`` after ``m``).

    Args:
        d: Path data string.

    Returns:
        List of PathSegment (empty for blank data).

    Raises:
        PathDataError: If the data is malformed.
    """
    segments: list[PathSegment] = []
    pos = _skip_separators(d, 0)

    while pos < len(d):
        command = d[pos]
        if command.lower() not in PARAM_COUNTS:
            if not segments:
                raise PathDataError("Path data must start with a moveto command", pos)
            raise PathDataError(f"Unexpected character {command!r}", pos)
        if not segments and command.lower() != "m":
            raise PathDataError("Path data must start with a moveto command", pos)
        pos += 1

        if command.lower() == "z":
            segments.append(PathSegment(command))
            pos = _skip_separators(d, pos)
            continue

        params, pos = _read_params(d, pos, command)
        segments.append(PathSegment(command, params))

        # Implicit repetitions of the same command
        repeated = {"M": "L", "m": "l"}.get(command, command)
        pos = _skip_separators(d, pos)
        while pos < len(d) and d[pos].lower() not in PARAM_COUNTS:
            params, pos = _read_params(d, pos, repeated)
            segments.append(PathSegment(repeated, params))
            pos = _skip_separators(d, pos)

    return segments


def transform_arc_radii(
    rx: float, ry: float, rotation: float, scale_x: float, scale_y: float
) -> tuple[float, float, float]:
    """Compute the radii and rotation of a scaled arc ellipse.

    Args:
        rx: X radius.
        ry: Y radius.
        rotation: X-axis rotation in degrees.
        scale_x: Horizontal scale factor.
        scale_y: Vertical scale factor.

    Returns:
        Tuple of (rx, ry, rotation) describing the scaled ellipse.
    """
    rx = abs(rx)
    ry = abs(ry)

    if abs(scale_x) == abs(scale_y):
        factor = abs(scale_x)
        angle = rotation if scale_x == scale_y else -rotation
        return (rx * factor, ry * factor, angle)

    # Axis-aligned ellipses stay axis-aligned
    if rotation % 180 == 0:
        return (rx * abs(scale_x), ry * abs(scale_y), rotation)
    if rotation % 180 == 90:
        return (rx * abs(scale_y), ry * abs(scale_x), rotation)

    # General case: semi-axes of scale * rotate * diag(rx, ry) are the
    # square roots of the eigenvalues of M @ M.T
    theta = math.radians(rotation)
    cos_t = math.cos(theta)
    sin_t = math.sin(theta)
    p = scale_x**2 * (cos_t**2 * rx**2 + sin_t**2 * ry**2)
    q = scale_y**2 * (sin_t**2 * rx**2 + cos_t**2 * ry**2)
    b = scale_x * scale_y * cos_t * sin_t * (rx**2 - ry**2)

    mean = (p + q) / 2
    spread = math.hypot((p - q) / 2, b)
    major = math.sqrt(mean + spread)
    minor = math.sqrt(max(mean - spread, 0.0))
    angle = math.degrees(0.5 * math.atan2(2 * b, p - q))
    return (major, minor, angle)


def transform_segment(
    segment: PathSegment, transform: ScaleTransform, is_first: bool = False
) -> PathSegment:
    """Apply a transform to a single segment.

    Args:
        segment: Segment to transform.
        transform: Scale transform.
        is_first: Whether this is the first segment of the path. A leading
            relative moveto holds absolute coordinates and is written as ``M``.

    Returns:
        New PathSegment with transformed operands.
    """
    command = segment.command
    if is_first and command == "m":
        command = "M"

    relative = command.islower()
    apply = transform.apply_vector if relative else transform.apply_point
    params = segment.params
    kind = command.lower()

    if kind == "z":
        new_params: list[float] = []
    elif kind == "h":
        new_params = [apply(params[0], 0.0)[0]]
    elif kind == "v":
        new_params = [apply(0.0, params[0])[1]]
    elif kind == "a":
        rx, ry, rotation, large_arc, sweep, x, y = params
        rx, ry, rotation = transform_arc_radii(
            rx, ry, rotation, transform.scale_x, transform.scale_y
        )
        if transform.is_mirroring:
            sweep = 1.0 - sweep
        x, y = apply(x, y)
        new_params = [rx, ry, rotation, large_arc, sweep, x, y]
    else:
        new_params = []
        for i in range(0, len(params), 2):
            new_params.extend(apply(params[i], params[i + 1]))

    return PathSegment(command, new_params)


def transform_segments(
    segments: list[PathSegment], transform: ScaleTransform
) -> list[PathSegment]:
    """Apply a transform to every segment of a path."""
    return [
        transform_segment(segment, transform, is_first=(index == 0))
        for index, segment in enumerate(segments)
    ]


def serialize_path(segments: list[PathSegment]) -> str:
    """Serialize segments to compact path data.

    The command letter is omitted when it repeats the previous one (except
    moveto and closepath), and no separator is written before a negative
    number.

    Args:
        segments: Segments to serialize.

    Returns:
        Path data string, e.g. ``M10 20L30-5z``.
    """
    parts: list[str] = []
    previous = None

    for segment in segments:
        command = segment.command
        repeated = command == previous and command.lower() not in ("m", "z")
        if not repeated:
            parts.append(command)

        for index, value in enumerate(segment.params):
            text = format_number(value)
            if not text.startswith("-") and (index > 0 or repeated):
                parts.append(" ")
            parts.append(text)

        previous = command

    return "".join(parts)


def transform_path_data(d: str, transform: ScaleTransform) -> str:
    """Transform path data into the target coordinate space.

    Every absolute point (x, y) maps to
    ((x + translate_x) * scale_x, (y + translate_y) * scale_y); relative
    offsets and lengths are only scaled.

    Args:
        d: Path data string.
        transform: Scale transform for the document.

    Returns:
        Transformed path data.

    Raises:
        PathDataError: If the data is malformed.
    """
    segments = parse_path_data(d)
    return serialize_path(transform_segments(segments, transform))
