"""SVG icon normalization pipeline.

Normalizes every SVG file in a directory to a square canvas:
detect source frame -> compute transform -> rewrite paths -> rewrite root.

Files whose size cannot be detected are skipped and left untouched.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, Literal

from .geometry import (
    ScaleTransform,
    SourceFrame,
    TargetFrame,
    compute_scale_transform,
    detect_source_frame,
)
from .path import PathDataError
from .rewrite import rewrite_document
from .utils import parse_number


DEFAULT_DIRECTORY = Path("./icons-src")
DEFAULT_SIZE = 24.0
SVG_SUFFIX = ".svg"

FileStatus = Literal["scaled", "skipped"]

# Undecodable bytes are carried through unchanged
FILE_ENCODING = "utf-8"
FILE_ERRORS = "surrogateescape"


class FileProcessingError(Exception):
    """Raised when a file in a directory run cannot be normalized.

    The underlying PathDataError or OSError is kept as ``__cause__``.
    """

    def __init__(self, file_path: Path, reason: Exception):
        super().__init__(f"Failed to process {file_path.name}: {reason}")
        self.file_path = file_path


@dataclass(frozen=True)
class NormalizeConfig:
    """Run configuration, built once before any file is processed."""

    directory: Path = DEFAULT_DIRECTORY
    target_size: float = DEFAULT_SIZE

    @property
    def target(self) -> TargetFrame:
        """Output canvas for this run."""
        return TargetFrame(size=self.target_size)


@dataclass
class FileResult:
    """Outcome of normalizing a single file."""

    file_path: Path | None = None
    status: FileStatus = "skipped"
    frame: SourceFrame | None = None
    transform: ScaleTransform | None = None

    @property
    def is_skipped(self) -> bool:
        """Check if the file was left untouched."""
        return self.status == "skipped"


@dataclass
class NormalizeReport:
    """Results for a whole directory run."""

    directory: Path
    target_size: float
    results: list[FileResult] = field(default_factory=list)

    @property
    def scaled_count(self) -> int:
        """Number of rewritten files."""
        return sum(1 for r in self.results if not r.is_skipped)

    @property
    def skipped_count(self) -> int:
        """Number of files left untouched."""
        return sum(1 for r in self.results if r.is_skipped)

    @property
    def skipped_files(self) -> list[Path]:
        """Paths of files left untouched."""
        return [r.file_path for r in self.results if r.is_skipped]


def parse_target_size(value: str | None, default: float = DEFAULT_SIZE) -> float:
    """Parse the target size argument.

    Non-numeric, non-finite and zero values fall back to the default
    without raising.

    Args:
        value: Raw argument value (None if not given).
        default: Fallback size.

    Returns:
        Target size.
    """
    if value is None:
        return default

    size = parse_number(value.strip())
    if size is None or size == 0:
        return default
    return size


def normalize_svg_text(
    document: str, target: TargetFrame, file_path: Path | None = None
) -> tuple[str, FileResult]:
    """Normalize SVG text to the target canvas.

    Args:
        document: Full SVG text.
        target: Output canvas.
        file_path: Source of the text, recorded in the result.

    Returns:
        Tuple of (text, FileResult). For a skipped document the text is the
        input unchanged.

    Raises:
        PathDataError: If any path data is malformed.
    """
    result = FileResult(file_path=file_path)

    frame = detect_source_frame(document)
    if frame is None:
        return document, result

    transform = compute_scale_transform(frame, target)
    text = rewrite_document(document, transform, target)

    result.status = "scaled"
    result.frame = frame
    result.transform = transform
    return text, result


def normalize_svg_file(file_path: Path, target: TargetFrame) -> FileResult:
    """Normalize an SVG file in place.

    The file is only written when it was transformed. Line endings and
    bytes that are not valid UTF-8 are preserved.

    Args:
        file_path: Path to the SVG file.
        target: Output canvas.

    Returns:
        FileResult for the file.

    Raises:
        OSError: If the file cannot be read or written.
        PathDataError: If any path data is malformed.
    """
    with open(
        file_path, "r", encoding=FILE_ENCODING, errors=FILE_ERRORS, newline=""
    ) as f:
        document = f.read()

    text, result = normalize_svg_text(document, target, file_path)

    if not result.is_skipped:
        with open(
            file_path, "w", encoding=FILE_ENCODING, errors=FILE_ERRORS, newline=""
        ) as f:
            f.write(text)

    return result


def list_svg_files(directory: Path) -> list[Path]:
    """List SVG files directly inside a directory.

    Matching is on the ``.svg`` suffix, case-insensitively. Subdirectories
    are not searched.

    Args:
        directory: Directory to scan.

    Returns:
        Sorted list of SVG file paths.

    Raises:
        FileNotFoundError: If the directory does not exist.
    """
    if not directory.is_dir():
        raise FileNotFoundError(f"Input folder does not exist: {directory}")

    return sorted(
        path
        for path in directory.iterdir()
        if path.is_file() and path.suffix.lower() == SVG_SUFFIX
    )


def iter_normalize_directory(config: NormalizeConfig) -> Iterator[FileResult]:
    """Normalize every SVG file in the configured directory.

    The directory listing is taken before any file is processed. The first
    file that fails stops the run; files before it stay written.

    Args:
        config: Run configuration.

    Yields:
        FileResult for each file, in name order.

    Raises:
        FileNotFoundError: If the directory does not exist.
        FileProcessingError: If a file has malformed path data or cannot be
            read or written.
    """
    files = list_svg_files(config.directory)
    target = config.target
    for file_path in files:
        try:
            result = normalize_svg_file(file_path, target)
        except (PathDataError, OSError) as e:
            raise FileProcessingError(file_path, e) from e
        yield result


def normalize_directory(config: NormalizeConfig) -> NormalizeReport:
    """Normalize a directory and collect the results."""
    report = NormalizeReport(directory=config.directory, target_size=config.target_size)
    report.results.extend(iter_normalize_directory(config))
    return report


def format_start_message(config: NormalizeConfig) -> str:
    """Format the line announcing the run parameters."""
    size = config.target.size_text
    return f'Normalizing SVGs in "{config.directory}" to {size}x{size}...'


def format_file_result(result: FileResult, target: TargetFrame) -> str:
    """Format the progress line for one file.

    Args:
        result: File result.
        target: Output canvas.

    Returns:
        Single line of text.
    """
    name = result.file_path.name if result.file_path else "document"
    if result.is_skipped:
        return f"Skipping {name}: couldn't detect original size"
    size = target.size_text
    return f"Scaled to {size}x{size}: {name}"


def format_normalize_report(report: NormalizeReport) -> str:
    """Format the completion line for a run."""
    return (
        f"Done normalizing SVGs. "
        f"Scaled: {report.scaled_count}, skipped: {report.skipped_count}"
    )
