"""SVG Normalize - Rescale SVG icons to a uniform square canvas."""

__version__ = "0.1.0"

from .geometry import (
    ScaleTransform,
    SourceFrame,
    TargetFrame,
    compute_scale_transform,
    detect_source_frame,
)
from .path import (
    PathDataError,
    PathSegment,
    parse_path_data,
    serialize_path,
    transform_path_data,
)
from .rewrite import (
    rewrite_document,
    rewrite_paths,
    rewrite_root,
)
from .normalize import (
    FileProcessingError,
    FileResult,
    NormalizeConfig,
    NormalizeReport,
    iter_normalize_directory,
    normalize_directory,
    normalize_svg_file,
    normalize_svg_text,
    parse_target_size,
)

__all__ = [
    # Geometry
    "ScaleTransform",
    "SourceFrame",
    "TargetFrame",
    "compute_scale_transform",
    "detect_source_frame",
    # Path data
    "PathDataError",
    "PathSegment",
    "parse_path_data",
    "serialize_path",
    "transform_path_data",
    # Document rewriting
    "rewrite_document",
    "rewrite_paths",
    "rewrite_root",
    # Pipeline
    "FileProcessingError",
    "FileResult",
    "NormalizeConfig",
    "NormalizeReport",
    "iter_normalize_directory",
    "normalize_directory",
    "normalize_svg_file",
    "normalize_svg_text",
    "parse_target_size",
]
