"""Tests for svg_normalize.geometry module."""

import pytest
from pathlib import Path

import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from svg_normalize.geometry import (
    ScaleTransform,
    SourceFrame,
    TargetFrame,
    compute_scale_transform,
    detect_source_frame,
    parse_length,
)

SVG_NS = 'xmlns="http://www.w3.org/2000/svg"'


def make_svg(root_attributes: str, body: str = '<path d="M0 0L1 1"/>') -> str:
    """Build a small SVG document with the given root attributes."""
    return f"<svg {SVG_NS} {root_attributes}>{body}</svg>"


class TestSourceFrame:
    """Tests for SourceFrame dataclass."""

    def test_no_offset(self):
        assert SourceFrame(0, 0, 24, 24).has_offset is False

    def test_x_offset(self):
        assert SourceFrame(5, 0, 24, 24).has_offset is True

    def test_y_offset(self):
        assert SourceFrame(0, -2, 24, 24).has_offset is True


class TestTargetFrame:
    """Tests for TargetFrame dataclass."""

    def test_view_box(self):
        assert TargetFrame(24).view_box == "0 0 24 24"

    def test_fractional_size(self):
        target = TargetFrame(24.5)
        assert target.size_text == "24.5"
        assert target.view_box == "0 0 24.5 24.5"


class TestScaleTransform:
    """Tests for ScaleTransform dataclass."""

    def test_apply_point_scale_only(self):
        transform = ScaleTransform(scale_x=0.5, scale_y=2)
        assert transform.apply_point(10, 10) == (5, 20)

    def test_apply_point_with_translation(self):
        transform = ScaleTransform(scale_x=2, scale_y=2, translate_x=-10, translate_y=-5)
        assert transform.apply_point(10, 5) == (0, 0)
        assert transform.apply_point(15, 10) == (10, 10)

    def test_apply_vector_ignores_translation(self):
        transform = ScaleTransform(scale_x=2, scale_y=3, translate_x=-10, translate_y=-5)
        assert transform.apply_vector(1, 1) == (2, 3)

    def test_has_translation(self):
        assert ScaleTransform(1, 1).has_translation is False
        assert ScaleTransform(1, 1, -0.0, -0.0).has_translation is False
        assert ScaleTransform(1, 1, 0, -3).has_translation is True

    def test_is_mirroring(self):
        assert ScaleTransform(1, 1).is_mirroring is False
        assert ScaleTransform(-1, 1).is_mirroring is True
        assert ScaleTransform(-1, -1).is_mirroring is False


class TestParseLength:
    """Tests for parse_length function."""

    def test_bare_number(self):
        assert parse_length("32") == 32

    def test_px_suffix(self):
        assert parse_length("32px") == 32

    def test_uppercase_px_suffix(self):
        assert parse_length("16.5PX") == 16.5

    @pytest.mark.parametrize("value", ["2em", "100%", "10mm", "auto", "", "-5", "px"])
    def test_unsupported(self, value):
        assert parse_length(value) is None


class TestDetectSourceFrame:
    """Tests for detect_source_frame function."""

    def test_view_box(self):
        frame = detect_source_frame(make_svg('viewBox="0 0 48 48"'))
        assert frame == SourceFrame(0, 0, 48, 48)

    def test_view_box_with_offset(self):
        frame = detect_source_frame(make_svg('viewBox="10 10 110 110"'))
        assert frame == SourceFrame(10, 10, 110, 110)

    def test_view_box_extra_whitespace(self):
        frame = detect_source_frame(make_svg('viewBox="  -5   0\t20 40 "'))
        assert frame == SourceFrame(-5, 0, 20, 40)

    def test_view_box_preferred_over_width_height(self):
        frame = detect_source_frame(
            make_svg('width="100" height="100" viewBox="0 0 24 24"')
        )
        assert frame == SourceFrame(0, 0, 24, 24)

    def test_view_box_wrong_token_count_falls_back(self):
        frame = detect_source_frame(make_svg('width="32" height="32" viewBox="0 0 24"'))
        assert frame == SourceFrame(0, 0, 32, 32)

    def test_view_box_non_numeric_falls_back(self):
        frame = detect_source_frame(
            make_svg('width="32" height="16" viewBox="0 0 a 24"')
        )
        assert frame == SourceFrame(0, 0, 32, 16)

    def test_comma_separated_view_box_treated_as_absent(self):
        assert detect_source_frame(make_svg('viewBox="0,0,24,24"')) is None

    def test_width_height_fallback(self):
        frame = detect_source_frame(make_svg('width="32" height="32"'))
        assert frame == SourceFrame(0, 0, 32, 32)

    def test_width_height_px(self):
        frame = detect_source_frame(make_svg('width="32px" height="16px"'))
        assert frame == SourceFrame(0, 0, 32, 16)

    def test_unsupported_unit(self):
        assert detect_source_frame(make_svg('width="2em" height="2em"')) is None

    def test_only_width(self):
        assert detect_source_frame(make_svg('width="32"')) is None

    def test_no_size_information(self):
        assert detect_source_frame(make_svg('fill="none"')) is None

    def test_stroke_width_is_not_width(self):
        document = make_svg('stroke-width="2" height="10"')
        assert detect_source_frame(document) is None

    def test_child_view_box_ignored(self):
        document = make_svg(
            'fill="none"', '<symbol viewBox="0 0 48 48"><path d="M0 0"/></symbol>'
        )
        assert detect_source_frame(document) is None

    def test_child_width_ignored(self):
        document = make_svg('fill="none"', '<rect width="10" height="10"/>')
        assert detect_source_frame(document) is None

    def test_zero_view_box_size_not_detected(self):
        assert detect_source_frame(make_svg('viewBox="0 0 0 24"')) is None

    def test_zero_view_box_does_not_fall_back(self):
        document = make_svg('width="32" height="32" viewBox="0 0 24 0"')
        assert detect_source_frame(document) is None

    def test_zero_width_attribute_not_detected(self):
        assert detect_source_frame(make_svg('width="0" height="32"')) is None

    def test_negative_view_box_size_passes_through(self):
        frame = detect_source_frame(make_svg('viewBox="0 0 -24 24"'))
        assert frame == SourceFrame(0, 0, -24, 24)

    def test_multiline_root_tag(self):
        document = '<svg\n  xmlns="http://www.w3.org/2000/svg"\n  viewBox="0 0 16 16"\n>\n</svg>'
        assert detect_source_frame(document) == SourceFrame(0, 0, 16, 16)

    def test_no_svg_element(self):
        assert detect_source_frame("not an svg") is None


class TestComputeScaleTransform:
    """Tests for compute_scale_transform function."""

    def test_halving(self):
        transform = compute_scale_transform(SourceFrame(0, 0, 48, 48), TargetFrame(24))
        assert transform.scale_x == 0.5
        assert transform.scale_y == 0.5
        assert transform.has_translation is False

    def test_anisotropic(self):
        transform = compute_scale_transform(SourceFrame(0, 0, 48, 12), TargetFrame(24))
        assert transform.scale_x == 0.5
        assert transform.scale_y == 2

    def test_offset_origin(self):
        transform = compute_scale_transform(
            SourceFrame(10, 10, 110, 110), TargetFrame(24)
        )
        assert transform.translate_x == -10
        assert transform.translate_y == -10
        assert transform.apply_point(10, 10) == (0, 0)
        assert transform.apply_point(120, 120) == pytest.approx((24, 24))

    def test_identity(self):
        transform = compute_scale_transform(SourceFrame(0, 0, 24, 24), TargetFrame(24))
        assert transform == ScaleTransform(1.0, 1.0, -0.0, -0.0)
        assert transform.has_translation is False
