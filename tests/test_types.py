"""Tests for preview options and page range parsing."""

from __future__ import annotations

import dataclasses

import pytest

from filepreview.preview.exceptions import InvalidOptionError
from filepreview.preview.types import PageRange, PreviewOptions, parse_page_range


class TestParsePageRange:
    def test_empty_defaults_to_first_page(self):
        assert parse_page_range(None) == PageRange(1, 1)
        assert parse_page_range("") == PageRange(1, 1)

    def test_valid_range(self):
        page_range = parse_page_range("2-5")
        assert page_range == PageRange(2, 5)
        assert page_range.page_count == 4
        assert page_range.as_unoconv() == "2-5"
        assert not page_range.is_single_page

    @pytest.mark.parametrize("value", ["3", "a-b", "1-2-3", "0-2", "5-2"])
    def test_invalid_ranges_fall_back(self, value):
        page_range = parse_page_range(value)
        assert page_range == PageRange(1, 1)
        assert page_range.as_unoconv() == "1"

    def test_whitespace_is_tolerated(self):
        assert parse_page_range(" 1 - 3 ") == PageRange(1, 3)


class TestPreviewOptions:
    def test_camel_case_keys(self):
        options = PreviewOptions.from_mapping(
            {"forceAspect": True, "colorSpace": "sRGB", "width": 10, "height": 20}
        )
        assert options.force_aspect is True
        assert options.colorspace == "sRGB"
        assert options.has_size

    def test_unknown_and_none_values_are_ignored(self):
        options = PreviewOptions.from_mapping({"pdf": True, "quality": None})
        assert options == PreviewOptions()

    @pytest.mark.parametrize("width, height", [(None, 100), (100, None), (0, 100), (-1, 5)])
    def test_size_requires_both_dimensions(self, width, height):
        assert not PreviewOptions(width=width, height=height).has_size

    def test_coerce(self):
        options = PreviewOptions(quality=50)
        assert PreviewOptions.coerce(options) is options
        assert PreviewOptions.coerce(None) == PreviewOptions()
        assert PreviewOptions.coerce({"quality": 50}) == options

    def test_options_are_immutable(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            PreviewOptions().width = 5  # type: ignore[misc]


class TestOptionConversion:
    def test_string_sizes_are_converted(self):
        options = PreviewOptions.from_mapping({"width": "100", "height": "50", "quality": "80"})
        assert options.width == 100
        assert options.height == 50
        assert options.quality == 80
        assert options.has_size

    @pytest.mark.parametrize(
        "value, expected",
        [("false", False), ("FALSE", False), ("0", False), ("", False), ("true", True), ("yes", True), (1, True), (0, False)],
    )
    def test_boolean_strings(self, value, expected):
        assert PreviewOptions.from_mapping({"forceAspect": value}).force_aspect is expected

    @pytest.mark.parametrize(
        "values",
        [{"width": "wide"}, {"density": "1.5"}, {"quality": True}, {"autorotate": "sometimes"}, {"trim": 2}],
    )
    def test_bad_values_raise_preview_error(self, values):
        with pytest.raises(InvalidOptionError):
            PreviewOptions.from_mapping(values)
