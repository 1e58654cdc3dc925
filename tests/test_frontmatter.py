"""Tests for front matter generation."""

from datetime import date

import pytest
from pagedistill.conversion import FrontMatter, FrontmatterBuilder, format_title


class TestFormatTitle:
    """Tests for format_title."""

    @pytest.mark.parametrize(
        "base_name, expected",
        [
            ("tokyo-city-guide", "Tokyo City Guide"),
            ("tokyo-ABC-guide", "Tokyo ABC Guide"),
            ("tokyo-cITY", "Tokyo CITY"),
            ("shinjuku", "Shinjuku"),
            ("already Spaced", "Already Spaced"),
            ("2024-cherry-blossoms", "2024 Cherry Blossoms"),
        ],
    )
    def test_upper_cases_first_letter_only(self, base_name, expected):
        """Test that only the first character of each segment changes."""
        assert format_title(base_name) == expected

    def test_rest_of_segment_not_lower_cased(self):
        """Test that no segment is fully re-cased."""
        assert format_title("iPHONE-tips") == "IPHONE Tips"

    @pytest.mark.parametrize(
        "base_name, expected",
        [
            ("-tokyo", " Tokyo"),
            ("tokyo-", "Tokyo "),
            ("tokyo--guide", "Tokyo  Guide"),
            ("", ""),
        ],
    )
    def test_empty_segments_preserved(self, base_name, expected):
        """Test that edge and doubled hyphens become spaces."""
        assert format_title(base_name) == expected


class TestFrontmatterBuilder:
    """Tests for FrontmatterBuilder."""

    def test_builds_fixed_schema(self):
        """Test the complete rendered block."""
        builder = FrontmatterBuilder(today=lambda: date(2024, 3, 7))

        result = builder.build("tokyo-city-guide", category="Travel", tag="Tokyo")

        assert result == (
            "---\n"
            'title: "Tokyo City Guide"\n'
            'description: "Tokyo City Guide"\n'
            'meta_title: "Tokyo City Guide"\n'
            'author: ""\n'
            "date: 2024-03-07\n"
            'categories: ["Travel"]\n'
            'image: ""\n'
            'tags: ["Tokyo"]\n'
            "draft: false\n"
            "---\n\n"
        )

    def test_uses_current_date_by_default(self):
        """Test that the processing date is today."""
        result = FrontmatterBuilder().build("page", "c", "t")

        assert f"date: {date.today().isoformat()}\n" in result

    def test_escapes_quotes(self):
        """Test that double quotes cannot break the block."""
        builder = FrontmatterBuilder(today=lambda: date(2024, 1, 1))

        result = builder.build('say-"hi"', category='A "B"', tag="t")

        assert 'title: "Say \\"hi\\""' in result
        assert 'categories: ["A \\"B\\""]' in result

    def test_empty_labels(self):
        """Test that empty category and tag still render."""
        result = FrontmatterBuilder(today=lambda: date(2024, 1, 1)).build("x", "", "")

        assert 'categories: [""]' in result
        assert 'tags: [""]' in result

    def test_create_returns_fields(self):
        """Test the structured form."""
        front = FrontmatterBuilder(today=lambda: date(2024, 1, 1)).create("a-b", "c", "t")

        assert front == FrontMatter(
            title="A B",
            description="A B",
            meta_title="A B",
            date=date(2024, 1, 1),
            category="c",
            tag="t",
        )
        assert front.author == ""
        assert front.image == ""
        assert front.draft is False
