"""Tests for delivery/truncation.py module."""

import pytest

from docplane.config.constants import CHARACTER_LIMIT
from docplane.delivery.truncation import (
    DEFAULT_TRUNCATION_HINT,
    TRUNCATION_MARKER,
    TruncationResult,
    format_footer,
    truncate,
)


class TestUnderLimit:
    """Text within the limit is returned unchanged."""

    @pytest.mark.parametrize("text", ["", "short", "x" * CHARACTER_LIMIT])
    def test_unchanged(self, text: str) -> None:
        result = truncate(text)

        assert result.text == text
        assert result.truncated is False
        assert result.original_length is None

    def test_custom_limit_exact(self) -> None:
        assert truncate("abcde", limit=5).truncated is False


class TestOverLimit:
    def test_default_limit(self) -> None:
        text = "y" * (CHARACTER_LIMIT + 1)

        result = truncate(text)

        assert result.truncated is True
        assert result.original_length == CHARACTER_LIMIT + 1
        assert result.text.startswith("y" * CHARACTER_LIMIT + TRUNCATION_MARKER)
        assert result.text.endswith(DEFAULT_TRUNCATION_HINT)

    def test_footer_states_both_lengths(self) -> None:
        result = truncate("a" * 30_000)

        assert "Response truncated from 30,000 to 25,000 characters." in result.text

    def test_custom_limit_and_hint(self) -> None:
        result = truncate("0123456789", limit=4, hint="Ask for fewer rows.")

        assert result.text == "0123" + format_footer(10, 4, "Ask for fewer rows.")
        assert result.text.endswith("Ask for fewer rows.")

    def test_exact_footer(self) -> None:
        assert format_footer(30_000, 25_000, "Narrow it.") == (
            "\n\n--- TRUNCATED ---\n"
            "Response truncated from 30,000 to 25,000 characters.\n"
            "Narrow it."
        )

    def test_zero_limit(self) -> None:
        result = truncate("abc", limit=0)
        assert result.text.startswith(TRUNCATION_MARKER)
        assert result.original_length == 3

    def test_negative_limit_treated_as_zero(self) -> None:
        assert truncate("abc", limit=-5).text == truncate("abc", limit=0).text

    def test_to_dict(self) -> None:
        assert truncate("abcdef", limit=3).to_dict()["original_length"] == 6
        assert truncate("ab", limit=3).to_dict() == {"text": "ab", "truncated": False}


class TestIdempotence:
    def test_truncating_twice_is_a_noop(self) -> None:
        first = truncate("z" * 40_000)

        second = truncate(first.text)

        assert second.text == first.text
        assert second.truncated is False

    def test_custom_hint_survives_second_pass(self) -> None:
        first = truncate("z" * 100, limit=10, hint="Use chunks.")
        assert truncate(first.text, limit=10, hint="Use chunks.").text == first.text

    def test_different_hint_cuts_again(self) -> None:
        first = truncate("z" * 100, limit=10, hint="Use chunks.")

        second = truncate(first.text, limit=10)

        assert second.truncated is True
        expected_footer = format_footer(len(first.text), 10, DEFAULT_TRUNCATION_HINT)
        assert second.text == first.text[:10] + expected_footer

    def test_smaller_limit_cuts_again(self) -> None:
        """A guarded payload whose body exceeds the new limit is cut again."""
        first = truncate("z" * 100, limit=50)

        second = truncate(first.text, limit=20)

        assert second.truncated is True
        assert second.text.startswith("z" * 20 + TRUNCATION_MARKER)

    def test_marker_inside_content_is_not_a_footer(self) -> None:
        text = "head" + TRUNCATION_MARKER + "not a footer" + "x" * 100
        result = truncate(text, limit=50)
        assert result.truncated is True


class TestResultType:
    def test_frozen(self) -> None:
        result = TruncationResult(text="a", truncated=False)
        with pytest.raises(AttributeError):
            result.text = "b"  # type: ignore[misc]


class TestFooterLookalikes:
    """Footer-shaped text does not get past the guard."""

    def test_footer_in_document_text_then_more_content(self) -> None:
        # Given third-party text quoting a footer near its start
        quoted = format_footer(90_000, 10, DEFAULT_TRUNCATION_HINT)
        text = "0123456789" + quoted + "x" * 100_000

        # When
        result = truncate(text)

        # Then
        assert result.truncated is True
        assert result.original_length == len(text)
        assert len(result.text) <= CHARACTER_LIMIT + len(
            format_footer(len(text), CHARACTER_LIMIT, DEFAULT_TRUNCATION_HINT)
        )

    def test_leading_footer_then_content(self) -> None:
        text = format_footer(1, 0, "") + "x" * 100_000

        result = truncate(text)

        assert result.truncated is True
        assert len(result.text) < CHARACTER_LIMIT + 500

    def test_guarded_payload_with_appended_text(self) -> None:
        # Given a guarded payload that something appended to
        guarded = truncate("a" * 30_000).text
        text = guarded + "y" * 200_000

        # When
        result = truncate(text)

        # Then
        assert result.truncated is True
        assert result.original_length == len(text)
        assert result.text.startswith("a" * CHARACTER_LIMIT + TRUNCATION_MARKER)
        assert len(result.text) < CHARACTER_LIMIT + 500

    def test_footer_at_wrong_offset(self) -> None:
        """A footer whose stated kept length does not match its position is cut."""
        text = "a" * 20 + format_footer(100, 10, DEFAULT_TRUNCATION_HINT)

        result = truncate(text, limit=30)

        assert result.truncated is True

    def test_footer_reporting_no_cut(self) -> None:
        text = "a" * 10 + format_footer(10, 10, DEFAULT_TRUNCATION_HINT)

        assert truncate(text, limit=10).truncated is True

    def test_marker_in_body_before_real_footer(self) -> None:
        first = truncate("b" * 5 + TRUNCATION_MARKER + "b" * 100, limit=40)

        second = truncate(first.text, limit=40)

        assert second.text == first.text
        assert second.truncated is False
