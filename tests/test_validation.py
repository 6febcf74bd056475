"""
Tests for input validation and script stripping.
"""
import pytest

from docsum.services.validation import (
    MAX_TEXT_LENGTH,
    MIN_TEXT_LENGTH,
    InputValidationError,
    ValidationKind,
    strip_scripts,
    validate_text,
)

PASSAGE = "Hello world, this is a long enough passage to pass length validation easily."


def _kind(value, **kwargs):
    with pytest.raises(InputValidationError) as exc_info:
        validate_text(value, **kwargs)
    return exc_info.value.kind


class TestTypeChecks:

    @pytest.mark.parametrize("value", [None, ""])
    def test_missing_text(self, value):
        assert _kind(value) is ValidationKind.MISSING_TEXT

    @pytest.mark.parametrize("value", [123, 4.5, ["text"], {"text": "x"}, True])
    def test_non_string_rejected(self, value):
        assert _kind(value) is ValidationKind.INVALID_TYPE

    def test_errors_are_400_with_caller_safe_message(self):
        with pytest.raises(InputValidationError) as exc_info:
            validate_text(42)
        assert exc_info.value.status_code == 400
        assert exc_info.value.message == "Text must be a string"


class TestLengthChecks:

    @pytest.mark.parametrize("length", [1, 10, MIN_TEXT_LENGTH - 1])
    def test_too_short(self, length):
        assert _kind("a" * length) is ValidationKind.TOO_SHORT

    def test_whitespace_does_not_count(self):
        assert _kind("   " + "a" * 49 + "\n\n\t") is ValidationKind.TOO_SHORT

    def test_minimum_accepted(self):
        assert validate_text("a" * MIN_TEXT_LENGTH) == "a" * MIN_TEXT_LENGTH

    def test_maximum_accepted(self):
        assert validate_text("a" * MAX_TEXT_LENGTH) == "a" * MAX_TEXT_LENGTH

    @pytest.mark.parametrize("length", [MAX_TEXT_LENGTH + 1, 20_000])
    def test_too_long(self, length):
        assert _kind("a" * length) is ValidationKind.TOO_LONG

    def test_too_long_message(self):
        with pytest.raises(InputValidationError) as exc_info:
            validate_text("a" * (MAX_TEXT_LENGTH + 1))
        assert exc_info.value.message == "Text is too long. Maximum length is 10,000 characters."

    def test_ceiling_counts_the_raw_text(self):
        text = "a" * (MAX_TEXT_LENGTH - 10) + "<script>x()</script>"
        assert _kind(text) is ValidationKind.TOO_LONG

    def test_ceiling_can_be_disabled(self):
        text = "a" * (MAX_TEXT_LENGTH * 3)
        assert validate_text(text, max_length=None) == text

    def test_custom_too_short_message(self):
        with pytest.raises(InputValidationError) as exc_info:
            validate_text("tiny", too_short_message="File too small")
        assert exc_info.value.message == "File too small"


class TestScriptStripping:

    def test_script_block_removed_and_remainder_passes(self):
        cleaned = validate_text("<script>alert(1)</script>" + PASSAGE)
        assert cleaned == PASSAGE

    def test_case_insensitive_and_multiline(self):
        text = "before <SCRIPT type='text/javascript'>\nsteal(\n document.cookie)\n</Script> after"
        assert strip_scripts(text) == "before  after"

    def test_non_greedy(self):
        text = "<script>a()</script>keep this<script>b()</script>"
        assert strip_scripts(text) == "keep this"

    def test_other_tags_untouched(self):
        text = "<b>bold</b> and <i>italic</i>"
        assert strip_scripts(text) == text

    def test_script_only_content_is_too_short(self):
        text = "<script>" + "x" * 200 + "</script>short"
        assert _kind(text) is ValidationKind.TOO_SHORT
