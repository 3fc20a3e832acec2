"""Unit tests for the deterministic text pipeline."""
import pytest

from aipipe.pipeline import (
    PipelineResult,
    ValidationFailure,
    analyze_text,
    extract_input,
    parse_text,
    run_pipeline,
    summarize_text,
    validate_input,
)
from aipipe.pipeline.schemas import StepName, StepResult
from aipipe.pipeline.text_pipeline import MISSING_INPUT_MESSAGE, WHITESPACE_CHARS, sentence_case


class TestValidation:
    """Tests for extract_input / validate_input."""

    @pytest.mark.parametrize("text", [" ", "   ", "\t\n", " \r\n\t ", "\ufeff", " \ufeff\u00a0 "])
    def test_whitespace_only_fails(self, text):
        """Test that input made only of whitespace (BOM included) is rejected."""
        result = validate_input({"input": text})
        assert isinstance(result, ValidationFailure)
        assert result.message == "Missing 'input' (string) in JSON body"

    def test_missing_field_fails_with_same_message(self):
        """Test that a body without `input` fails with the same message as blank input."""
        result = validate_input({})
        assert isinstance(result, ValidationFailure)
        assert result.message == MISSING_INPUT_MESSAGE

    @pytest.mark.parametrize("value", [None, 42, 3.5, True, ["hello"], {"text": "hi"}])
    def test_non_string_input_treated_as_empty(self, value):
        """Test that non-string `input` values are treated as missing."""
        assert extract_input({"input": value}) == ""
        assert isinstance(validate_input({"input": value}), ValidationFailure)

    @pytest.mark.parametrize("body", [None, [], ["input"], "input", 7])
    def test_non_object_body_treated_as_empty(self, body):
        """Test that bodies which are not JSON objects fail validation."""
        assert isinstance(validate_input(body), ValidationFailure)

    def test_valid_input_is_trimmed_not_collapsed(self):
        """Test that validation trims the ends but keeps inner whitespace."""
        assert validate_input({"input": "  a   b \n"}) == "a   b"

    def test_bom_trimmed_from_ends(self):
        """Test that a leading BOM is trimmed like any other whitespace."""
        assert validate_input({"input": "\ufeffhello\ufeff"}) == "hello"

    def test_c0_separators_are_not_trimmed(self):
        """Test that U+001C-U+001F are kept as content, not trimmed."""
        assert validate_input({"input": "\x1f"}) == "\x1f"

    def test_extra_fields_ignored(self):
        """Test that unknown fields do not affect validation."""
        assert validate_input({"input": "hi", "mode": "fast"}) == "hi"


class TestParse:
    """Tests for the parse stage."""

    def test_collapses_mixed_whitespace(self):
        """Test that tabs, newlines and carriage returns collapse to one space."""
        assert parse_text("a \t\n b\r\n\nc") == "a b c"

    def test_trims_outer_whitespace(self):
        """Test that leading and trailing spaces are removed."""
        assert parse_text("  hello  ") == "hello"

    def test_unicode_whitespace_collapsed(self):
        """Test that no-break and em spaces count as whitespace."""
        assert parse_text("a\u00a0\u2003b") == "a b"

    def test_bom_collapsed(self):
        """Test that an inner BOM is treated as whitespace."""
        assert parse_text("a\ufeffb") == "a b"

    @pytest.mark.parametrize("sep", ["\x1c", "\x1d", "\x1e", "\x1f", "\x85"])
    def test_separators_outside_whitespace_kept(self, sep):
        """Test that C0 separators and NEL are left untouched."""
        assert parse_text(f"a{sep}b") == f"a{sep}b"

    def test_whitespace_set(self):
        """Test the whitespace set against the characters it must and must not contain."""
        assert "\ufeff" in WHITESPACE_CHARS
        assert "\u200a" in WHITESPACE_CHARS
        assert "\u200b" not in WHITESPACE_CHARS
        assert not any(c in WHITESPACE_CHARS for c in "\x1c\x1d\x1e\x1f\x85")

    @pytest.mark.parametrize("text", ["", "x", "  a  b  ", "one\n\ntwo\tthree", "Wow!!   Really?", "a\ufeff\x1fb"])
    def test_idempotent(self, text):
        """Test that parsing already-parsed text changes nothing."""
        once = parse_text(text)
        assert parse_text(once) == once


class TestAnalyze:
    """Tests for the analyze stage."""

    def test_hello_world(self):
        """Test metrics for the two-word example."""
        metrics = analyze_text("hello world")
        assert (metrics.words, metrics.chars, metrics.sentences) == (2, 11, 1)

    def test_terminator_runs_counted_once(self):
        """Test that each run of terminators is one sentence."""
        metrics = analyze_text("Wow!! Really? Yes.")
        assert metrics.sentences == 3
        assert metrics.words == 3

    def test_mixed_terminators_are_one_boundary(self):
        """Test that mixed runs like '?!' and '...' are single boundaries."""
        assert analyze_text("What?! No...").sentences == 2

    def test_no_terminator_counts_one_sentence(self):
        """Test that non-empty text without terminators is one sentence."""
        metrics = analyze_text("x")
        assert (metrics.words, metrics.chars, metrics.sentences) == (1, 1, 1)

    def test_empty_is_all_zero(self):
        """Test that empty text has zero words, chars and sentences."""
        metrics = analyze_text("")
        assert (metrics.words, metrics.chars, metrics.sentences) == (0, 0, 0)

    def test_terminator_only_text(self):
        """Test that a bare terminator run is one word and one sentence."""
        metrics = analyze_text("...")
        assert (metrics.words, metrics.chars, metrics.sentences) == (1, 3, 1)

    def test_unit_separator_does_not_split_words(self):
        """Test that U+001F joins two letters into one word."""
        result = run_pipeline({"input": "a\x1fb"})

        assert result.parsed == "a\x1fb"
        assert result.metrics.words == 1
        assert result.metrics.chars == 3

    def test_chars_matches_parsed_length(self):
        """Test that chars is the length of the parsed text."""
        parsed = parse_text("  The  quick brown\tfox. ")
        assert analyze_text(parsed).chars == len(parsed)

    def test_to_dict(self):
        """Test the details mapping reported by the analyze step."""
        assert analyze_text("a b.").to_dict() == {"words": 2, "chars": 4, "sentences": 1}


class TestSummarize:
    """Tests for the summarize stage."""

    def test_sentence_cases_first_letter(self):
        """Test that the first letter is uppercased."""
        assert summarize_text("hello world") == "Hello world"

    def test_single_char(self):
        """Test a one-character summary."""
        assert summarize_text("x") == "X"

    def test_non_letter_first_char_untouched(self):
        """Test that a leading digit is left as-is."""
        assert summarize_text("42 apples") == "42 apples"

    def test_only_first_char_changes(self):
        """Test that casing of the remaining characters is preserved."""
        assert sentence_case("hELLO") == "HELLO"
        assert sentence_case("") == ""

    def test_truncates_to_exactly_160(self):
        """Test that long text is cut to 157 characters plus an ellipsis."""
        summary = summarize_text("a" * 200)
        assert len(summary) == 160
        assert summary.endswith("...")
        assert summary[:157] == "A" + "a" * 156

    def test_exactly_160_is_not_truncated(self):
        """Test that text at the limit is kept whole."""
        text = "b" * 160
        assert summarize_text(text) == "B" + "b" * 159

    def test_161_is_truncated(self):
        """Test that one character over the limit triggers truncation."""
        summary = summarize_text("c" * 161)
        assert len(summary) == 160
        assert summary.endswith("...")


class TestRunPipeline:
    """End-to-end tests for run_pipeline."""

    def test_hello_world_scenario(self):
        """Test the full result for 'hello world'."""
        result = run_pipeline({"input": "hello world"})

        assert isinstance(result, PipelineResult)
        assert result.parsed == "hello world"
        assert result.metrics.words == 2
        assert result.metrics.chars == 11
        assert result.metrics.sentences == 1
        assert result.summary == "Hello world"

    def test_received_input_is_trimmed_raw(self):
        """Test that received_input keeps inner whitespace while parsed collapses it."""
        result = run_pipeline({"input": "  hello   \n world  "})

        assert result.received_input == "hello   \n world"
        assert result.parsed == "hello world"

    def test_steps_in_stage_order(self):
        """Test that steps are reported parse, analyze, summarize."""
        result = run_pipeline({"input": "Wow!! Really? Yes."})

        assert [s.name for s in result.steps] == [StepName.PARSE, StepName.ANALYZE, StepName.SUMMARIZE]
        assert result.steps[0].to_dict() == {"name": "parse", "status": "ok"}
        assert result.steps[1].to_dict() == {
            "name": "analyze",
            "status": "ok",
            "details": {"words": 3, "chars": 18, "sentences": 3},
        }
        assert result.steps[2].to_dict() == {"name": "summarize", "status": "ok"}

    def test_validation_failure_runs_no_stage(self):
        """Test that blank input returns only the failure."""
        result = run_pipeline({"input": "   "})
        assert result == ValidationFailure(message=MISSING_INPUT_MESSAGE)

    def test_deterministic(self):
        """Test that the same input gives the same result."""
        first = run_pipeline({"input": "same input, same output"})
        second = run_pipeline({"input": "same input, same output"})
        assert first == second

    def test_step_result_without_details_omits_key(self):
        """Test that steps without details serialize without the key."""
        assert "details" not in StepResult(name=StepName.SUMMARIZE).to_dict()
