"""Tests for answer extraction."""

from __future__ import annotations

from types import SimpleNamespace

from google.genai import types

from advisor_gateway.extraction import (
    NO_REMEDY_EN,
    NO_REMEDY_ML,
    candidate_text,
    completion_text,
    extract_answer,
    flat_text,
    remedy_fallback,
)


class TestStrategies:
    """Each strategy reads one response shape."""

    def test_completion_message_content(self):
        assert completion_text({"choices": [{"message": {"content": "Bonjour"}}]}) == "Bonjour"

    def test_completion_legacy_text(self):
        assert completion_text({"choices": [{"text": "Hallo"}]}) == "Hallo"

    def test_completion_prefers_message_content(self):
        raw = {"choices": [{"message": {"content": "first"}, "text": "second"}]}

        assert completion_text(raw) == "first"

    def test_completion_empty_choices(self):
        assert completion_text({"choices": []}) is None

    def test_candidate_nested(self):
        raw = {"candidates": [{"content": {"parts": [{"text": "x"}]}}]}

        assert candidate_text(raw) == "x"

    def test_candidate_under_response_wrapper(self):
        raw = {"response": {"candidates": [{"content": {"parts": [{"text": "wrapped"}]}}]}}

        assert candidate_text(raw) == "wrapped"

    def test_candidate_from_sdk_object(self):
        raw = types.GenerateContentResponse(
            candidates=[types.Candidate(content=types.Content(role="model", parts=[types.Part(text="from sdk")]))]
        )

        assert candidate_text(raw) == "from sdk"

    def test_flat_text_attribute(self):
        assert flat_text(SimpleNamespace(text="y")) == "y"

    def test_non_string_values_are_ignored(self):
        assert completion_text({"choices": [{"message": {"content": ["a", "b"]}}]}) is None
        assert flat_text({"text": 42}) is None


class TestExtractAnswer:
    """Tests for the ordered fallback chain."""

    def test_text_provider_shape(self):
        assert extract_answer({"choices": [{"message": {"content": "Bonjour"}}]}) == "Bonjour"

    def test_candidate_shape(self):
        assert extract_answer({"candidates": [{"content": {"parts": [{"text": "x"}]}}]}) == "x"

    def test_flat_shape(self):
        assert extract_answer({"text": "y"}) == "y"

    def test_candidate_wins_over_flat_text(self):
        raw = {"candidates": [{"content": {"parts": [{"text": "nested"}]}}], "text": "flat"}

        assert extract_answer(raw) == "nested"

    def test_empty_strings_fall_through(self):
        raw = {"choices": [{"message": {"content": ""}}], "text": "later"}

        assert extract_answer(raw) == "later"

    def test_empty_response_returns_fallback(self):
        assert extract_answer({}, fallback=NO_REMEDY_EN) == "No remedy found."
        assert extract_answer({}, fallback=remedy_fallback("ml")) == "പരിഹാരം കണ്ടെത്താനായില്ല."

    def test_default_fallback_is_none(self):
        assert extract_answer({}) is None
        assert extract_answer(None) is None

    def test_raising_strategy_is_skipped(self):
        def broken(raw):
            raise RuntimeError("boom")

        assert extract_answer({"text": "ok"}, strategies=(broken, flat_text)) == "ok"

    def test_property_that_raises_does_not_escape(self):
        class Exploding:
            @property
            def text(self):
                raise ValueError("no text parts")

        assert extract_answer(Exploding(), fallback="fallback") == "fallback"


class TestRemedyFallback:
    def test_localized(self):
        assert remedy_fallback("ml") == NO_REMEDY_ML
        assert remedy_fallback("en") == NO_REMEDY_EN
        assert remedy_fallback(None) == NO_REMEDY_EN
