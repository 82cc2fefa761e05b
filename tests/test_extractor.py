import pytest

from conftest import gemini_body
from secondhalf.llm.errors import MalformedResponseError
from secondhalf.llm.extractor import extract_finish_reason, extract_prediction_text


def test_extracts_first_candidate_text_unchanged():
    text = "## Tahmin\n\n**Maç Sonucu:** 1 (orta güven)"
    assert extract_prediction_text(gemini_body(text)) == text


def test_ignores_later_candidates_and_parts():
    body = {
        "candidates": [
            {"content": {"parts": [{"text": "first"}, {"text": "second"}]}},
            {"content": {"parts": [{"text": "other"}]}},
        ]
    }
    assert extract_prediction_text(body) == "first"


@pytest.mark.parametrize(
    "body",
    [
        {},
        {"candidates": []},
        {"candidates": None},
        {"candidates": [{}]},
        {"candidates": [{"content": {}}]},
        {"candidates": [{"content": {"parts": []}}]},
        {"candidates": [{"content": {"parts": [{}]}}]},
        {"candidates": [{"content": {"parts": [{"text": ""}]}}]},
        {"candidates": [{"content": {"parts": [{"text": 42}]}}]},
        ["not", "a", "mapping"],
    ],
)
def test_missing_path_or_empty_text_is_malformed(body):
    with pytest.raises(MalformedResponseError):
        extract_prediction_text(body)


def test_finish_reason():
    assert extract_finish_reason(gemini_body("x")) == "STOP"
    assert extract_finish_reason({"candidates": []}) is None


def test_whitespace_text_is_returned_unchanged():
    assert extract_prediction_text(gemini_body("  \n")) == "  \n"
