import json

import pytest

from secondhalf.data.schema import MATCH_RECORD_FIELDS, MatchRecord


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text=None):
        self.status_code = status_code
        self._payload = payload
        self.text = text if text is not None else json.dumps(payload)

    def json(self):
        if self._payload is None:
            raise ValueError("Expecting value")
        return self._payload


class FakeSession:
    """Records every post() call and returns (or raises) queued results."""

    def __init__(self, *results):
        self._results = list(results)
        self.calls = []

    def post(self, url, **kwargs):
        self.calls.append((url, kwargs))
        result = self._results.pop(0)
        if isinstance(result, Exception):
            raise result
        return result


def gemini_body(text):
    return {
        "candidates": [
            {"content": {"parts": [{"text": text}]}, "finishReason": "STOP"}
        ],
        "usageMetadata": {"promptTokenCount": 10, "candidatesTokenCount": 5},
    }


@pytest.fixture
def sample_record():
    return MatchRecord(
        league="Süper Lig",
        date="2024-03-10",
        home_team="Galatasaray",
        away_team="Fenerbahçe",
        first_half_score="1-0",
        home_xg="1.2",
        away_xg="0.4",
        home_shots="7",
        away_shots="3",
        home_possession="58",
        away_possession="42",
        live_commentary="Ev sahibi baskılı oynuyor.",
    )


@pytest.fixture
def sentinel_record():
    """Every field holds a unique token that appears nowhere else."""
    return MatchRecord(
        **{name: f"val{i:02d}x" for i, name in enumerate(MATCH_RECORD_FIELDS)}
    )
