"""
Extraction of the generated text from a ``generateContent`` response.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from secondhalf.llm.errors import MalformedResponseError


def _first(items: Any, what: str) -> Any:
    if not isinstance(items, list) or not items:
        raise MalformedResponseError(f"response has no {what}")
    return items[0]


def extract_prediction_text(body: Mapping[str, Any]) -> str:
    """
    Return ``candidates[0].content.parts[0].text`` unchanged.

    Raises
    ------
    MalformedResponseError
        If any step of the path is missing or the text is empty.
    """
    if not isinstance(body, Mapping):
        raise MalformedResponseError("response is not a JSON object")

    candidate = _first(body.get("candidates"), "candidates")
    content = candidate.get("content") if isinstance(candidate, Mapping) else None
    if not isinstance(content, Mapping):
        raise MalformedResponseError("first candidate has no content")

    part = _first(content.get("parts"), "content parts")
    text = part.get("text") if isinstance(part, Mapping) else None
    if not isinstance(text, str) or not text:
        raise MalformedResponseError("first content part has no text")
    return text


def extract_finish_reason(body: Mapping[str, Any]) -> Optional[str]:
    """Return the first candidate's ``finishReason`` if present."""
    candidates = body.get("candidates") if isinstance(body, Mapping) else None
    if not isinstance(candidates, list) or not candidates:
        return None
    candidate = candidates[0]
    if not isinstance(candidate, Mapping):
        return None
    return candidate.get("finishReason")
