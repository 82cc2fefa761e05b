"""
HTTP client for the generative-language endpoint.

One POST per call, no retries. Every failure is reported as one of the
classified errors in `secondhalf.llm.errors`.
"""

from __future__ import annotations

import json
from typing import Any, Dict, Mapping, Optional

import requests

from secondhalf.config import ClientConfig, DEFAULT_TIMEOUT_SECONDS
from secondhalf.data.schema import MatchRecord
from secondhalf.llm.errors import (
    MalformedResponseError,
    RequestConstructionError,
    ServerError,
    TimedOutError,
    UnreachableError,
)
from secondhalf.utils.logging_utils import get_logger

logger = get_logger(__name__)

JSON_HEADERS = {"Content-Type": "application/json"}

USE_CONFIG_TIMEOUT = object()


def _error_message(response: requests.Response) -> Optional[str]:
    """Pull a provider (``error.message``) or FastAPI (``detail``) message."""
    try:
        data = response.json()
    except ValueError:
        text = response.text.strip()
        return text[:500] or None

    if isinstance(data, dict):
        error = data.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
        if data.get("detail"):
            return str(data["detail"])
    return None


def post_json(
    session: Any,
    url: str,
    body: Mapping[str, Any],
    params: Optional[Dict[str, str]] = None,
    timeout: Optional[float] = DEFAULT_TIMEOUT_SECONDS,
) -> Any:
    """
    POST a JSON body and return the decoded JSON response.

    Parameters
    ----------
    session : requests.Session
        Session (or compatible object) used to send the request.
    url : str
        Target URL.
    body : Mapping[str, Any]
        JSON-serializable request body.
    params : Dict[str, str] | None
        Query parameters.
    timeout : float | None
        Deadline in seconds. None waits indefinitely.

    Returns
    -------
    Any
        Decoded response body.

    Raises
    ------
    RequestConstructionError, UnreachableError, TimedOutError, ServerError,
    MalformedResponseError
    """
    if not url:
        raise RequestConstructionError("endpoint URL is not configured")

    try:
        payload = json.dumps(body, ensure_ascii=False).encode("utf-8")
    except (TypeError, ValueError) as exc:
        raise RequestConstructionError(f"request body is not serializable: {exc}") from exc

    try:
        response = session.post(
            url,
            params=params,
            data=payload,
            headers=JSON_HEADERS,
            timeout=timeout,
        )
    except requests.Timeout as exc:
        logger.error("No response from %s within %s seconds", url, timeout)
        raise TimedOutError(timeout) from exc
    except (
        requests.exceptions.MissingSchema,
        requests.exceptions.InvalidSchema,
        requests.exceptions.InvalidURL,
        requests.exceptions.InvalidHeader,
    ) as exc:
        raise RequestConstructionError(str(exc)) from exc
    except requests.RequestException as exc:
        logger.error("Endpoint %s unreachable: %s", url, exc)
        raise UnreachableError(str(exc)) from exc

    if not 200 <= response.status_code < 300:
        message = _error_message(response)
        logger.error("Endpoint returned %d: %s", response.status_code, message)
        raise ServerError(response.status_code, message)

    try:
        return response.json()
    except ValueError as exc:
        raise MalformedResponseError(f"response body is not JSON: {exc}") from exc


class PredictionClient:
    """Client for the ``generateContent`` inference endpoint."""

    def __init__(self, config: ClientConfig, session: Any = None):
        self.config = config
        self.session = session if session is not None else requests.Session()

    def generate(self, body: Mapping[str, Any], timeout: Any = USE_CONFIG_TIMEOUT) -> Dict[str, Any]:
        """
        Send one request body and return the decoded response.

        Parameters
        ----------
        body : Mapping[str, Any]
            Request built by ``build_request_body``.
        timeout : float | None
            Deadline in seconds; defaults to ``config.timeout``. None waits
            until the endpoint answers or drops the connection.

        Returns
        -------
        Dict[str, Any]
            Decoded response envelope.
        """
        if not self.config.api_url:
            raise RequestConstructionError("endpoint URL is not configured")
        if not self.config.api_key:
            raise RequestConstructionError("API key is not configured")

        deadline = self.config.timeout if timeout is USE_CONFIG_TIMEOUT else timeout
        logger.info("Sending prediction request (timeout=%s)", deadline)

        data = post_json(
            self.session,
            self.config.api_url,
            body,
            params={"key": self.config.api_key},
            timeout=deadline,
        )
        if not isinstance(data, dict):
            raise MalformedResponseError("response body is not a JSON object")
        return data

    def close(self) -> None:
        close = getattr(self.session, "close", None)
        if close is not None:
            close()


def get_prediction(
    record: MatchRecord,
    base_url: str,
    session: Any = None,
    timeout: Optional[float] = DEFAULT_TIMEOUT_SECONDS,
) -> Any:
    """
    Legacy path: POST the raw match record to ``<base_url>/predict``.

    The form does not use this path; it talks to the inference endpoint
    through ``PredictionClient``. Kept for deployments that front the model
    with the ``secondhalf.api`` service.
    """
    if not base_url:
        raise RequestConstructionError("prediction service URL is not configured")

    url = base_url.rstrip("/") + "/predict"
    return post_json(
        session if session is not None else requests.Session(),
        url,
        record.model_dump(by_alias=True),
        timeout=timeout,
    )
