# path: src/secondhalf/api/main.py
"""
FastAPI app exposing the SecondHalf prediction endpoint.

Endpoints:
- GET  /health   -> simple health check
- POST /predict  -> second-half prediction text for a Match Record

This is the service the legacy ``get_prediction`` client talks to. It does
not keep any history; that stays on the user's device.
"""

from __future__ import annotations

from typing import Dict

from fastapi import FastAPI, HTTPException

from secondhalf.config import load_client_config
from secondhalf.data.schema import MatchRecord
from secondhalf.llm.client import PredictionClient
from secondhalf.llm.errors import (
    MalformedResponseError,
    PredictionError,
    ServerError,
    TimedOutError,
    UnreachableError,
)
from secondhalf.pipeline import run_submission
from secondhalf.utils.logging_utils import get_logger

logger = get_logger(__name__)

app = FastAPI(
    title="SecondHalf API",
    version="0.1.0",
    description="Second-half bet predictions from first-half statistics",
)

# Global state populated on first use
PREDICTION_CLIENT: PredictionClient | None = None


def _get_client() -> PredictionClient:
    """Create the prediction client from the environment once."""
    global PREDICTION_CLIENT
    if PREDICTION_CLIENT is None:
        config = load_client_config()
        PREDICTION_CLIENT = PredictionClient(config)
        logger.info("Prediction client configured: %r", config)
    return PREDICTION_CLIENT


def _status_for(error: PredictionError) -> int:
    if isinstance(error, TimedOutError):
        return 504
    if isinstance(error, UnreachableError):
        return 503
    if isinstance(error, (ServerError, MalformedResponseError)):
        return 502
    return 500


@app.get("/health")
def health() -> Dict[str, str]:
    """Health check endpoint."""
    return {"status": "ok"}


@app.post("/predict")
def predict(record: MatchRecord) -> Dict[str, str]:
    """
    Predict second-half bets for the posted first-half statistics.

    Request:
        Match Record with camelCase keys, e.g.
        { "league": "Süper Lig", "homeTeam": "A", "firstHalfScore": "1-0", ... }

    Response:
        { "prediction": "<markdown text>" }
    """
    result = run_submission(record, _get_client())
    if not result.ok:
        raise HTTPException(
            status_code=_status_for(result.error),
            detail=result.error_message,
        )
    return {"prediction": result.prediction}
