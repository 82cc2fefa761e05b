"""
One form submission: build the prompt, call the endpoint, extract the text,
record it in the history.

Each stage fails closed. A failure anywhere stops the submission and is
returned as a single display message; nothing is recorded or shown as a
success.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional

from secondhalf.data.schema import MatchRecord
from secondhalf.history.recorder import HistoryEntry, HistoryRecorder
from secondhalf.llm.client import PredictionClient, USE_CONFIG_TIMEOUT
from secondhalf.llm.errors import PredictionError
from secondhalf.llm.extractor import extract_finish_reason, extract_prediction_text
from secondhalf.prompts.prompt_builder import GenerationParams, build_request_body
from secondhalf.utils.logging_utils import get_logger

logger = get_logger(__name__)


class SubmissionState(str, Enum):
    IDLE = "idle"
    BUILDING = "building"
    SENDING = "sending"
    RECORDING = "recording"
    DONE = "done"
    FAILED = "failed"


@dataclass
class SubmissionResult:
    """Outcome of one submission."""

    state: SubmissionState
    prediction: Optional[str] = None
    entry: Optional[HistoryEntry] = None
    error: Optional[PredictionError] = None

    @property
    def ok(self) -> bool:
        return self.state is SubmissionState.DONE

    @property
    def error_message(self) -> Optional[str]:
        return self.error.user_message() if self.error is not None else None


def run_submission(
    record: MatchRecord,
    client: PredictionClient,
    recorder: HistoryRecorder | None = None,
    params: GenerationParams | None = None,
    timeout: Any = USE_CONFIG_TIMEOUT,
    on_state: Callable[[SubmissionState], None] | None = None,
) -> SubmissionResult:
    """
    Run one submission through every stage.

    Parameters
    ----------
    record : MatchRecord
        Statistics entered in the form.
    client : PredictionClient
        Configured endpoint client.
    recorder : HistoryRecorder | None
        Where to persist a successful prediction. None skips recording.
    params : GenerationParams | None
        Sampling parameters; defaults from config.
    timeout : float | None
        Deadline for the network call; defaults to the client's config.
    on_state : Callable[[SubmissionState], None] | None
        Called on every state transition.

    Returns
    -------
    SubmissionResult
        ``DONE`` with the prediction, or ``FAILED`` with the classified error.
    """
    state = SubmissionState.IDLE

    def advance(new_state: SubmissionState) -> None:
        nonlocal state
        state = new_state
        if on_state is not None:
            on_state(new_state)

    try:
        advance(SubmissionState.BUILDING)
        body = build_request_body(record, params)

        advance(SubmissionState.SENDING)
        response = client.generate(body, timeout=timeout)
        prediction = extract_prediction_text(response)

        finish_reason = extract_finish_reason(response)
        if finish_reason and finish_reason != "STOP":
            logger.warning("Prediction finished with reason %s", finish_reason)

        entry = None
        if recorder is not None:
            advance(SubmissionState.RECORDING)
            entry = recorder.record(
                prediction,
                match_date=str(record.date),
                home_team=str(record.home_team),
                away_team=str(record.away_team),
            )
    except PredictionError as exc:
        logger.error("Submission failed while %s: %s", state.value, exc)
        advance(SubmissionState.FAILED)
        return SubmissionResult(state=SubmissionState.FAILED, error=exc)

    advance(SubmissionState.DONE)
    logger.info("Submission complete for %s", record.teams_label)
    return SubmissionResult(
        state=SubmissionState.DONE, prediction=prediction, entry=entry
    )
