"""
Streamlit UI for SecondHalf – second-half bet predictions from first-half stats.

Run from project root:

    streamlit run src/secondhalf/ui/app.py
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional
import sys
from pathlib import Path

import streamlit as st

# ---------------------------------------------------------------------------
# Ensure the project src/ directory is on sys.path so that:
#   from secondhalf.pipeline import ...
# works when running via "streamlit run src/secondhalf/ui/app.py"
# from the project root.
# ---------------------------------------------------------------------------
SRC_ROOT = Path(__file__).resolve().parents[2]  # .../secondhalf/src
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

from secondhalf.config import load_client_config  # noqa: E402
from secondhalf.data.schema import (  # noqa: E402
    MATCH_RECORD_FIELDS,
    MatchRecord,
    get_match_record_labels,
)
from secondhalf.history.recorder import HistoryRecorder, history_to_frame  # noqa: E402
from secondhalf.history.storage import LocalStorage  # noqa: E402
from secondhalf.llm.client import PredictionClient  # noqa: E402
from secondhalf.llm.errors import PersistenceError  # noqa: E402
from secondhalf.pipeline import SubmissionState, run_submission  # noqa: E402
from secondhalf.prompts.prompt_builder import PROMPT_SECTIONS  # noqa: E402
from secondhalf.utils.paths import get_local_storage_path  # noqa: E402

STATE_KEY = "app_state"


@dataclass
class AppState:
    """Everything the page keeps between reruns."""

    recorder: HistoryRecorder
    prediction: str = ""
    error: str = ""
    running: bool = False
    pending: Optional[MatchRecord] = None
    last_state: SubmissionState = SubmissionState.IDLE


def field_key(name: str) -> str:
    return f"field_{name}"


def queue_submission(state: AppState, values: Mapping[str, str]) -> bool:
    """
    Accept a form submission unless one is already in flight.

    Returns True if the record was queued, False if it was ignored.
    """
    if state.running:
        return False
    state.pending = MatchRecord(**{name: values.get(name, "") for name in MATCH_RECORD_FIELDS})
    state.running = True
    return True


def _on_submit(state: AppState) -> None:
    values = {name: st.session_state.get(field_key(name), "") for name in MATCH_RECORD_FIELDS}
    queue_submission(state, values)


@st.cache_resource(show_spinner=False)
def load_prediction_client() -> PredictionClient:
    """Create the endpoint client once per server process."""
    return PredictionClient(load_client_config())


def get_app_state() -> AppState:
    """Return the session's AppState, creating and loading history on first use."""
    if STATE_KEY not in st.session_state:
        recorder = HistoryRecorder(LocalStorage(get_local_storage_path()))
        state = AppState(recorder=recorder)
        try:
            recorder.load()
        except PersistenceError as exc:
            state.error = exc.user_message()
        st.session_state[STATE_KEY] = state
    return st.session_state[STATE_KEY]


def render_form(state: AppState) -> None:
    """
    Render the statistics form.

    The submit button only queues the record (see ``queue_submission``) and
    stays disabled until that submission has finished.
    """
    labels = get_match_record_labels()

    with st.form("match_form"):
        for header, lines in PROMPT_SECTIONS:
            st.subheader(header)
            names = [name for _, fields in lines for name in fields]
            if names == ["live_commentary"]:
                st.text_area(
                    labels["live_commentary"],
                    key=field_key("live_commentary"),
                    height=150,
                )
                continue

            cols = st.columns(2)
            for i, name in enumerate(names):
                with cols[i % 2]:
                    st.text_input(labels[name], key=field_key(name))

        st.form_submit_button(
            "Tahmin Al",
            disabled=state.running,
            on_click=_on_submit,
            args=(state,),
            use_container_width=True,
        )


def submit(state: AppState) -> None:
    """Run the queued submission and store its outcome in the app state."""
    record, state.pending = state.pending, None
    state.error = ""
    state.prediction = ""
    try:
        with st.spinner("Tahmin hazırlanıyor..."):
            result = run_submission(
                record,
                load_prediction_client(),
                recorder=state.recorder,
            )
    finally:
        state.running = False

    state.last_state = result.state
    if result.ok:
        state.prediction = result.prediction or ""
    else:
        state.error = result.error_message or "Bilinmeyen hata"


def render_history(state: AppState) -> None:
    st.markdown("---")
    st.subheader("Tahmin Geçmişi")

    entries = state.recorder.entries
    if not entries:
        st.write("Henüz kayıtlı tahmin yok.")
        return

    st.dataframe(
        history_to_frame(entries)[["date", "teams", "timestamp"]],
        use_container_width=True,
        hide_index=True,
    )
    for entry in entries:
        with st.expander(f"{entry.date} – {entry.teams}"):
            st.caption(entry.timestamp)
            st.markdown(entry.prediction)


def main() -> None:
    st.set_page_config(
        page_title="SecondHalf – İkinci Yarı Tahmini",
        layout="wide",
    )

    st.title("⚽ SecondHalf – İkinci Yarı Bahis Tahmini")

    st.markdown(
        """
İlk yarı istatistiklerini girin, yapay zeka ikinci yarı ve maç sonu için
bahis tahminlerini hazırlasın. Tahminler yalnızca bu cihazda saklanır.
"""
    )

    state = get_app_state()
    render_form(state)

    if state.pending is not None:
        submit(state)
        # Rerender so the submit button is enabled again.
        st.rerun()

    if state.error:
        st.error(state.error)

    if state.prediction:
        st.subheader("Tahmin")
        st.markdown(state.prediction)

    render_history(state)


if __name__ == "__main__":
    main()
