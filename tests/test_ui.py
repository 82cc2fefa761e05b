from pathlib import Path

import pytest
import requests
import streamlit as st
from streamlit.testing.v1 import AppTest

from conftest import FakeResponse, gemini_body
from secondhalf.history.recorder import HistoryRecorder
from secondhalf.history.storage import LocalStorage
from secondhalf.ui.app import AppState, queue_submission

APP_PATH = Path(__file__).resolve().parents[1] / "src" / "secondhalf" / "ui" / "app.py"


def test_queue_submission_ignores_second_click(tmp_path):
    state = AppState(recorder=HistoryRecorder(LocalStorage(tmp_path / "s.json")))

    assert queue_submission(state, {"home_team": "A", "away_team": "B"})
    first = state.pending
    assert state.running
    assert first.teams_label == "A vs B"

    assert not queue_submission(state, {"home_team": "C", "away_team": "D"})
    assert state.pending is first


@pytest.fixture
def app(monkeypatch, tmp_path):
    calls = []

    def fake_post(self, url, **kwargs):
        calls.append(url)
        return FakeResponse(200, gemini_body("İY 1-0 sonrası..."))

    monkeypatch.setenv("SECONDHALF_API_URL", "https://llm.example/v1:generateContent")
    monkeypatch.setenv("SECONDHALF_API_KEY", "k")
    monkeypatch.setenv("SECONDHALF_HISTORY_PATH", str(tmp_path / "storage.json"))
    monkeypatch.setattr(requests.Session, "post", fake_post)
    st.cache_resource.clear()

    at = AppTest.from_file(str(APP_PATH), default_timeout=30)
    at.run()
    assert not at.exception
    return at, calls


def test_submit_records_one_entry_and_shows_prediction(app):
    at, calls = app
    at.text_input(key="field_home_team").input("A")
    at.text_input(key="field_away_team").input("B")
    at.button[0].click().run()

    assert not at.exception
    assert len(calls) == 1
    state = at.session_state["app_state"]
    assert [e.teams for e in state.recorder.entries] == ["A vs B"]
    assert state.prediction == "İY 1-0 sonrası..."
    assert not state.running
    assert not at.button[0].disabled


def test_click_while_submission_in_flight_is_ignored(app):
    at, calls = app
    at.session_state["app_state"].running = True

    at.button[0].click().run()

    assert not at.exception
    assert calls == []
    assert at.session_state["app_state"].recorder.entries == ()
    assert at.button[0].disabled
