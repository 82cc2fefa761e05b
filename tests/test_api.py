import pytest
import requests
from fastapi.testclient import TestClient

from conftest import FakeResponse, FakeSession, gemini_body
from secondhalf.api import main
from secondhalf.config import ClientConfig
from secondhalf.llm.client import PredictionClient

CONFIG = ClientConfig(api_url="https://llm.example/v1:generateContent", api_key="secret")


@pytest.fixture
def api_client(monkeypatch):
    def install(*results):
        session = FakeSession(*results)
        monkeypatch.setattr(main, "PREDICTION_CLIENT", PredictionClient(CONFIG, session=session))
        return session

    return TestClient(main.app), install


def test_health(api_client):
    client, _ = api_client
    assert client.get("/health").json() == {"status": "ok"}


def test_predict_returns_prediction_text(api_client):
    client, install = api_client
    session = install(FakeResponse(200, gemini_body("İY 1-0 sonrası...")))

    resp = client.post("/predict", json={"homeTeam": "A", "awayTeam": "B", "firstHalfScore": "1-0"})

    assert resp.status_code == 200
    assert resp.json() == {"prediction": "İY 1-0 sonrası..."}
    assert len(session.calls) == 1


@pytest.mark.parametrize(
    "result,status",
    [
        (FakeResponse(500, {"error": {"message": "boom"}}), 502),
        (FakeResponse(200, {"candidates": []}), 502),
    ],
)
def test_predict_maps_failures_to_status(api_client, result, status):
    client, install = api_client
    install(result)
    resp = client.post("/predict", json={})
    assert resp.status_code == status
    assert resp.json()["detail"]


def test_predict_without_configuration_is_500(monkeypatch):
    monkeypatch.setattr(main, "PREDICTION_CLIENT", PredictionClient(ClientConfig(), session=FakeSession()))
    resp = TestClient(main.app).post("/predict", json={})
    assert resp.status_code == 500
    assert "İstek oluşturulurken" in resp.json()["detail"]


def test_predict_accepts_null_fields(api_client):
    client, install = api_client
    install(FakeResponse(200, gemini_body("ok")))
    resp = client.post("/predict", json={"homeTeam": None, "awayXG": None})
    assert resp.status_code == 200


def test_predict_timeout_without_deadline_is_504(monkeypatch):
    config = ClientConfig(api_url="https://llm.example", api_key="k", timeout=None)
    session = FakeSession(requests.ConnectTimeout("connect timed out"))
    monkeypatch.setattr(main, "PREDICTION_CLIENT", PredictionClient(config, session=session))

    resp = TestClient(main.app).post("/predict", json={})

    assert resp.status_code == 504
    assert resp.json()["detail"] == "Sunucu yanıt vermedi."
