from fastapi.testclient import TestClient

from voxfront.api import create_app


def _client(monkeypatch) -> TestClient:
    monkeypatch.delenv("VOXFRONT_ENV", raising=False)
    monkeypatch.delenv("VOXFRONT_RESOURCES_PATH", raising=False)
    return TestClient(create_app())


def test_health_endpoint(monkeypatch) -> None:
    client = _client(monkeypatch)

    response = client.get("/health")
    assert response.status_code == 200

    payload = response.json()
    assert payload["status"] == "ok"
    assert payload["version"] == "0.1.0"
    assert payload["env"] == "dev"


def test_frontend_endpoint(monkeypatch) -> None:
    client = _client(monkeypatch)
    response = client.post("/v1/frontend", json={"text": "I have 3 cats.", "language": "en"})

    assert response.status_code == 200
    payload = response.json()
    assert payload["metadata"]["vocabulary_size"] == 326
    assert payload["metadata"]["resources"] == "voxfront-default@1"
    assert payload["metadata"]["utterance_count"] == 1
    assert payload["errors"] == []

    utterance = payload["utterances"][0]
    assert utterance["language"] == "en"
    assert utterance["language_source"] == "override"
    assert utterance["normalized"] == "I have three cats."
    assert utterance["symbols"][0] == {"text": "AY1", "kind": "phone", "tone": None, "stress": 1}
    assert len(utterance["token_ids"]) == len(utterance["symbols"]) + 2


def test_frontend_endpoint_detects_chinese(monkeypatch) -> None:
    client = _client(monkeypatch)
    response = client.post("/v1/frontend", json={"text": "我喜欢学习"})

    assert response.status_code == 200
    utterance = response.json()["utterances"][0]
    assert utterance["language"] == "zh"
    assert utterance["language_source"] == "detected"
    assert {"text": "uan5", "kind": "phone", "tone": 5, "stress": None} in utterance["symbols"]


def test_frontend_endpoint_splits_long_text(monkeypatch) -> None:
    client = _client(monkeypatch)
    text = "This is the first sentence of a long paragraph. " * 2

    response = client.post("/v1/frontend", json={"text": text, "split": True})

    assert response.status_code == 200
    assert response.json()["metadata"]["utterance_count"] == 2


def test_frontend_endpoint_rejects_invalid_request(monkeypatch) -> None:
    client = _client(monkeypatch)

    response = client.post("/v1/frontend", json={"text": "hello", "language": "e"})

    assert response.status_code == 422
