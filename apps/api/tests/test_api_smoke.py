from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from apps.api import main
from apps.api.main import app


@pytest.fixture
def client(monkeypatch, translator, inline) -> TestClient:
    monkeypatch.setattr(main.session_store, "translator", translator)
    monkeypatch.setattr(main.session_store, "dispatch", inline)
    return TestClient(app)


def _create(client: TestClient, **payload) -> dict:
    resp = client.post("/sessions", json=payload)
    assert resp.status_code == 200
    return resp.json()


def test_api_endpoints_exist() -> None:
    routes = {route.path for route in app.routes}
    for path in [
        "/health",
        "/locales",
        "/locales/{locale}",
        "/sessions",
        "/sessions/{session_id}",
        "/sessions/{session_id}/content",
        "/sessions/{session_id}/tasks/{index}",
        "/sessions/{session_id}/locale",
        "/sessions/{session_id}/view-mode",
        "/sessions/{session_id}/view",
        "/sessions/{session_id}/export",
        "/sessions/{session_id}/events",
    ]:
        assert path in routes, path


def test_health_and_locales(client: TestClient) -> None:
    assert client.get("/health").json() == {"status": "ok"}

    locales = client.get("/locales").json()
    assert {"code": "ja", "label": "日本語"} in locales

    detail = client.get("/locales/es").json()
    assert detail["label"] == "Español"
    assert detail["template"]["tasks"][0]["id"] == "paperwork"
    assert client.get("/locales/xx").status_code == 404


def test_session_preview_flow(client: TestClient, translator) -> None:
    session = _create(client, welcome_note="Welcome!")
    session_id = session["session_id"]
    assert session["selected_locale"] == "en"
    assert session["preview_welcome"] == "Welcome!"

    resp = client.put(f"/sessions/{session_id}/locale", json={"locale": "fr"}, params={"wait": "true"})
    assert resp.status_code == 200
    assert resp.json()["preview_welcome"] == "[fr] Welcome!"

    client.put(f"/sessions/{session_id}/locale", json={"locale": "de"})
    client.put(f"/sessions/{session_id}/locale", json={"locale": "fr"})
    assert translator.calls == [("Welcome!", "fr"), ("Welcome!", "de")]

    resp = client.patch(f"/sessions/{session_id}/content", json={"welcome_note": "Hi there"})
    assert resp.json()["preview_welcome"] == "[fr] Hi there"
    assert len(translator.calls) == 3


def test_failed_translation_shows_original(client: TestClient, translator) -> None:
    translator.fail_locales.add("ja")
    session = _create(client, welcome_note="Welcome!", locale="ja")

    assert session["translation_error"] is True
    assert session["preview_welcome"] == "Welcome!"

    view = client.get(f"/sessions/{session['session_id']}/view").json()
    assert view["mode"] == "single"
    assert view["welcome_text"] == "Welcome!"
    assert view["status"] == "翻訳を利用できません。元のメッセージを表示しています。"


def test_task_edits_and_qa_view(client: TestClient) -> None:
    session_id = _create(client)["session_id"]

    resp = client.patch(f"/sessions/{session_id}/tasks/0", json={"title": "HR"})
    assert resp.status_code == 200
    assert resp.json()["tasks"][0]["title"] == "HR"

    client.put(f"/sessions/{session_id}/locale", json={"locale": "fr"})
    resp = client.put(f"/sessions/{session_id}/view-mode", json={"view_mode": "qa"})
    assert resp.json()["view_mode"] == "qa"
    assert resp.json()["tasks"][0]["title"] == "HR"

    view = client.get(f"/sessions/{session_id}/view").json()
    assert view["mode"] == "qa"
    assert view["rows"][0]["needs_review"] is True
    assert view["issues"] >= 1


def test_export_download(client: TestClient) -> None:
    session_id = _create(client, welcome_note="Welcome!", locale="es")["session_id"]

    resp = client.get(f"/sessions/{session_id}/export")

    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("application/msword")
    assert "onboarding-pack-es.doc" in resp.headers["content-disposition"]
    assert "[es] Welcome!" in resp.text


def test_export_never_touches_the_filesystem(client: TestClient, monkeypatch) -> None:
    def refuse(*args, **kwargs):
        raise AssertionError("export must not write files")

    monkeypatch.setattr(Path, "write_text", refuse)
    monkeypatch.setattr(Path, "write_bytes", refuse)
    monkeypatch.setattr(Path, "replace", refuse)
    session_id = _create(client, locale="fr")["session_id"]

    first = client.get(f"/sessions/{session_id}/export")
    second = client.get(f"/sessions/{session_id}/export")

    assert first.status_code == second.status_code == 200
    assert first.text == second.text
    assert "onboarding-pack-fr.doc" in second.headers["content-disposition"]


def test_error_responses(client: TestClient) -> None:
    assert client.get("/sessions/ses_missing").status_code == 404
    assert client.post("/sessions", json={"locale": "xx"}).status_code == 400

    session_id = _create(client)["session_id"]
    assert client.put(f"/sessions/{session_id}/locale", json={"locale": "xx"}).status_code == 400
    assert client.patch(f"/sessions/{session_id}/tasks/42", json={"title": "x"}).status_code == 404
    assert client.patch(f"/sessions/{session_id}/tasks/0", json={}).status_code == 400
    assert client.put(f"/sessions/{session_id}/view-mode", json={"view_mode": "grid"}).status_code == 422

    assert client.delete(f"/sessions/{session_id}").json() == {"status": "deleted"}
    assert client.get(f"/sessions/{session_id}").status_code == 404
    assert client.delete(f"/sessions/{session_id}").status_code == 404
