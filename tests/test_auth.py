from fastapi.testclient import TestClient

from feedbacker.main import create_app


def _mkapp(monkeypatch, require_auth: bool):
    monkeypatch.setenv("API_BEARER_TOKENS", '["token"]')
    monkeypatch.setenv("REQUIRE_AUTH", "true" if require_auth else "false")
    return create_app()


def test_requires_bearer_in_prod_mode(monkeypatch) -> None:
    app = _mkapp(monkeypatch, require_auth=True)
    with TestClient(app) as client:
        missing = client.post("/v1/suggestions/extract", json={"text": "x"})
        wrong = client.post(
            "/v1/suggestions/extract",
            json={"text": "x"},
            headers={"Authorization": "Bearer nope"},
        )
        ok = client.post(
            "/v1/suggestions/extract",
            json={"text": "x"},
            headers={"Authorization": "Bearer token"},
        )
    assert missing.status_code == 401
    assert missing.json()["error"]["code"] == "unauthorized"
    assert wrong.status_code == 401
    assert ok.status_code == 200


def test_ops_routes_are_public(monkeypatch) -> None:
    app = _mkapp(monkeypatch, require_auth=True)
    with TestClient(app) as client:
        assert client.get("/v1/healthz").status_code == 200
        assert client.get("/metrics").status_code == 200


def test_dev_mode_allows_anonymous(monkeypatch) -> None:
    app = _mkapp(monkeypatch, require_auth=False)
    with TestClient(app) as client:
        r = client.post("/v1/suggestions/extract", json={"text": "x"})
    assert r.status_code == 200
