from fastapi.testclient import TestClient

from feedbacker.main import create_app


def test_metrics_text_endpoint() -> None:
    with TestClient(create_app()) as client:
        client.post("/v1/outline/parse", json={"outline": "Intro to pricing\n- tiers"})
        resp = client.get("/v1/metrics")
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/plain")
    body = resp.text
    assert "# TYPE http_requests_total counter" in body
    assert "outlines_parsed_total" in body
    assert 'path="/v1/outline/parse"' in body


def test_metricsz_counts_domain_work() -> None:
    with TestClient(create_app()) as client:
        before = client.get("/v1/metricsz").json()
        client.post("/v1/outline/parse", json={"outline": "One big topic\n\nAnother big topic"})
        client.post("/v1/suggestions/extract", json={"text": "- a\n- b"})
        after = client.get("/v1/metricsz").json()
    assert after["outlines_parsed"] == before["outlines_parsed"] + 1
    assert after["topics_emitted"] == before["topics_emitted"] + 2
    assert after["suggestions_extracted"] == before["suggestions_extracted"] + 2


def test_metrics_label_keeps_router_prefix() -> None:
    with TestClient(create_app()) as client:
        client.get("/healthz")
        client.get("/v1/healthz")
        client.get("/v1/no-such-route")
        body = client.get("/v1/metrics").text
    assert 'path="/healthz"' in body
    assert 'path="/v1/healthz"' in body
    assert 'path="unmatched"' in body
    assert 'path="/v1/no-such-route"' not in body
