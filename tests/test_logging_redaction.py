import logging

from fastapi.testclient import TestClient


class _StubLogger:
    def __init__(self) -> None:
        self.last_extra = None

    def info(self, msg, *args, extra=None):
        if msg == "request":
            self.last_extra = extra

    def exception(self, msg, *args, **kwargs):
        pass


def test_logging_redacts_secret_headers(monkeypatch):
    stub = _StubLogger()

    real_getlogger = logging.getLogger

    def fake_getlogger(name=None):
        if name == "feedbacker":
            return stub
        return real_getlogger(name)

    monkeypatch.setattr(logging, "getLogger", fake_getlogger)
    from feedbacker.main import create_app

    with TestClient(create_app()) as client:
        client.get(
            "/v1/healthz",
            headers={
                "Authorization": "Bearer secret",
                "X-API-Key": "super-secret",
                "X-Trace": "visible",
            },
        )

    hdrs = {k.lower(): v for k, v in stub.last_extra.get("headers", {}).items()}
    assert hdrs.get("authorization") == "REDACTED"
    assert hdrs.get("x-api-key") == "REDACTED"
    assert hdrs.get("x-trace") == "visible"
    assert stub.last_extra["path"] == "/v1/healthz"
    assert stub.last_extra["status"] == 200
