from fastapi.testclient import TestClient

from livesync.services.encoder import encode_batch
from livesync.models import CreateOperation, DeleteOperation
from syncserver.http_app import create_app


def test_health(container):
    client = TestClient(create_app(container))
    body = client.get("/health").json()
    assert body["endpoint"] == "org.test.app-livesync"
    assert body["sandboxRoot"] == str(container.context.sandbox_root)


def test_push_batch_over_http(container, reload_trigger):
    client = TestClient(create_app(container))
    root = container.context.sandbox_root
    (root / "old.js").write_text("x")
    payload = encode_batch([
        CreateOperation(file_name="app.js", content=b"run()"),
        DeleteOperation(file_name="old.js"),
    ])
    resp = client.post("/livesync", content=payload)
    assert resp.status_code == 200
    assert resp.json() == {"ok": True, "operations": 2, "reloaded": True, "error": None}
    assert (root / "app.js").read_bytes() == b"run()"
    assert not (root / "old.js").exists()
    assert len(reload_trigger.calls) == 1


def test_protocol_error_is_400(container, reload_trigger):
    client = TestClient(create_app(container))
    resp = client.post("/livesync", content=b"3")
    assert resp.status_code == 400
    body = resp.json()
    assert body["ok"] is False
    assert body["error"]["kind"] == "malformed_operation"
    assert body["error"]["recoverable"] is True
    assert reload_trigger.calls == []


def test_write_failure_is_500(container):
    client = TestClient(create_app(container))
    blocker = container.context.sandbox_root / "dir"
    blocker.mkdir()
    (blocker / "child").write_text("x")
    resp = client.post("/livesync", content=b"800003dir0000000001x")
    assert resp.status_code == 500
    assert resp.json()["error"]["kind"] == "file_write_failed"
