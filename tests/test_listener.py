import socket
import sys
from pathlib import Path

import pytest

from livesync.models import CreateOperation, DeleteOperation
from syncserver.client import push_bytes, push_operations
from syncserver.listener import endpoint_address
from syncserver.main import create_listener


@pytest.fixture
def running_listener(container, tmp_path: Path):
    container.settings.SOCKET_PATH = tmp_path / "livesync.sock"
    listener = create_listener(container)
    listener.start()
    assert listener.bound.wait(5)
    yield listener
    listener.stop(timeout=5)


def test_endpoint_address_abstract_and_path(tmp_path: Path):
    assert endpoint_address("org.test.app-livesync") == "\0org.test.app-livesync"
    assert endpoint_address("ignored", tmp_path / "s.sock") == str(tmp_path / "s.sock")


def test_endpoint_name_from_app_id(settings):
    assert settings.endpoint_name == "org.test.app-livesync"


def test_push_over_local_socket(running_listener, container, reload_trigger):
    push_operations(
        running_listener.address,
        [CreateOperation(file_name="www/index.js", content=b"console.log(1)")],
    )
    assert reload_trigger.fired.wait(5)
    root = container.context.sandbox_root
    assert (root / "www" / "index.js").read_bytes() == b"console.log(1)"
    assert reload_trigger.calls == [container.settings.reload_script_path]


def test_each_connection_gets_its_own_session(running_listener, container, reload_trigger):
    root = container.context.sandbox_root
    (root / "gone.txt").write_text("x")

    push_operations(running_listener.address, [DeleteOperation(file_name="gone.txt")])
    push_bytes(running_listener.address, b"800005b.txt0000000001b")

    assert not (root / "gone.txt").exists()
    assert (root / "b.txt").read_bytes() == b"b"


def test_bad_batch_skips_reload(running_listener, reload_trigger):
    push_bytes(running_listener.address, b"9")
    assert not reload_trigger.fired.wait(0.3)
    # listener keeps accepting after a failed session
    push_bytes(running_listener.address, b"")
    assert reload_trigger.fired.wait(5)


def test_stop_unblocks_accept_and_refuses_connections(container, tmp_path: Path):
    container.settings.SOCKET_PATH = tmp_path / "stop.sock"
    listener = create_listener(container)
    thread = listener.start()
    assert listener.bound.wait(5)
    listener.stop(timeout=5)
    assert not thread.is_alive()
    assert not listener.running
    with socket.socket(socket.AF_UNIX, socket.SOCK_STREAM) as sock:
        with pytest.raises(OSError):
            sock.connect(listener.address)


def test_bind_failure_is_logged_not_raised(container, tmp_path: Path, caplog):
    container.settings.SOCKET_PATH = tmp_path / "missing-dir" / "s.sock"
    listener = create_listener(container)
    listener.serve()
    assert not listener.running
    assert "could not bind" in caplog.text


@pytest.mark.skipif(not sys.platform.startswith("linux"), reason="abstract namespace is Linux only")
def test_abstract_namespace_endpoint(container, reload_trigger):
    listener = create_listener(container)
    listener.start()
    assert listener.bound.wait(5)
    try:
        push_bytes(listener.address, b"")
        assert reload_trigger.fired.wait(5)
    finally:
        listener.stop(timeout=5)
