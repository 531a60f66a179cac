from __future__ import annotations


def test_run_auto_attaches_to_existing_server() -> None:
    """If a server is reachable at host/port, badgerblog.run() should attach by default."""

    import badgerblog

    server = badgerblog.run(host="127.0.0.1", port=0, open_browser=False, new_server=True)
    try:
        attached = badgerblog.run(host=server.host, port=server.port, open_browser=False)

        from badgerblog.sdk.client import BadgerBlogClient

        assert isinstance(attached, BadgerBlogClient)
        assert attached.base_url.rstrip("/") == f"http://{server.host}:{server.port}"
        assert attached.health() == {"ok": True, "started": True}
    finally:
        server.stop()


def test_run_new_server_forces_start_even_if_env_url_is_set() -> None:
    import os

    import badgerblog

    s1 = badgerblog.run(host="127.0.0.1", port=0, open_browser=False, new_server=True)

    os.environ["BADGERBLOG_URL"] = f"http://{s1.host}:{s1.port}"
    try:
        s2 = badgerblog.run(host="127.0.0.1", port=0, open_browser=False, new_server=True)
    finally:
        os.environ.pop("BADGERBLOG_URL", None)

    from badgerblog.runtime.server import BadgerBlogServer

    try:
        assert isinstance(s2, BadgerBlogServer)
        assert (s2.host, s2.port) != (s1.host, s1.port)
    finally:
        s2.stop()
        s1.stop()


def test_client_reads_rules_and_validates_over_http() -> None:
    import badgerblog
    from badgerblog.errors import BadgerBlogError

    server = badgerblog.run(host="127.0.0.1", port=0, open_browser=False, new_server=True)
    try:
        client = server.as_client()

        assert "equalto" in client.list_adapters()
        assert client.list_forms() == ["comment", "post"]

        fields = client.form_rules("comment")
        assert fields["confirm_email"]["attributes"]["data-val-equalto-other"] == "*.email"

        bad = client.validate("comment", {"author": "Reader", "email": "a@b.co", "confirm_email": "c@d.co", "body": "hi"})
        assert bad["ok"] is False

        good = client.validate("comment", {"author": "Reader", "email": "a@b.co", "confirm_email": "a@b.co", "body": "hi"})
        assert good["ok"] is True

        try:
            client.form_rules("guestbook")
        except BadgerBlogError as e:
            assert e.status_code == 404
        else:  # pragma: no cover
            raise AssertionError("expected BadgerBlogError for unknown form")
    finally:
        server.stop()


def _with_hooks(monkeypatch, *hooks) -> None:
    import badgerblog.runtime.server as server_mod
    from badgerblog.runtime.app import create_app

    def create_app_with_hooks(settings):
        return create_app(settings, hooks=list(hooks))

    monkeypatch.setattr(server_mod, "create_app", create_app_with_hooks)


def _live_server_threads() -> set:
    import threading

    return {t for t in threading.enumerate() if t.name == "badgerblog-uvicorn" and t.is_alive()}


def test_run_raises_when_a_startup_hook_fails(monkeypatch) -> None:
    import pytest

    import badgerblog
    from badgerblog.runtime.startup import StartupHook

    def boom() -> None:
        raise LookupError("extension library missing")

    _with_hooks(monkeypatch, StartupHook("boom", boom))
    before = _live_server_threads()

    with pytest.raises(RuntimeError, match="failed to start"):
        badgerblog.run(host="127.0.0.1", port=0, open_browser=False, new_server=True)

    assert _live_server_threads() <= before


def test_run_timeout_stops_the_server_thread(monkeypatch) -> None:
    import time

    import pytest

    import badgerblog
    from badgerblog.runtime.startup import StartupHook

    _with_hooks(monkeypatch, StartupHook("slow", lambda: time.sleep(1.0)))
    before = _live_server_threads()

    with pytest.raises(TimeoutError):
        badgerblog.run(host="127.0.0.1", port=0, open_browser=False, new_server=True, startup_timeout_s=0.1)

    assert _live_server_threads() <= before
