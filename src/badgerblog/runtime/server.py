from __future__ import annotations

import contextlib
import logging
import os
import socket
import threading
import time
import webbrowser
from dataclasses import dataclass

import httpx
import uvicorn

from ..config import Settings
from ..sdk.client import BadgerBlogClient
from .app import create_app

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BadgerBlogServer:
    host: str
    port: int
    url: str
    server: uvicorn.Server | None = None
    thread: threading.Thread | None = None

    def as_client(self) -> BadgerBlogClient:
        return BadgerBlogClient(self.url.rstrip("/"))

    def stop(self, *, timeout_s: float = 5.0) -> None:
        """Ask uvicorn to exit and wait for the server thread."""
        if self.server is not None:
            self.server.should_exit = True
        if self.thread is not None:
            self.thread.join(timeout=timeout_s)


def _find_free_port(host: str) -> int:
    with contextlib.closing(socket.socket(socket.AF_INET, socket.SOCK_STREAM)) as s:
        s.bind((host, 0))
        return int(s.getsockname()[1])


def _normalize_base_url(url: str) -> str:
    url = url.strip()
    if not url:
        return ""
    # Allow passing just host:port.
    if "://" not in url:
        url = "http://" + url
    return url.rstrip("/")


def _is_server_alive(base_url: str, *, timeout_s: float = 0.2) -> bool:
    """Best-effort probe to determine if a badgerblog server is reachable."""

    try:
        with httpx.Client(base_url=base_url, timeout=timeout_s) as client:
            r = client.get("/healthz")
            if r.status_code != 200:
                return False
            data = r.json()
            return bool(data.get("ok"))
    except (httpx.HTTPError, ValueError):
        return False


def _serve(server: uvicorn.Server) -> None:
    try:
        server.run()
    except SystemExit as e:
        # uvicorn exits with STARTUP_FAILURE when the lifespan raises; the
        # thread waiting in _wait_until_started turns that into RuntimeError.
        logger.debug("uvicorn exited with code %s", e.code)


def _wait_until_started(server: uvicorn.Server, thread: threading.Thread, *, timeout_s: float) -> None:
    deadline = time.monotonic() + timeout_s
    while not server.started:
        if not thread.is_alive():
            # Lifespan startup failed; uvicorn already logged the original traceback.
            raise RuntimeError("badgerblog server failed to start; see the log for the startup error")
        if time.monotonic() > deadline:
            server.should_exit = True
            thread.join(timeout=5.0)
            raise TimeoutError(f"badgerblog server did not start within {timeout_s:.1f}s")
        time.sleep(0.01)


def run(
    *,
    host: str = "127.0.0.1",
    port: int = 0,
    open_browser: bool = False,
    log_level: str = "info",
    access_log: bool = False,
    new_server: bool = False,
    connect_timeout_s: float = 0.2,
    startup_timeout_s: float = 10.0,
    settings: Settings | None = None,
) -> BadgerBlogServer | BadgerBlogClient:
    """Start badgerblog with a single Python call.

    Behavior:
    - If BADGERBLOG_URL is set, we *attach* to that existing server (client mode)
      unless `new_server=True`.
    - Otherwise, if `port != 0` and a server is already reachable at
      http://{host}:{port}, we attach to it unless `new_server=True`.
    - Otherwise we start a new server in a daemon thread and return a
      `BadgerBlogServer` once startup hooks have completed.

    Notes:
    - `port=0` means "pick a free port", so there's nothing to attach to.
    - The per-request access log is off by default.
    """

    env_url = _normalize_base_url(os.getenv("BADGERBLOG_URL", ""))

    # 1) Try attaching to an explicitly provided server.
    if env_url and not new_server:
        if _is_server_alive(env_url, timeout_s=connect_timeout_s):
            logger.info("attaching to badgerblog at %s", env_url)
            if open_browser:
                webbrowser.open(env_url + "/")
            return BadgerBlogClient(env_url)

    # 2) Try attaching to host/port if they are explicitly chosen.
    if port != 0 and not new_server:
        default_url = _normalize_base_url(f"http://{host}:{port}")
        if _is_server_alive(default_url, timeout_s=connect_timeout_s):
            logger.info("attaching to badgerblog at %s", default_url)
            if open_browser:
                webbrowser.open(default_url + "/")
            return BadgerBlogClient(default_url)

    # 3) Start a fresh server.
    if port == 0:
        port = _find_free_port(host)

    settings = (settings or Settings.from_env()).with_overrides(host=host, port=port, log_level=log_level)
    app = create_app(settings)

    config = uvicorn.Config(app, host=host, port=port, log_level=log_level, access_log=access_log, lifespan="on")
    server = uvicorn.Server(config)

    thread = threading.Thread(target=_serve, args=(server,), name="badgerblog-uvicorn", daemon=True)
    thread.start()
    _wait_until_started(server, thread, timeout_s=startup_timeout_s)

    url = f"http://{host}:{port}/"
    logger.info("badgerblog listening on %s", url)
    if open_browser:
        webbrowser.open(url)

    return BadgerBlogServer(host=host, port=port, url=url, server=server, thread=thread)
