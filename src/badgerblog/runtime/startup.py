from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Callable, Iterable, Protocol

logger = logging.getLogger(__name__)


class SupportsValidationExtensions(Protocol):
    def register_validation_extensions(self) -> None: ...


@dataclass(frozen=True)
class StartupHook:
    """One initialization step the host runs before serving requests.

    Calling the hook calls `target()` once and nothing else. Exceptions from
    `target` are not caught. Running the hook only once is the host's job
    (see `StartupSequence`), not the hook's.
    """

    name: str
    target: Callable[[], object]

    def __call__(self) -> None:
        logger.debug("startup hook %s: running", self.name)
        self.target()
        logger.debug("startup hook %s: done", self.name)


def client_validation_hook(extensions: SupportsValidationExtensions) -> StartupHook:
    """Hook that registers the client-side validation extensions."""
    return StartupHook("client-validation-extensions", extensions.register_validation_extensions)


class StartupSequence:
    """Runs startup hooks in order, at most once per sequence.

    A hook failure propagates to the caller and leaves the sequence unstarted,
    so the application never reports itself ready after a partial boot.
    """

    def __init__(self, hooks: Iterable[StartupHook] = ()) -> None:
        self._hooks: list[StartupHook] = list(hooks)
        # Re-entrant so a hook touching the sequence gets an error, not a deadlock.
        self._lock = threading.RLock()
        self._running = False
        self._started = False

    @property
    def hooks(self) -> list[StartupHook]:
        return list(self._hooks)

    @property
    def started(self) -> bool:
        return self._started

    def add(self, hook: StartupHook) -> None:
        with self._lock:
            if self._running:
                raise RuntimeError(f"Cannot add startup hook {hook.name!r}: startup is in progress")
            if self._started:
                raise RuntimeError(f"Cannot add startup hook {hook.name!r}: application already started")
            self._hooks.append(hook)

    def run(self) -> None:
        with self._lock:
            if self._running:
                raise RuntimeError("startup sequence is already running")
            if self._started:
                logger.debug("startup sequence already ran; skipping")
                return
            self._running = True
            try:
                for hook in self._hooks:
                    hook()
            finally:
                self._running = False
            self._started = True
        logger.info("startup complete (%d hooks)", len(self._hooks))
