from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Iterable

from fastapi import FastAPI

from ..api import create_api_app
from ..config import Settings
from ..core.extensions import ValidationExtensions
from ..core.validation import ClientValidationRegistry
from .startup import StartupHook, StartupSequence, SupportsValidationExtensions, client_validation_hook

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    *,
    registry: ClientValidationRegistry | None = None,
    extensions: SupportsValidationExtensions | None = None,
    hooks: Iterable[StartupHook] | None = None,
) -> FastAPI:
    """Build the application and its startup sequence.

    The validation registry is created here and handed to the routes through
    `app.state`; the extension hook populates it during the lifespan startup
    phase, before uvicorn accepts the first connection.

    `hooks` replaces the default hook list entirely. `extensions` swaps the
    collaborator behind the default client-validation hook.
    """

    settings = settings or Settings.from_env()
    registry = registry if registry is not None else ClientValidationRegistry()

    if hooks is None:
        hooks = []
        if settings.client_validation:
            hooks.append(client_validation_hook(extensions or ValidationExtensions(registry)))
    sequence = StartupSequence(hooks)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        # Failures propagate: uvicorn reports them and refuses to serve.
        app.state.startup.run()
        yield

    app = create_api_app(settings, lifespan=lifespan)
    app.state.settings = settings
    app.state.validation_registry = registry
    app.state.startup = sequence

    logger.debug("created app with startup hooks: %s", [h.name for h in sequence.hooks])
    return app
