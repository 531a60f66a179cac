from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from ..config import Settings
from .routes import get_registry, mount_validation_api


def create_api_app(settings: Settings, **kwargs) -> FastAPI:
    app = FastAPI(title="badgerblog", version="0.1.0", **kwargs)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    mount_validation_api(app)

    @app.get("/healthz")
    def healthz(request: Request) -> dict[str, bool]:
        startup = getattr(request.app.state, "startup", None)
        return {"ok": True, "started": bool(startup is not None and startup.started)}

    return app


__all__ = ["create_api_app", "get_registry", "mount_validation_api"]
