from __future__ import annotations

from .runtime.app import create_app

# Convenience for uvicorn: `uvicorn badgerblog.server:app`
# Not imported by the package itself, so settings are only read when serving.
app = create_app()
