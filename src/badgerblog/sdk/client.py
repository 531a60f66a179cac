from __future__ import annotations

from typing import Any

import httpx

from ..errors import BadgerBlogError


class BadgerBlogClient:
    """HTTP client for a running badgerblog server."""

    def __init__(self, base_url: str = "http://127.0.0.1:8000") -> None:
        self.base_url = base_url.rstrip("/")

    def _get(self, path: str, *, timeout_s: float, what: str) -> Any:
        with httpx.Client(base_url=self.base_url, timeout=timeout_s) as client:
            res = client.get(path)
            if res.status_code >= 400:
                raise BadgerBlogError(
                    f"Failed to get {what}: {res.status_code} {res.text}",
                    status_code=res.status_code,
                    body=res.text,
                )
            return res.json()

    def health(self, *, timeout_s: float = 10.0) -> dict[str, Any]:
        return self._get("/healthz", timeout_s=timeout_s, what="health")

    def list_adapters(self, *, timeout_s: float = 10.0) -> list[str]:
        data = self._get("/api/validation/adapters", timeout_s=timeout_s, what="validation adapters")
        return [str(n) for n in data.get("adapters", [])]

    def list_forms(self, *, timeout_s: float = 10.0) -> list[str]:
        data = self._get("/api/forms", timeout_s=timeout_s, what="forms")
        return [str(n) for n in data.get("forms", [])]

    def form_rules(self, name: str, *, timeout_s: float = 10.0) -> dict[str, Any]:
        """Return `{field: {"rules": [...], "attributes": {...}}}` for a form."""
        data = self._get(f"/api/forms/{name}/rules", timeout_s=timeout_s, what=f"rules for form {name!r}")
        return dict(data.get("fields", {}))

    def validate(self, name: str, data: dict[str, Any], *, timeout_s: float = 10.0) -> dict[str, Any]:
        """Validate a submission server-side.

        Returns the response body for both outcomes: `{"ok": True, "data": ...}`
        or `{"ok": False, "errors": [...]}`.
        """

        with httpx.Client(base_url=self.base_url, timeout=timeout_s) as client:
            res = client.post(f"/api/forms/{name}/validate", json=data)
            if res.status_code == 422 and res.json().get("ok") is False:
                return res.json()
            if res.status_code >= 400:
                raise BadgerBlogError(
                    f"Failed to validate form {name!r}: {res.status_code} {res.text}",
                    status_code=res.status_code,
                    body=res.text,
                )
            return res.json()
