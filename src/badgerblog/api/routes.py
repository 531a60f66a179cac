from __future__ import annotations

from typing import Any

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ValidationError

from ..core.forms import FORMS, get_form
from ..core.validation import ClientValidationRegistry, client_attributes
from ..errors import UnknownFormError


def get_registry(request: Request) -> ClientValidationRegistry:
    return request.app.state.validation_registry


def _form_or_404(name: str) -> type[BaseModel]:
    try:
        return get_form(name)
    except UnknownFormError as e:
        raise HTTPException(status_code=404, detail=str(e))


def _error_items(exc: ValidationError) -> list[dict[str, Any]]:
    # exc.errors() can carry exception objects in "ctx"; keep only JSON-safe keys.
    return [
        {"loc": [str(p) for p in err.get("loc", ())], "msg": str(err.get("msg", "")), "type": str(err.get("type", ""))}
        for err in exc.errors()
    ]


def mount_validation_api(app: FastAPI) -> None:
    @app.get("/api/validation/adapters")
    def list_adapters(registry: ClientValidationRegistry = Depends(get_registry)) -> dict:
        return {"adapters": registry.names()}

    @app.get("/api/forms")
    def list_forms() -> dict:
        return {"forms": sorted(FORMS)}

    @app.get("/api/forms/{name}/rules")
    def form_rules(name: str, registry: ClientValidationRegistry = Depends(get_registry)) -> dict:
        model = _form_or_404(name)
        fields: dict[str, dict] = {}
        for field_name, rules in registry.rules_for_model(model).items():
            fields[field_name] = {
                "rules": [r.to_dict() for r in rules],
                "attributes": client_attributes(rules),
            }
        return {"form": name.strip().lower(), "fields": fields}

    @app.post("/api/forms/{name}/validate")
    def validate_form(name: str, body: dict) -> Any:
        model = _form_or_404(name)
        try:
            obj = model.model_validate(body)
        except ValidationError as e:
            return JSONResponse(status_code=422, content={"ok": False, "errors": _error_items(e)})
        return {"ok": True, "data": obj.model_dump(mode="json")}
