from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping

from pydantic import BaseModel
from pydantic.fields import FieldInfo

from ..errors import DuplicateAdapterError, UnknownAdapterError

logger = logging.getLogger(__name__)

CLIENT_RULES_KEY = "client_rules"


@dataclass(frozen=True)
class ClientRule:
    """A single browser-enforceable rule for one form field.

    Rendered in the unobtrusive-validation attribute form:
    `data-val-<name>` holds the message, `data-val-<name>-<param>` each param.
    """

    name: str
    message: str
    params: Mapping[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "message": self.message, "params": dict(self.params)}

    def attributes(self) -> dict[str, str]:
        out = {f"data-val-{self.name}": self.message}
        for key, value in self.params.items():
            out[f"data-val-{self.name}-{key}"] = str(value)
        return out


# (field_name, field_info, options) -> ClientRule
Adapter = Callable[[str, FieldInfo, Mapping[str, Any]], ClientRule]


def display_name(field_name: str, info: FieldInfo) -> str:
    return info.title or field_name


def _length_bounds(info: FieldInfo) -> tuple[int | None, int | None]:
    lo: int | None = None
    hi: int | None = None
    for m in info.metadata:
        v = getattr(m, "min_length", None)
        if v is not None:
            lo = int(v)
        v = getattr(m, "max_length", None)
        if v is not None:
            hi = int(v)
    return lo, hi


def _required_adapter(field_name: str, info: FieldInfo, options: Mapping[str, Any]) -> ClientRule:
    msg = options.get("message") or f"The {display_name(field_name, info)} field is required."
    return ClientRule("required", str(msg))


def _length_adapter(field_name: str, info: FieldInfo, options: Mapping[str, Any]) -> ClientRule:
    lo, hi = _length_bounds(info)
    name = display_name(field_name, info)
    params: dict[str, str] = {}
    if lo is not None:
        params["min"] = str(lo)
    if hi is not None:
        params["max"] = str(hi)

    if lo is not None and hi is not None:
        default = f"The field {name} must be a string with a minimum length of {lo} and a maximum length of {hi}."
    elif hi is not None:
        default = f"The field {name} must be a string with a maximum length of {hi}."
    else:
        default = f"The field {name} must be a string with a minimum length of {lo}."
    return ClientRule("length", str(options.get("message") or default), params)


def _requested_rules(info: FieldInfo) -> dict[str, dict[str, Any]]:
    extra = info.json_schema_extra
    if not isinstance(extra, dict):
        return {}
    requested = extra.get(CLIENT_RULES_KEY) or {}
    if not isinstance(requested, dict):
        raise TypeError(f"{CLIENT_RULES_KEY} must be a dict of rule name -> options, got {type(requested).__name__}")
    return {str(k): dict(v or {}) for k, v in requested.items()}


def client_attributes(rules: list[ClientRule]) -> dict[str, str]:
    """Flatten rules into the `data-val-*` attributes for one input element."""
    if not rules:
        return {}
    out = {"data-val": "true"}
    for rule in rules:
        out.update(rule.attributes())
    return out


class ClientValidationRegistry:
    """Table of client-rule adapters consulted when rendering forms.

    A registry starts with the framework's own `required` and `length` rules.
    Everything else is installed by a validation extension during startup.
    The registry is an ordinary object: build one per application and pass it
    to whatever needs it.
    """

    BUILTIN: tuple[str, ...] = ("required", "length")

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._adapters: dict[str, Adapter] = {
            "required": _required_adapter,
            "length": _length_adapter,
        }

    def register(self, name: str, adapter: Adapter, *, replace: bool = False) -> None:
        key = str(name).strip().lower()
        if not key:
            raise ValueError("adapter name cannot be empty")
        with self._lock:
            if key in self._adapters and not replace:
                raise DuplicateAdapterError(f"Adapter already registered: {key}")
            self._adapters[key] = adapter
        logger.debug("registered client validation adapter %r", key)

    def unregister(self, name: str) -> None:
        key = str(name).strip().lower()
        with self._lock:
            if key not in self._adapters:
                raise UnknownAdapterError(f"Unknown adapter: {key}")
            del self._adapters[key]

    def get(self, name: str) -> Adapter:
        key = str(name).strip().lower()
        with self._lock:
            try:
                return self._adapters[key]
            except KeyError:
                raise UnknownAdapterError(f"Unknown adapter: {key}") from None

    def names(self) -> list[str]:
        with self._lock:
            return sorted(self._adapters)

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return str(name).strip().lower() in self._adapters

    def __len__(self) -> int:
        with self._lock:
            return len(self._adapters)

    def rules_for_field(self, field_name: str, info: FieldInfo) -> list[ClientRule]:
        rules: list[ClientRule] = []
        requested = _requested_rules(info)

        with self._lock:
            adapters = dict(self._adapters)

        if info.is_required() and "required" in adapters:
            rules.append(adapters["required"](field_name, info, requested.pop("required", {})))

        lo, hi = _length_bounds(info)
        length_asked = "length" in requested
        length_options = requested.pop("length", {})
        if lo is None and hi is None:
            if length_asked:
                logger.debug("length rule on field %r has no min_length/max_length; skipped", field_name)
        elif "length" in adapters:
            rules.append(adapters["length"](field_name, info, length_options))

        for name, options in requested.items():
            adapter = adapters.get(name.lower())
            if adapter is None:
                # Server-side validation still applies; the browser just won't check it.
                logger.debug("no client adapter for rule %r on field %r", name, field_name)
                continue
            rules.append(adapter(field_name, info, options))
        return rules

    def rules_for_model(self, model: type[BaseModel]) -> dict[str, list[ClientRule]]:
        out: dict[str, list[ClientRule]] = {}
        for field_name, info in model.model_fields.items():
            key = info.alias or field_name
            rules = self.rules_for_field(key, info)
            if rules:
                out[key] = rules
        return out
