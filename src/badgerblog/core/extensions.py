"""Client-side validation extensions.

Adds the rules the base framework lacks (e-mail, URL, numeric ranges, file
extensions, ...) to a `ClientValidationRegistry`. Rule names and parameter
names follow the jQuery unobtrusive validation conventions so a stock browser
script can pick them up from the rendered `data-val-*` attributes.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from pydantic.fields import FieldInfo

from .validation import Adapter, ClientRule, ClientValidationRegistry, display_name

logger = logging.getLogger(__name__)

DEFAULT_FILE_EXTENSIONS = "png,jpg,jpeg,gif"


def _message(options: Mapping[str, Any], default: str) -> str:
    return str(options.get("message") or default)


def _email(field_name: str, info: FieldInfo, options: Mapping[str, Any]) -> ClientRule:
    name = display_name(field_name, info)
    return ClientRule("email", _message(options, f"The {name} field is not a valid e-mail address."))


def _url(field_name: str, info: FieldInfo, options: Mapping[str, Any]) -> ClientRule:
    name = display_name(field_name, info)
    return ClientRule("url", _message(options, f"The {name} field is not a valid fully-qualified http, https, or ftp URL."))


def _digits(field_name: str, info: FieldInfo, options: Mapping[str, Any]) -> ClientRule:
    name = display_name(field_name, info)
    return ClientRule("digits", _message(options, f"The field {name} should contain only digits."))


def _integer(field_name: str, info: FieldInfo, options: Mapping[str, Any]) -> ClientRule:
    name = display_name(field_name, info)
    return ClientRule("integer", _message(options, f"{name} must be an integer."))


def _number(field_name: str, info: FieldInfo, options: Mapping[str, Any]) -> ClientRule:
    name = display_name(field_name, info)
    return ClientRule("number", _message(options, f"The field {name} must be a number."))


def _bound_value(rule: str, options: Mapping[str, Any]) -> str:
    if "value" not in options:
        raise ValueError(f"'{rule}' rule requires a 'value' option")
    return str(options["value"])


def _min(field_name: str, info: FieldInfo, options: Mapping[str, Any]) -> ClientRule:
    name = display_name(field_name, info)
    value = _bound_value("min", options)
    return ClientRule(
        "min",
        _message(options, f"The field {name} must be greater than or equal to {value}."),
        {"min": value},
    )


def _max(field_name: str, info: FieldInfo, options: Mapping[str, Any]) -> ClientRule:
    name = display_name(field_name, info)
    value = _bound_value("max", options)
    return ClientRule(
        "max",
        _message(options, f"The field {name} must be less than or equal to {value}."),
        {"max": value},
    )


def _date(field_name: str, info: FieldInfo, options: Mapping[str, Any]) -> ClientRule:
    name = display_name(field_name, info)
    return ClientRule("date", _message(options, f"The field {name} must be a date."))


def _equalto(field_name: str, info: FieldInfo, options: Mapping[str, Any]) -> ClientRule:
    other = str(options.get("other") or "").strip()
    if not other:
        raise ValueError("'equalto' rule requires an 'other' option")
    name = display_name(field_name, info)
    # "*." prefix: resolve the other input relative to this field's form prefix.
    return ClientRule(
        "equalto",
        _message(options, f"'{name}' and '{other}' do not match."),
        {"other": f"*.{other}"},
    )


def _extension(field_name: str, info: FieldInfo, options: Mapping[str, Any]) -> ClientRule:
    exts = str(options.get("extensions") or DEFAULT_FILE_EXTENSIONS)
    exts = ",".join(e.strip().lstrip(".").lower() for e in exts.split(",") if e.strip())
    name = display_name(field_name, info)
    return ClientRule(
        "extension",
        _message(options, f"The {name} field only accepts files with the following extensions: .{exts.replace(',', ', .')}"),
        {"extension": exts},
    )


def _creditcard(field_name: str, info: FieldInfo, options: Mapping[str, Any]) -> ClientRule:
    name = display_name(field_name, info)
    return ClientRule("creditcard", _message(options, f"The {name} field is not a valid credit card number."))


def _year(field_name: str, info: FieldInfo, options: Mapping[str, Any]) -> ClientRule:
    name = display_name(field_name, info)
    return ClientRule("year", _message(options, f"The field {name} is not a valid year."))


EXTENSION_ADAPTERS: dict[str, Adapter] = {
    "email": _email,
    "url": _url,
    "digits": _digits,
    "integer": _integer,
    "number": _number,
    "min": _min,
    "max": _max,
    "date": _date,
    "equalto": _equalto,
    "extension": _extension,
    "creditcard": _creditcard,
    "year": _year,
}


class ValidationExtensions:
    """The validation-extension library bound to one registry.

    `register_validation_extensions()` is its single registration entry
    point. It takes no arguments so it can be handed to a startup hook as-is.
    """

    def __init__(self, registry: ClientValidationRegistry) -> None:
        self.registry = registry

    def register_validation_extensions(self) -> None:
        for name, adapter in EXTENSION_ADAPTERS.items():
            self.registry.register(name, adapter, replace=True)
        logger.info("registered %d client validation extensions", len(EXTENSION_ADAPTERS))
