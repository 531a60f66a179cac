from __future__ import annotations


class BadgerBlogError(Exception):
    """Base class for badgerblog errors.

    HTTP-facing failures carry the response status and body so callers can
    report what the server said.
    """

    def __init__(self, message: str, *, status_code: int | None = None, body: str | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class DuplicateAdapterError(BadgerBlogError, ValueError):
    """A client-rule adapter with the same name is already registered."""


class UnknownAdapterError(BadgerBlogError, KeyError):
    """No client-rule adapter is registered under the requested name."""

    def __str__(self) -> str:
        # KeyError would repr() the message.
        return str(self.args[0]) if self.args else ""


class UnknownFormError(BadgerBlogError, KeyError):
    """No form model is registered under the requested name."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""
