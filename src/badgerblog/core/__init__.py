from __future__ import annotations

from .extensions import EXTENSION_ADAPTERS, ValidationExtensions
from .forms import FORMS, CommentForm, PostForm, get_form
from .validation import ClientRule, ClientValidationRegistry, client_attributes

__all__ = [
    "ClientRule",
    "ClientValidationRegistry",
    "client_attributes",
    "ValidationExtensions",
    "EXTENSION_ADAPTERS",
    "FORMS",
    "PostForm",
    "CommentForm",
    "get_form",
]
