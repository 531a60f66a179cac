from __future__ import annotations

from .config import Settings
from .core.extensions import ValidationExtensions
from .core.validation import ClientRule, ClientValidationRegistry
from .errors import BadgerBlogError, DuplicateAdapterError, UnknownAdapterError, UnknownFormError
from .runtime.app import create_app
from .runtime.server import BadgerBlogServer, run
from .runtime.startup import StartupHook, StartupSequence, client_validation_hook
from .sdk.client import BadgerBlogClient

__all__ = [
    "run",
    "create_app",
    "Settings",
    "BadgerBlogServer",
    "BadgerBlogClient",
    "StartupHook",
    "StartupSequence",
    "client_validation_hook",
    "ClientRule",
    "ClientValidationRegistry",
    "ValidationExtensions",
    "BadgerBlogError",
    "DuplicateAdapterError",
    "UnknownAdapterError",
    "UnknownFormError",
]
