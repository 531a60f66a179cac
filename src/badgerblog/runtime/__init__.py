from __future__ import annotations

from .app import create_app
from .server import BadgerBlogServer, run
from .startup import StartupHook, StartupSequence, client_validation_hook

__all__ = [
    "create_app",
    "BadgerBlogServer",
    "run",
    "StartupHook",
    "StartupSequence",
    "client_validation_hook",
]
