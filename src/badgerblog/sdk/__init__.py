from __future__ import annotations

from .client import BadgerBlogClient

__all__ = ["BadgerBlogClient"]
