"""
Output backends.

Contains the format-specific generators.
"""

from __future__ import annotations

from .base import CodeBackend
from .cto_backend import CtoBackend
from .markdown_backend import MarkdownBackend
from .typescript_backend import TypeScriptBackend

__all__ = [
    "CodeBackend",
    "CtoBackend",
    "TypeScriptBackend",
    "MarkdownBackend",
]
