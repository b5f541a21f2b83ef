"""Builtin providers."""

from .provider import CommandNotFoundProvider

__all__ = ["CommandNotFoundProvider"]
