"""Persistence helpers for vueinsight."""

from .component_cache import ComponentCache

__all__ = ["ComponentCache"]
