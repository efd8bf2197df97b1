"""Shared test doubles: the in-memory backends."""

from __future__ import annotations

from haulpay.persistence.memory_backend import MemoryCacheBackend, MemoryHRStore

__all__ = ["MemoryCacheBackend", "MemoryHRStore"]
