"""Pluggable persistence backends behind Protocol interfaces."""

from __future__ import annotations

from haulpay.core.config import AppSettings
from haulpay.persistence.dynamodb_backend import DynamoDBHRStore
from haulpay.persistence.memory_backend import MemoryCacheBackend, MemoryHRStore
from haulpay.persistence.redis_backend import RedisCacheBackend


def create_persistence(settings: AppSettings | None = None):
    """Create wired-up persistence backends from application settings.

    Returns:
        Tuple of (hr_store, cache). ``cache`` is None when caching is disabled.
    """
    if settings is None:
        settings = AppSettings()

    if settings.payroll.store_backend == "memory":
        cache = MemoryCacheBackend() if settings.payroll.use_cache else None
        return MemoryHRStore(), cache

    cache = None
    if settings.payroll.use_cache:
        cache = RedisCacheBackend(
            host=settings.redis.host,
            port=settings.redis.port,
            db=settings.redis.db,
            key_prefix=settings.redis.key_prefix,
        )

    hr_store = DynamoDBHRStore(
        table_suffix=settings.dynamodb.table_suffix,
        region=settings.dynamodb.region,
        endpoint_url=settings.dynamodb.endpoint_url,
        cache=cache,
        holiday_cache_ttl=settings.payroll.holiday_cache_ttl,
    )

    return hr_store, cache
