"""Tests for configuration defaults and env overrides."""

from __future__ import annotations

from haulpay.core.config import AppSettings, DynamoDBConfig, PayrollConfig


def test_default_settings():
    settings = AppSettings()
    assert settings.environment == "dev"
    assert settings.payroll.store_backend == "memory"


def test_payroll_config_defaults():
    config = PayrollConfig()
    assert config.holiday_cache_ttl == 86400
    assert config.use_cache is True


def test_dynamodb_env_override(monkeypatch):
    monkeypatch.setenv("HAULPAY_DYNAMO_TABLE_SUFFIX", "-uat")
    monkeypatch.setenv("HAULPAY_DYNAMO_ENDPOINT_URL", "http://localhost:4566")
    config = DynamoDBConfig()
    assert config.table_suffix == "-uat"
    assert config.endpoint_url == "http://localhost:4566"


def test_payroll_backend_env_override(monkeypatch):
    monkeypatch.setenv("HAULPAY_PAYROLL_STORE_BACKEND", "dynamodb")
    assert PayrollConfig().store_backend == "dynamodb"
