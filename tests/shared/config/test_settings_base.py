# -*- coding: utf-8 -*-
import pytest
from pydantic import ValidationError

from app.shared.config.settings_base import BaseAppSettings


def test_database_url_builds_from_parts(monkeypatch):
    monkeypatch.setenv("DB_USER", "alice")
    monkeypatch.setenv("DB_PASSWORD", "s3cr3t!")
    monkeypatch.setenv("DB_HOST", "db.local")
    monkeypatch.setenv("DB_PORT", "5433")
    monkeypatch.setenv("DB_NAME", "coursestore_db")
    s = BaseAppSettings()
    assert s.database_url.startswith("postgresql+asyncpg://alice:")
    assert "s3cr3t%21" in s.database_url
    assert s.database_url.endswith("@db.local:5433/coursestore_db")


def test_database_url_uses_DB_URL_and_normalizes(monkeypatch):
    monkeypatch.setenv("DB_URL", "postgres://u:p@h:5432/db")
    s = BaseAppSettings()
    assert s.database_url == "postgresql+asyncpg://u:p@h:5432/db"


def test_database_url_keeps_sqlite(monkeypatch):
    monkeypatch.setenv("DB_URL", "sqlite+aiosqlite:///:memory:")
    assert BaseAppSettings().database_url == "sqlite+aiosqlite:///:memory:"


def test_cors_origins_parsing_list(monkeypatch):
    monkeypatch.setenv("CORS_ORIGINS", "https://a.com, https://b.com , 'http://localhost:8080'")
    s = BaseAppSettings()
    assert s.get_cors_origins() == ["https://a.com", "https://b.com", "http://localhost:8080"]


def test_cors_origins_wildcard(monkeypatch):
    monkeypatch.setenv("CORS_ORIGINS", "*")
    s = BaseAppSettings()
    assert s.get_cors_origins() == ["*"]


def test_refund_policy_defaults():
    s = BaseAppSettings()
    assert s.refund_course_eligible_days == 3
    assert s.refund_bundle_eligible_days == 6
    assert s.refund_course_section_limit == 2
    assert s.refund_unit_progress_rate_limit == 0
    assert s.refund_apply_processing_fee is False
    assert s.refund_processing_fee_percent == pytest.approx(0.05)


def test_refund_policy_from_env(monkeypatch):
    monkeypatch.setenv("REFUND_COURSE_ELIGIBLE_DAYS", "5")
    monkeypatch.setenv("REFUND_APPLY_PROCESSING_FEE", "true")
    monkeypatch.setenv("REFUND_PROCESSING_FEE_PERCENT", "0.1")
    s = BaseAppSettings()
    assert s.refund_course_eligible_days == 5
    assert s.refund_apply_processing_fee is True
    assert s.refund_processing_fee_percent == pytest.approx(0.1)


def test_negative_refund_window_rejected(monkeypatch):
    monkeypatch.setenv("REFUND_BUNDLE_ELIGIBLE_DAYS", "-1")
    with pytest.raises(ValidationError):
        BaseAppSettings()


def test_dev_checks_dont_raise():
    # Fuera de producción no se exigen secretos
    BaseAppSettings()._security_checks()


def test_prod_checks_require_jwt_secret(monkeypatch):
    monkeypatch.setenv("PYTHON_ENV", "production")
    monkeypatch.setenv("STRIPE_SECRET_KEY", "sk_live_x")
    s = BaseAppSettings()
    with pytest.raises(ValueError) as ei:
        s._security_checks()
    assert "JWT_SECRET_KEY" in str(ei.value)


def test_prod_checks_require_stripe_key(monkeypatch):
    monkeypatch.setenv("PYTHON_ENV", "production")
    monkeypatch.setenv("JWT_SECRET_KEY", "X" * 40)
    s = BaseAppSettings()
    with pytest.raises(ValueError) as ei:
        s._security_checks()
    assert "STRIPE_SECRET_KEY" in str(ei.value)

def _prod_env(monkeypatch, **extra):
    monkeypatch.setenv("PYTHON_ENV", "production")
    monkeypatch.setenv("JWT_SECRET_KEY", "X" * 40)
    monkeypatch.setenv("STRIPE_SECRET_KEY", "sk_live_x")
    for key, value in extra.items():
        monkeypatch.setenv(key, value)


def test_prod_checks_require_learnworlds_token(monkeypatch):
    _prod_env(monkeypatch)
    with pytest.raises(ValueError) as ei:
        BaseAppSettings()._security_checks()
    assert "LEARNWORLDS_API_TOKEN" in str(ei.value)


def test_prod_checks_require_mailersend_key_in_api_mode(monkeypatch):
    _prod_env(monkeypatch, LEARNWORLDS_API_TOKEN="lw_live", EMAIL_MODE="api")
    with pytest.raises(ValueError) as ei:
        BaseAppSettings()._security_checks()
    assert "MAILERSEND_API_KEY" in str(ei.value)


def test_prod_checks_allow_console_mail_without_mailersend(monkeypatch):
    _prod_env(monkeypatch, LEARNWORLDS_API_TOKEN="lw_live", EMAIL_MODE="console")
    BaseAppSettings()._security_checks()
# Fin del archivo backend/tests/shared/config/test_settings_base.py
