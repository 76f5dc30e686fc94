# -*- coding: utf-8 -*-
"""
backend/app/shared/config/settings_base.py

Base de configuración (Pydantic v2) para el backend de la tienda de cursos.
- Esta clase NO instancia singletons ni resuelve .env; eso lo hace config_loader.
- Es la base para settings_dev.py, settings_testing.py y settings_prod.py.

Autor: Ixchel Beristain
Fecha: 2026-10-05
"""

from typing import Literal, Optional
from pydantic import Field, SecretStr, computed_field
from pydantic_settings import BaseSettings


# Tipos de entorno soportados
EnvName = Literal["development", "test", "production"]


class BaseAppSettings(BaseSettings):
    # =========================
    # Núcleo de la aplicación
    # =========================
    python_env: EnvName = Field(default="development", validation_alias="PYTHON_ENV")
    app_name: str = Field(default="CourseStore", validation_alias="APP_NAME")
    app_version: str = Field(default="0.1.0", validation_alias="APP_VERSION")
    app_host: str = Field(default="0.0.0.0", validation_alias="APP_HOST")
    app_port: int = Field(default=8000, validation_alias="APP_PORT")
    debug: bool = Field(default=False, validation_alias="DEBUG")

    # =========================
    # Base de datos (PostgreSQL)
    # =========================
    db_user: str = Field(default="postgres", validation_alias="DB_USER")
    db_password: SecretStr = Field(default=SecretStr("postgres"), validation_alias="DB_PASSWORD")
    db_host: str = Field(default="localhost", validation_alias="DB_HOST")
    db_port: int = Field(default=5432, validation_alias="DB_PORT")
    db_name: str = Field(default="coursestore", validation_alias="DB_NAME")
    db_echo_sql: bool = Field(default=False, validation_alias="DB_ECHO_SQL")
    db_sslmode: str = Field(default="prefer", validation_alias="DB_SSLMODE")  # prefer|require|disable
    db_url: Optional[str] = Field(default=None, validation_alias="DB_URL")

    @computed_field  # type: ignore[misc]
    @property
    def database_url(self) -> str:
        """
        Genera la URL de conexión completa para SQLAlchemy + asyncpg.
        Prioriza DB_URL si existe, sino construye desde componentes individuales.
        """
        from urllib.parse import quote_plus

        if self.db_url:
            url = self.db_url
            if url.startswith("sqlite"):
                return url
            return (
                url.replace("postgres://", "postgresql+asyncpg://")
                   .replace("postgresql://", "postgresql+asyncpg://")
            )

        pw = quote_plus(self.db_password.get_secret_value())
        return f"postgresql+asyncpg://{self.db_user}:{pw}@{self.db_host}:{self.db_port}/{self.db_name}"

    # =========================
    # CORS / Frontend
    # =========================
    allowed_origins: str = Field(default="*", validation_alias="CORS_ORIGINS")
    frontend_url: str = Field(default="http://localhost:3000", validation_alias="FRONTEND_URL")

    def get_cors_origins(self) -> list[str]:
        """Lista de orígenes CORS a partir de CORS_ORIGINS (separados por coma)."""
        return [o.strip().strip('"').strip("'") for o in self.allowed_origins.split(",") if o.strip()]

    # =========================
    # Auth / JWT (proveedor de identidad)
    # =========================
    jwt_secret_key: SecretStr = Field(default=SecretStr("please-change-me"), validation_alias="JWT_SECRET_KEY")
    jwt_algorithm: Literal["HS256", "RS256"] = Field(default="HS256", validation_alias="JWT_ALGORITHM")

    # =========================
    # Stripe (procesador de pagos)
    # =========================
    stripe_secret_key: Optional[SecretStr] = Field(default=None, validation_alias="STRIPE_SECRET_KEY")
    stripe_mode: Literal["test", "live"] = Field(default="test", validation_alias="STRIPE_MODE")

    # =========================
    # LearnWorlds (plataforma de aprendizaje)
    # =========================
    learnworlds_base_url: str = Field(
        default="https://courses.greencardiy.com",
        validation_alias="LEARNWORLDS_BASE_URL",
    )
    learnworlds_api_token: Optional[SecretStr] = Field(default=None, validation_alias="LEARNWORLDS_API_TOKEN")
    learnworlds_client_id: Optional[str] = Field(default=None, validation_alias="LEARNWORLDS_CLIENT_ID")
    learnworlds_timeout_sec: float = Field(default=15.0, validation_alias="LEARNWORLDS_TIMEOUT_SEC")

    # =========================
    # Email
    # =========================
    email_mode: Literal["console", "api"] = Field(default="console", validation_alias="EMAIL_MODE")
    email_timeout_sec: int = Field(default=30, validation_alias="EMAIL_TIMEOUT_SEC")
    email_from: str = Field(default="no-reply@coursestore.site", validation_alias="EMAIL_FROM")
    support_email: str = Field(default="support@coursestore.site", validation_alias="SUPPORT_EMAIL")

    # MailerSend API (solo aplica si email_mode == "api")
    mailersend_api_key: Optional[SecretStr] = Field(default=None, validation_alias="MAILERSEND_API_KEY")
    mailersend_from_email: Optional[str] = Field(default=None, validation_alias="MAILERSEND_FROM_EMAIL")
    mailersend_from_name: Optional[str] = Field(default="CourseStore", validation_alias="MAILERSEND_FROM_NAME")

    # =========================
    # Política de reembolsos
    # =========================
    refund_course_eligible_days: int = Field(default=3, ge=0, validation_alias="REFUND_COURSE_ELIGIBLE_DAYS")
    refund_bundle_eligible_days: int = Field(default=6, ge=0, validation_alias="REFUND_BUNDLE_ELIGIBLE_DAYS")
    refund_course_section_limit: int = Field(default=2, ge=0, validation_alias="REFUND_COURSE_SECTION_LIMIT")
    refund_unit_progress_rate_limit: float = Field(
        default=0.0, ge=0, validation_alias="REFUND_UNIT_PROGRESS_RATE_LIMIT"
    )
    refund_apply_processing_fee: bool = Field(default=False, validation_alias="REFUND_APPLY_PROCESSING_FEE")
    refund_processing_fee_percent: float = Field(
        default=0.05, ge=0, validation_alias="REFUND_PROCESSING_FEE_PERCENT"
    )

    # =========================
    # Observabilidad / Logging
    # =========================
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(default="INFO", validation_alias="LOG_LEVEL")
    log_format: Literal["json", "pretty", "plain"] = Field(default="pretty", validation_alias="LOG_FORMAT")

    # ===== Helpers de entorno =====
    @computed_field  # type: ignore[misc]
    @property
    def is_dev(self) -> bool:
        return self.python_env == "development"

    @computed_field  # type: ignore[misc]
    @property
    def is_test(self) -> bool:
        return self.python_env == "test"

    @computed_field  # type: ignore[misc]
    @property
    def is_prod(self) -> bool:
        return self.python_env == "production"

    # ===== Validaciones de seguridad (las invoca config_loader) =====
    def _security_checks(self) -> None:
        """
        Reglas mínimas para producción:
        - JWT_SECRET_KEY no puede quedarse en el valor por defecto.
        - STRIPE_SECRET_KEY es obligatorio (los reembolsos se emiten contra Stripe).
        - LEARNWORLDS_API_TOKEN es obligatorio: sin él la consulta de progreso
          falla y toda compra parecería elegible.
        - Con EMAIL_MODE=api, MAILERSEND_API_KEY es obligatorio.
        """
        if not self.is_prod:
            return
        if self.jwt_secret_key.get_secret_value() in ("", "please-change-me"):
            raise ValueError("JWT_SECRET_KEY debe configurarse en producción")
        if self.stripe_secret_key is None or not self.stripe_secret_key.get_secret_value():
            raise ValueError("STRIPE_SECRET_KEY es obligatorio en producción")
        if self.learnworlds_api_token is None or not self.learnworlds_api_token.get_secret_value():
            raise ValueError("LEARNWORLDS_API_TOKEN es obligatorio en producción")
        if self.email_mode == "api" and (
            self.mailersend_api_key is None or not self.mailersend_api_key.get_secret_value()
        ):
            raise ValueError("MAILERSEND_API_KEY es obligatorio con EMAIL_MODE=api en producción")


__all__ = ["BaseAppSettings", "EnvName"]

# Fin del archivo backend/app/shared/config/settings_base.py
