# -*- coding: utf-8 -*-
"""
backend/app/shared/integrations/email_sender.py

Factory unificado para EmailSender.
Soporta dos modos:
- console: stub que solo loguea (desarrollo/tests)
- api: envío via API (MailerSend)

Autor: Ixchel Beristain
Actualizado: 2026-10-06
"""

from __future__ import annotations

import logging
from typing import Optional, Protocol, TYPE_CHECKING

if TYPE_CHECKING:
    from app.shared.config.settings_base import BaseAppSettings

logger = logging.getLogger(__name__)


class IEmailSender(Protocol):
    """Protocolo para implementaciones de email sender."""
    async def send_refund_email(
        self,
        to_email: str,
        *,
        customer_name: Optional[str],
        product_title: str,
        refund_amount: float,
        order_number: str,
        status: str,
    ) -> None: ...


class StubEmailSender:
    """Implementación que no envía correos; solo hace logging (modo console)."""

    async def send_refund_email(
        self,
        to_email: str,
        *,
        customer_name: Optional[str],
        product_title: str,
        refund_amount: float,
        order_number: str,
        status: str,
    ) -> None:
        logger.info(
            "[CONSOLE EMAIL] Reembolso (%s) → %s | %s | $%.2f | orden=%s",
            status,
            to_email,
            product_title,
            refund_amount,
            order_number,
        )


class EmailSender:
    """
    Factory unificado para selección de email sender.

    Variables de entorno (via settings):
    - email_mode: console | api

    Ejemplos de configuración:
    - Desarrollo: EMAIL_MODE=console
    - MailerSend: EMAIL_MODE=api + MAILERSEND_API_KEY + MAILERSEND_FROM_EMAIL
    """

    @staticmethod
    def from_settings(settings: BaseAppSettings) -> IEmailSender:
        """
        Crea el email sender apropiado según settings (fuente de verdad).

        Raises:
            ValueError: si email_mode=api pero faltan credenciales, o si el
                modo no se reconoce en producción
        """
        mode = (settings.email_mode or "console").strip().lower()

        logger.info(f"[EmailSender] mode={mode!r}")

        # ─────────────────────────────────────────────────────────────
        # MODO CONSOLE (stub) - desarrollo y tests
        # ─────────────────────────────────────────────────────────────
        if mode in ("console", "stub", "local", ""):
            return StubEmailSender()

        # ─────────────────────────────────────────────────────────────
        # MODO API - MailerSend
        # ─────────────────────────────────────────────────────────────
        if mode == "api":
            from app.shared.integrations.mailersend_email_sender import MailerSendEmailSender
            logger.info("[EmailSender] Usando MailerSendEmailSender")
            return MailerSendEmailSender.from_settings(settings)

        # ─────────────────────────────────────────────────────────────
        # MODO NO RECONOCIDO - fail-fast en producción
        # ─────────────────────────────────────────────────────────────
        if settings.is_prod:
            raise ValueError(
                f"EMAIL_MODE '{mode}' no reconocido. "
                f"Configure EMAIL_MODE=console|api"
            )

        logger.warning(
            f"[EmailSender] EMAIL_MODE={mode!r} no reconocido, usando console (solo dev)"
        )
        return StubEmailSender()


def get_email_sender() -> IEmailSender:
    """Dependencia FastAPI: sender construido desde la configuración activa."""
    from app.shared.config import get_settings
    return EmailSender.from_settings(get_settings())


# Fin del archivo backend/app/shared/integrations/email_sender.py
