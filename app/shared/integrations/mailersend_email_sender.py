# -*- coding: utf-8 -*-
"""
backend/app/shared/integrations/mailersend_email_sender.py

Implementación de envío de correos usando MailerSend API.
Usa templates de templates/emails/ como fuente de verdad.

Autor: Ixchel Beristain
Creado: 2026-10-06

Notas:
- MailerSend responde 202 Accepted en envíos exitosos.
- El cliente HTTP se puede inyectar (tests con httpx.MockTransport).
"""

from __future__ import annotations

import logging
from html import escape
from typing import Optional, Tuple, TYPE_CHECKING

import httpx

from app.shared.integrations.email_templates import (
    build_refund_email_context,
    get_fallback_text,
    refund_subject_for,
    render_email,
)

if TYPE_CHECKING:
    from app.shared.config.settings_base import BaseAppSettings

logger = logging.getLogger(__name__)

# MailerSend API endpoint
MAILERSEND_API_URL = "https://api.mailersend.com/v1/email"


class MailerSendEmailSender:
    """Envío de correos usando MailerSend API."""

    def __init__(
        self,
        api_key: str,
        from_email: str,
        from_name: str = "CourseStore",
        timeout: int = 30,
        support_email: str = "",
        client: Optional[httpx.AsyncClient] = None,
    ):
        if not api_key:
            raise ValueError("MAILERSEND_API_KEY es requerido")
        if not from_email:
            raise ValueError("MAILERSEND_FROM_EMAIL es requerido")

        self.api_key = api_key
        self.from_email = from_email
        self.from_name = from_name
        self.timeout = timeout
        self.support_email = support_email
        self._client = client

    @classmethod
    def from_settings(cls, settings: BaseAppSettings) -> "MailerSendEmailSender":
        """
        Crea instancia desde settings (fuente de verdad).

        Raises:
            ValueError: si faltan credenciales requeridas
        """
        api_key = ""
        if settings.mailersend_api_key:
            api_key = settings.mailersend_api_key.get_secret_value().strip()

        from_email = (settings.mailersend_from_email or settings.email_from or "").strip()
        from_name = (settings.mailersend_from_name or settings.app_name).strip()

        if not api_key:
            raise ValueError("[MailerSend] MAILERSEND_API_KEY es requerido.")

        logger.info(
            "[MailerSend] config: from=%s (%s) timeout=%ss",
            from_email,
            from_name,
            settings.email_timeout_sec,
        )

        return cls(
            api_key=api_key,
            from_email=from_email,
            from_name=from_name,
            timeout=settings.email_timeout_sec or 30,
            support_email=settings.support_email,
        )

    def _build_refund_body(self, context: dict) -> Tuple[str, str, bool]:
        """Construye cuerpo (html, texto) para el email de reembolso."""
        html, text, used_template = render_email("refund_status_email", context)

        if not text:
            text = get_fallback_text(context)

        if not html:
            html = f"<pre>{escape(text)}</pre>"

        return html, text, used_template

    async def _post(self, payload: dict, headers: dict) -> httpx.Response:
        if self._client is not None:
            return await self._client.post(MAILERSEND_API_URL, json=payload, headers=headers)
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            return await client.post(MAILERSEND_API_URL, json=payload, headers=headers)

    async def _send_email(
        self, to_email: str, subject: str, html_body: str, text_body: str
    ) -> str:
        """Envía email via MailerSend API. Retorna message_id."""
        payload = {
            "from": {
                "email": self.from_email,
                "name": self.from_name,
            },
            "to": [
                {"email": to_email}
            ],
            "subject": subject,
            "html": html_body,
            "text": text_body,
        }

        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

        logger.info("[MailerSend] sending: to=%s subject=%s", to_email, subject)

        try:
            response = await self._post(payload, headers)
        except httpx.TimeoutException as e:
            logger.error("[MailerSend] timeout: to=%s error=%s", to_email, str(e))
            raise RuntimeError(f"MailerSend timeout: {e}") from e
        except httpx.RequestError as e:
            logger.error("[MailerSend] request error: to=%s error=%s", to_email, str(e))
            raise RuntimeError(f"MailerSend request error: {e}") from e

        if response.status_code == 202:
            message_id = response.headers.get("X-Message-Id", "accepted")
            logger.info("[MailerSend] sent ok: to=%s message_id=%s", to_email, message_id)
            return message_id

        error_body = response.text
        logger.error(
            "[MailerSend] send failed: to=%s status=%d body=%s",
            to_email,
            response.status_code,
            error_body[:500],
        )
        raise RuntimeError(
            f"MailerSend API error: {response.status_code} - {error_body[:200]}"
        )

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
        """Envía el email de estado de reembolso."""
        context = build_refund_email_context(
            customer_name=customer_name,
            product_title=product_title,
            refund_amount=refund_amount,
            order_number=order_number,
            status=status,
            support_email=self.support_email,
        )
        html, text, used_template = self._build_refund_body(context)

        logger.info(
            "[MailerSend] refund email: to=%s status=%s template=%s",
            to_email,
            status,
            "loaded" if used_template else "fallback",
        )

        await self._send_email(to_email, refund_subject_for(status), html, text)


# Fin del archivo backend/app/shared/integrations/mailersend_email_sender.py
