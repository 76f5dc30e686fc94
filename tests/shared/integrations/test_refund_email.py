# -*- coding: utf-8 -*-
"""
Tests del correo de estado de reembolso (templates, MailerSend y factory).

Autor: Ixchel Beristain
Fecha: 2026-10-11
"""

import json

import httpx
import pytest
from pydantic import SecretStr


class TestRefundTemplates:

    def test_subject_per_status(self):
        from app.shared.integrations.email_templates import refund_subject_for

        assert refund_subject_for("requested") == "Refund Request Received"
        assert refund_subject_for("processing") == "Your Refund is Being Processed"
        assert refund_subject_for("completed") == "Refund Completed Successfully"
        assert refund_subject_for("failed") == "Refund Request Issue"
        assert refund_subject_for("unknown") == "Your Refund is Being Processed"

    def test_render_refund_template(self):
        from app.shared.integrations.email_templates import build_refund_email_context, render_email

        context = build_refund_email_context(
            customer_name=None,
            product_title="N-400 Course",
            refund_amount=95,
            order_number="ORD-1",
            status="processing",
            support_email="help@example.com",
        )
        html, text, used_template = render_email("refund_status_email", context)

        assert used_template is True
        assert "Hello Customer" in text
        assert "$95.00" in text
        assert "ORD-1" in html
        assert "{{" not in html and "{{" not in text

    def test_html_escapes_customer_values(self):
        from app.shared.integrations.email_templates import build_refund_email_context, render_email

        context = build_refund_email_context(
            customer_name="<b>Ana & Co</b>",
            product_title="N-400 <Course>",
            refund_amount=95,
            order_number="ORD-1",
            status="processing",
        )
        html, text, _ = render_email("refund_status_email", context)

        assert "&lt;b&gt;Ana &amp; Co&lt;/b&gt;" in html
        assert "<b>Ana" not in html
        assert "N-400 &lt;Course&gt;" in html
        assert "Hello <b>Ana & Co</b>" in text

    def test_fallback_text(self):
        from app.shared.integrations.email_templates import build_refund_email_context, get_fallback_text

        context = build_refund_email_context(
            customer_name="Ana",
            product_title="N-400 Course",
            refund_amount=10.5,
            order_number="ORD-2",
            status="completed",
        )
        text = get_fallback_text(context)

        assert text.startswith("Hello Ana,")
        assert "Refund amount: $10.50" in text


class TestMailerSendRefundEmail:

    @pytest.mark.asyncio
    async def test_sends_subject_and_recipient(self):
        from app.shared.integrations.mailersend_email_sender import MailerSendEmailSender

        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["auth"] = request.headers["Authorization"]
            seen["payload"] = json.loads(request.content)
            return httpx.Response(202, headers={"X-Message-Id": "msg-1"})

        sender = MailerSendEmailSender(
            api_key="ms_key",
            from_email="no-reply@example.com",
            client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
        )

        await sender.send_refund_email(
            "ana@example.com",
            customer_name="Ana",
            product_title="N-400 Course",
            refund_amount=100.0,
            order_number="ORD-3",
            status="processing",
        )

        assert seen["auth"] == "Bearer ms_key"
        payload = seen["payload"]
        assert payload["to"] == [{"email": "ana@example.com"}]
        assert payload["subject"] == "Your Refund is Being Processed"
        assert "ORD-3" in payload["text"]

    @pytest.mark.asyncio
    async def test_api_error_raises(self):
        from app.shared.integrations.mailersend_email_sender import MailerSendEmailSender

        sender = MailerSendEmailSender(
            api_key="ms_key",
            from_email="no-reply@example.com",
            client=httpx.AsyncClient(transport=httpx.MockTransport(lambda r: httpx.Response(422, text="invalid"))),
        )

        with pytest.raises(RuntimeError, match="MailerSend API error: 422"):
            await sender.send_refund_email(
                "ana@example.com",
                customer_name=None,
                product_title="X",
                refund_amount=1.0,
                order_number="ORD-4",
                status="failed",
            )

    def test_requires_api_key(self):
        from app.shared.integrations.mailersend_email_sender import MailerSendEmailSender

        with pytest.raises(ValueError):
            MailerSendEmailSender(api_key="", from_email="no-reply@example.com")


class TestEmailSenderFactory:

    def test_console_mode_returns_stub(self):
        from app.shared.config import get_settings
        from app.shared.integrations.email_sender import EmailSender, StubEmailSender

        settings = get_settings().model_copy(update={"email_mode": "console"})
        assert isinstance(EmailSender.from_settings(settings), StubEmailSender)

    def test_api_mode_returns_mailersend(self):
        from app.shared.config import get_settings
        from app.shared.integrations.email_sender import EmailSender
        from app.shared.integrations.mailersend_email_sender import MailerSendEmailSender

        settings = get_settings().model_copy(
            update={
                "email_mode": "api",
                "mailersend_api_key": SecretStr("ms_key"),
                "mailersend_from_email": "no-reply@example.com",
            }
        )
        assert isinstance(EmailSender.from_settings(settings), MailerSendEmailSender)

    @pytest.mark.asyncio
    async def test_stub_sender_does_not_raise(self):
        from app.shared.integrations.email_sender import StubEmailSender

        await StubEmailSender().send_refund_email(
            "ana@example.com",
            customer_name="Ana",
            product_title="X",
            refund_amount=1.0,
            order_number="ORD-5",
            status="processing",
        )
