# -*- coding: utf-8 -*-
"""
backend/app/modules/refunds/adapters/stripe_refund_adapter.py

Adaptador Stripe para emitir reembolsos contra un PaymentIntent.

- La llamada al SDK (síncrono) se ejecuta en threadpool para no bloquear
  el event loop.
- Se usa idempotency_key por enrollment: dos liquidaciones concurrentes
  del mismo enrollment convergen en un único reembolso en Stripe.
- Cualquier error del SDK se normaliza a PaymentProviderError con un
  mensaje legible.

Autor: Ixchel Beristain
Fecha: 2026-10-08
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Optional, Protocol, TYPE_CHECKING

import stripe
from fastapi.concurrency import run_in_threadpool

from app.modules.refunds.errors import PaymentProviderError

if TYPE_CHECKING:
    from app.shared.config.settings_base import BaseAppSettings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProcessorRefund:
    """Resultado normalizado de un reembolso emitido."""
    refund_id: str
    amount_cents: int
    status: Optional[str] = None


class IPaymentProcessor(Protocol):
    async def create_refund(
        self,
        *,
        payment_intent_id: str,
        amount_cents: int,
        metadata: Dict[str, str],
        idempotency_key: str,
    ) -> ProcessorRefund: ...


def refund_idempotency_key(enrollment_id: str) -> str:
    return f"refund-enrollment-{enrollment_id}"


class StripeRefundAdapter:
    """Emisor de reembolsos vía Stripe Refunds API."""

    def __init__(self, secret_key: Optional[str]):
        self._secret_key = secret_key

    @classmethod
    def from_settings(cls, settings: BaseAppSettings) -> "StripeRefundAdapter":
        key = settings.stripe_secret_key.get_secret_value() if settings.stripe_secret_key else None
        if not key:
            logger.warning("STRIPE_SECRET_KEY not configured")
        return cls(secret_key=key)

    @property
    def is_configured(self) -> bool:
        return bool(self._secret_key)

    async def create_refund(
        self,
        *,
        payment_intent_id: str,
        amount_cents: int,
        metadata: Dict[str, str],
        idempotency_key: str,
    ) -> ProcessorRefund:
        """
        Crea un reembolso parcial/total del PaymentIntent.

        Raises:
            PaymentProviderError: Stripe no configurado, sin payment intent,
                o error del SDK.
        """
        if not self.is_configured:
            raise PaymentProviderError("Stripe is not configured. Set STRIPE_SECRET_KEY.")
        if not payment_intent_id:
            raise PaymentProviderError("Order has no payment intent to refund")

        logger.info(
            "Creating Stripe refund: payment_intent=%s amount_cents=%s key=%s",
            payment_intent_id,
            amount_cents,
            idempotency_key,
        )

        try:
            refund = await run_in_threadpool(
                stripe.Refund.create,
                payment_intent=payment_intent_id,
                amount=amount_cents,
                metadata=metadata,
                api_key=self._secret_key,
                idempotency_key=idempotency_key,
            )
        except stripe.StripeError as e:
            message = e.user_message or str(e) or "Unknown Stripe error"
            logger.error(
                "Stripe refund failed: payment_intent=%s error=%s",
                payment_intent_id,
                message,
                exc_info=True,
            )
            raise PaymentProviderError(message) from e

        logger.info("Stripe refund created: refund_id=%s status=%s", refund.id, refund.status)
        return ProcessorRefund(
            refund_id=refund.id,
            amount_cents=refund.amount,
            status=refund.status,
        )


__all__ = [
    "ProcessorRefund",
    "IPaymentProcessor",
    "StripeRefundAdapter",
    "refund_idempotency_key",
]

# Fin del archivo backend/app/modules/refunds/adapters/stripe_refund_adapter.py
