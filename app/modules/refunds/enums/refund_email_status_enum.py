# -*- coding: utf-8 -*-
"""
backend/app/modules/refunds/enums/refund_email_status_enum.py

Etiqueta de estado enviada en las notificaciones de reembolso.
El asunto del correo se deriva de esta etiqueta.

Autor: Ixchel Beristain
Fecha: 2026-10-07
"""

from enum import StrEnum


class RefundEmailStatus(StrEnum):
    REQUESTED = "requested"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"


__all__ = ["RefundEmailStatus"]

# Fin del archivo backend/app/modules/refunds/enums/refund_email_status_enum.py
