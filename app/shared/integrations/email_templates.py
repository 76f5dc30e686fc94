# -*- coding: utf-8 -*-
"""
backend/app/shared/integrations/email_templates.py

Helper para carga y renderizado de templates de email.
Convención: todos los templates viven en templates/emails/ con nombres *_email.(html|txt).

Autor: Ixchel Beristain
Fecha: 2026-10-06
"""

import logging
from html import escape
from pathlib import Path
from typing import Optional, Tuple, Dict, Any

logger = logging.getLogger(__name__)

# Directorio canónico de templates
EMAILS_DIR = Path(__file__).resolve().parent.parent / "templates" / "emails"

# Asuntos por etiqueta de estado del reembolso
REFUND_EMAIL_SUBJECTS: Dict[str, str] = {
    "requested": "Refund Request Received",
    "processing": "Your Refund is Being Processed",
    "completed": "Refund Completed Successfully",
    "failed": "Refund Request Issue",
}

# Texto de estado visible para el cliente
REFUND_STATUS_MESSAGES: Dict[str, str] = {
    "requested": "We have received your refund request and will review it shortly.",
    "processing": "Your refund has been approved and is being processed by our payment provider. "
                  "Depending on your bank, it may take 5-10 business days to appear on your statement.",
    "completed": "Your refund has been completed.",
    "failed": "We could not complete your refund. Our support team will contact you.",
}


def get_emails_dir() -> Path:
    """Retorna el directorio canónico de templates de email."""
    return EMAILS_DIR


def load_template(template_name: str) -> Optional[str]:
    """
    Carga template desde templates/emails/.

    Args:
        template_name: Nombre del archivo (ej: "refund_status_email.html")

    Returns:
        Contenido del template o None si no existe o no puede leerse.
    """
    path = EMAILS_DIR / template_name
    if not path.exists():
        logger.debug("[EmailTemplates] not found: %s", template_name)
        return None
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        logger.warning("[EmailTemplates] error reading %s: %s", template_name, e)
        return None
    logger.debug("[EmailTemplates] loaded: %s", template_name)
    return content


def render_template(raw: str, context: Dict[str, Any]) -> str:
    """
    Renderiza template reemplazando placeholders {{ variable }} y {{variable}}.
    """
    result = raw
    for key, value in context.items():
        result = result.replace(f"{{{{ {key} }}}}", str(value))
        result = result.replace(f"{{{{{key}}}}}", str(value))
    return result


def render_email(
    template_base: str,
    context: Dict[str, Any],
) -> Tuple[Optional[str], Optional[str], bool]:
    """
    Renderiza email completo (HTML y texto) desde templates/emails/.

    Args:
        template_base: Nombre base (ej: "refund_status_email" -> refund_status_email.html/txt)
        context: Variables a sustituir (se escapan para el cuerpo HTML)

    Returns:
        (html, text, used_template) - html/text pueden ser None si no hay template
    """
    html_content = load_template(f"{template_base}.html")
    txt_content = load_template(f"{template_base}.txt")

    used_template = html_content is not None

    html_context = {key: escape(str(value)) for key, value in context.items()}

    html = render_template(html_content, html_context) if html_content else None
    text = render_template(txt_content, context) if txt_content else None

    if used_template:
        logger.info("[EmailTemplates] rendered: %s", template_base)

    return html, text, used_template


def refund_subject_for(status: str) -> str:
    """Asunto del correo según la etiqueta de estado (processing por defecto)."""
    return REFUND_EMAIL_SUBJECTS.get(status, REFUND_EMAIL_SUBJECTS["processing"])


def build_refund_email_context(
    *,
    customer_name: Optional[str],
    product_title: str,
    refund_amount: float,
    order_number: str,
    status: str,
    support_email: str = "",
) -> Dict[str, Any]:
    """Contexto común de los templates de reembolso."""
    return {
        "customer_name": customer_name or "Customer",
        "product_title": product_title,
        "refund_amount": f"{refund_amount:.2f}",
        "order_number": order_number,
        "status": status,
        "status_message": REFUND_STATUS_MESSAGES.get(status, ""),
        "support_email": support_email,
    }


# Fallback de texto plano mínimo (sin HTML)
FALLBACK_REFUND_TEXT = """Hello {customer_name},

{status_message}

Product: {product_title}
Refund amount: ${refund_amount}
Order number: {order_number}

If you have any questions, reply to this email or contact {support_email}.
"""


def get_fallback_text(context: Dict[str, Any]) -> str:
    """
    Obtiene texto de fallback mínimo para cuando no hay templates.
    """
    try:
        return FALLBACK_REFUND_TEXT.format(**context)
    except KeyError:
        return FALLBACK_REFUND_TEXT


__all__ = [
    "REFUND_EMAIL_SUBJECTS",
    "get_emails_dir",
    "load_template",
    "render_template",
    "render_email",
    "refund_subject_for",
    "build_refund_email_context",
    "get_fallback_text",
]
