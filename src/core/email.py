"""Email utilities for sending HTML emails with plain-text fallback."""

from __future__ import annotations

import logging
from typing import Sequence

from django.conf import settings
from django.core.mail import EmailMultiAlternatives, get_connection
from django.template.loader import render_to_string

logger = logging.getLogger("backoffice")


def send_templated_email(
    *,
    subject: str,
    template_name: str,
    context: dict,
    recipient_list: Sequence[str],
    attachments: Sequence[tuple[str, bytes, str]] = (),
    from_email: str | None = None,
    fail_silently: bool = False,
) -> int:
    """Render and send an HTML email with a plain-text fallback.

    *template_name* is the base name **without** extension,
    e.g. ``"emails/daily_report"``.  The function appends ``.html``
    and ``.txt`` automatically.

    *attachments* is a sequence of ``(filename, content, mimetype)``.
    The SMTP connection honours ``settings.EMAIL_TIMEOUT`` so a stalled
    server raises instead of hanging the caller.

    Returns the number of emails successfully sent (0 or 1).
    """
    sender = from_email or getattr(settings, "DEFAULT_FROM_EMAIL", None)

    text_body = render_to_string(f"{template_name}.txt", context).strip()
    html_body = render_to_string(f"{template_name}.html", context)

    connection = get_connection(
        fail_silently=fail_silently,
        timeout=getattr(settings, "EMAIL_TIMEOUT", None),
    )
    msg = EmailMultiAlternatives(
        subject=subject,
        body=text_body,
        from_email=sender,
        to=list(recipient_list),
        connection=connection,
    )
    msg.attach_alternative(html_body, "text/html")
    for filename, content, mimetype in attachments:
        msg.attach(filename, content, mimetype)
    return msg.send(fail_silently=fail_silently)
