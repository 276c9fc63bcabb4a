"""Approval emails for newly accepted employees, delivered through Resend."""
from __future__ import annotations

from dataclasses import dataclass

from django.conf import settings

import resend


@dataclass(frozen=True)
class ApprovalEmail:
    recipient: str
    recipient_name: str
    position: str = ""
    location: str = ""


class ApprovalEmailError(RuntimeError):
    """Raised when an employee approval email cannot be sent."""


def _require_settings() -> None:
    if not settings.RESEND_API_KEY:
        raise ApprovalEmailError("Resend API key is not configured.")
    if not settings.RESEND_FROM_EMAIL:
        raise ApprovalEmailError("Resend from email address is not configured.")


def _dashboard_url() -> str:
    base = (settings.FRONTEND_BASE_URL or "").rstrip("/")
    return f"{base}/login" if base else ""


def _build_text_body(content: ApprovalEmail) -> str:
    company = settings.COMPANY_NAME
    lines = [
        f"Hi {content.recipient_name},",
        "",
        f"Great news! Your application to join {company} has been approved.",
    ]
    if content.position:
        lines.append(f"Position: {content.position}")
    if content.location:
        lines.append(f"Location: {content.location}")
    dashboard_url = _dashboard_url()
    if dashboard_url:
        lines.extend(["", f"Sign in to your employee dashboard: {dashboard_url}"])
    lines.extend(["", "Welcome to the team,", company])
    return "\n".join(lines)


def _build_html_body(content: ApprovalEmail) -> str:
    company = settings.COMPANY_NAME
    paragraphs = [
        f"<p>Hi {content.recipient_name},</p>",
        f"<p>Great news! Your application to join <strong>{company}</strong> has been approved.</p>",
    ]
    details = []
    if content.position:
        details.append(f"<li>Position: {content.position}</li>")
    if content.location:
        details.append(f"<li>Location: {content.location}</li>")
    if details:
        paragraphs.append(f"<ul>{''.join(details)}</ul>")
    dashboard_url = _dashboard_url()
    if dashboard_url:
        paragraphs.append(
            f'<p><a href="{dashboard_url}" style="color:#b45309;font-weight:600;">Open your dashboard</a></p>'
        )
    paragraphs.append(f"<p>Welcome to the team,<br />{company}</p>")
    return "".join(paragraphs)


def send_approval_email(content: ApprovalEmail) -> None:
    """Tell an employee that their application was approved."""

    _require_settings()

    resend.api_key = settings.RESEND_API_KEY

    payload = {
        "from": settings.RESEND_FROM_EMAIL,
        "to": content.recipient,
        "subject": f"Welcome to {settings.COMPANY_NAME}! Your application has been approved",
        "text": _build_text_body(content),
        "html": _build_html_body(content),
    }
    if settings.RESEND_REPLY_TO:
        payload["reply_to"] = settings.RESEND_REPLY_TO

    try:
        resend.Emails.send(payload)
    except Exception as exc:  # pragma: no cover - network failure or API error
        raise ApprovalEmailError("Unable to send employee approval email.") from exc
