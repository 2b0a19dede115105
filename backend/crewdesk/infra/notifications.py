# infra/notifications.py
"""
Notifications sortantes (email SMTP, WhatsApp via passerelle HTTP).

Contrat : notify(channel, target, payload). Aucune garantie de livraison.

dispatch_notification() est la seule porte d'entrée utilisée par les
services, toujours via BackgroundTasks (donc après la réponse et le commit).
Elle ne lève jamais : un échec est journalisé puis ignoré.

Le Notifier est injecté (get_notifier) - jamais de singleton global.
"""
import logging
import re
import smtplib
from dataclasses import dataclass
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import Optional, Protocol

import httpx

from crewdesk.core.config import settings
from crewdesk.shared.enums import NotificationChannel

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Notification:
    subject: str
    text: str
    html: Optional[str] = None


class Notifier(Protocol):
    def notify(self, channel: NotificationChannel, target: str, payload: Notification) -> None: ...


# ── Canaux ────────────────────────────────────────────────────

class EmailSender:

    def __init__(self, server: str, port: int, user: Optional[str], password: Optional[str], sender: str):
        self.server = server
        self.port = port
        self.user = user
        self.password = password
        self.sender = sender

    @property
    def configured(self) -> bool:
        return bool(self.user and self.password)

    def send(self, to_email: str, payload: Notification) -> None:
        message = MIMEMultipart("alternative")
        message["Subject"] = payload.subject
        message["From"] = f"CrewDesk <{self.sender}>"
        message["To"] = to_email
        message.attach(MIMEText(payload.text, "plain"))
        if payload.html:
            message.attach(MIMEText(payload.html, "html"))

        with smtplib.SMTP(self.server, self.port, timeout=10) as server:
            server.starttls()
            server.login(self.user, self.password)
            server.sendmail(self.sender, to_email, message.as_string())


class WhatsAppSender:

    def __init__(self, api_url: Optional[str], api_token: Optional[str]):
        self.api_url = api_url
        self.api_token = api_token

    @property
    def configured(self) -> bool:
        return bool(self.api_url)

    def send(self, phone: str, payload: Notification) -> None:
        headers = {"Authorization": f"Bearer {self.api_token}"} if self.api_token else {}
        response = httpx.post(
            self.api_url,
            json={"to": re.sub(r"\D", "", phone), "message": f"*{payload.subject}*\n\n{payload.text}"},
            headers=headers,
            timeout=10.0,
        )
        response.raise_for_status()


class ChannelNotifier:
    """Aiguille chaque notification vers son canal ; canal non configuré → ignoré."""

    def __init__(self, email: EmailSender, whatsapp: WhatsAppSender):
        self.email = email
        self.whatsapp = whatsapp

    def notify(self, channel: NotificationChannel, target: str, payload: Notification) -> None:
        sender = self.email if channel == NotificationChannel.EMAIL else self.whatsapp
        if not sender.configured:
            logger.info("Notification channel %s not configured, skipping: %s", channel.value, payload.subject)
            return
        sender.send(target, payload)
        logger.info("Notification sent via %s: %s", channel.value, payload.subject)


def get_notifier() -> Notifier:
    """Dépendance FastAPI - surchargée dans les tests."""
    return ChannelNotifier(
        email=EmailSender(
            settings.SMTP_SERVER, settings.SMTP_PORT,
            settings.SMTP_USER, settings.SMTP_PASSWORD, settings.EMAIL_FROM,
        ),
        whatsapp=WhatsAppSender(settings.WHATSAPP_API_URL, settings.WHATSAPP_API_TOKEN),
    )


# ── Envoi best-effort ─────────────────────────────────────────

def dispatch_notification(
    notifier: Notifier,
    channel: NotificationChannel,
    target: Optional[str],
    payload: Notification,
) -> None:
    if not target:
        logger.info("No %s target for notification: %s", channel.value, payload.subject)
        return
    try:
        notifier.notify(channel, target, payload)
    except Exception:
        logger.exception("Notification failed via %s: %s", channel.value, payload.subject)


def notify_admin_inbox(notifier: Notifier, payload: Notification) -> None:
    dispatch_notification(notifier, NotificationChannel.EMAIL, settings.ADMIN_EMAIL, payload)
    dispatch_notification(notifier, NotificationChannel.WHATSAPP, settings.ADMIN_PHONE, payload)


# ── Messages ──────────────────────────────────────────────────

def _value(v) -> str:
    return str(getattr(v, "value", v))


def _html(title: str, intro: str, rows: dict, outro: str) -> str:
    items = "".join(f"<li><strong>{k}:</strong> {v}</li>" for k, v in rows.items())
    return f"""
    <html>
      <body style="font-family: Arial, sans-serif; color: #0F172A;">
        <h2>{title}</h2>
        <p>{intro}</p>
        <ul>{items}</ul>
        <p>{outro}</p>
        <p style="font-size: 12px; color: #64748B;">CrewDesk</p>
      </body>
    </html>
    """


def _text(intro: str, rows: dict, outro: str) -> str:
    lines = [intro, ""] + [f"{k}: {v}" for k, v in rows.items()] + ["", outro]
    return "\n".join(lines)


def new_crew_application(crew) -> Notification:
    rows = {
        "Name": crew.full_name,
        "Email": crew.email,
        "Phone": crew.phone,
        "Rank": _value(crew.rank),
        "Nationality": crew.nationality,
        "Availability Date": crew.availability_date,
    }
    intro = "A new crew member has registered:"
    outro = "Please review the application in the admin dashboard."
    return Notification(
        subject=f"New Crew Registration - {crew.full_name}",
        text=_text(intro, rows, outro),
        html=_html("New Crew Registration", intro, rows, outro),
    )


def crew_registration_confirmation(crew) -> Notification:
    rows = {
        "Name": crew.full_name,
        "Rank": _value(crew.rank),
        "Nationality": crew.nationality,
        "Availability Date": crew.availability_date,
    }
    intro = f"Dear {crew.full_name}, your application has been received and is being reviewed."
    outro = "We will get back to you within 2-3 business days."
    return Notification(
        subject="Registration Confirmation",
        text=_text(intro, rows, outro),
        html=_html("Registration Confirmed", intro, rows, outro),
    )


def crew_status_update(crew) -> Notification:
    rows = {
        "Name": crew.full_name,
        "Rank": _value(crew.rank),
        "New Status": _value(crew.status).replace("_", " "),
    }
    intro = f"Dear {crew.full_name}, the status of your application has been updated."
    outro = "If you have any questions, please contact us."
    return Notification(
        subject="Application Status Update",
        text=_text(intro, rows, outro),
        html=_html("Application Status Update", intro, rows, outro),
    )


def new_client_request(request, client, crew) -> Notification:
    rows = {
        "Client": client.company_name,
        "Contact Person": client.contact_person,
        "Request Type": _value(request.request_type),
        "Crew Member": f"{crew.full_name} ({_value(crew.rank)})",
        "Urgency": _value(request.urgency),
    }
    if request.message:
        rows["Message"] = request.message
    intro = "A client has made a new request:"
    outro = "Please review and respond to this request in the admin dashboard."
    return Notification(
        subject=f"New Client Request - {_value(request.request_type)}",
        text=_text(intro, rows, outro),
        html=_html("New Client Request", intro, rows, outro),
    )


def request_status_update(request, client, crew) -> Notification:
    status = _value(request.status)
    rows = {
        "Request Type": _value(request.request_type),
        "Crew Member": f"{crew.full_name} ({_value(crew.rank)})",
        "Status": status,
    }
    if request.admin_response:
        rows["Response"] = request.admin_response
    intro = f"Dear {client.contact_person}, your request has been {status}."
    outro = (
        "Please contact us to proceed with the next steps."
        if status == "approved"
        else "If you have any questions, please contact us."
    )
    return Notification(
        subject=f"Request Update - {_value(request.request_type)}",
        text=_text(intro, rows, outro),
        html=_html("Request Status Update", intro, rows, outro),
    )
