# tests/infra/test_notifications.py
"""
Tests unitaires pour infra.notifications

Couverture :
    dispatch_notification() : envoi, cible vide ignorée, échec avalé et journalisé
    notify_admin_inbox()    : email + WhatsApp admin
    ChannelNotifier         : canal non configuré → ignoré sans erreur
    messages                : contenu des notifications de demande
"""
import logging
import pytest
from unittest.mock import MagicMock

from crewdesk.infra.notifications import (
    ChannelNotifier, EmailSender, Notification, WhatsAppSender,
    dispatch_notification, new_client_request, notify_admin_inbox, request_status_update,
)
from crewdesk.shared.enums import NotificationChannel, RequestStatus
from tests.conftest import FakeNotifier, make_client, make_crew, make_request

pytestmark = pytest.mark.engine

PAYLOAD = Notification(subject="Hello", text="body")


class TestDispatch:
    def test_envoi(self):
        notifier = FakeNotifier()
        dispatch_notification(notifier, NotificationChannel.EMAIL, "a@b.com", PAYLOAD)
        assert notifier.sent == [(NotificationChannel.EMAIL, "a@b.com", PAYLOAD)]

    def test_cible_vide_ignoree(self):
        notifier = FakeNotifier()
        dispatch_notification(notifier, NotificationChannel.WHATSAPP, None, PAYLOAD)
        assert notifier.sent == []

    def test_echec_avale(self, caplog):
        with caplog.at_level(logging.ERROR):
            dispatch_notification(FakeNotifier(fail=True), NotificationChannel.EMAIL, "a@b.com", PAYLOAD)
        assert "Notification failed" in caplog.text

    def test_boite_admin(self, mocker):
        mocker.patch("crewdesk.infra.notifications.settings.ADMIN_EMAIL", "ops@crewdesk.com")
        mocker.patch("crewdesk.infra.notifications.settings.ADMIN_PHONE", "+971 50 000")
        notifier = FakeNotifier()
        notify_admin_inbox(notifier, PAYLOAD)
        assert [(c, t) for c, t, _ in notifier.sent] == [
            (NotificationChannel.EMAIL, "ops@crewdesk.com"),
            (NotificationChannel.WHATSAPP, "+971 50 000"),
        ]


class TestChannelNotifier:
    def test_canal_non_configure_ignore(self):
        email = EmailSender("smtp.test", 587, None, None, "noreply@crewdesk.com")
        whatsapp = WhatsAppSender(None, None)
        email.send = MagicMock()
        ChannelNotifier(email, whatsapp).notify(NotificationChannel.EMAIL, "a@b.com", PAYLOAD)
        email.send.assert_not_called()

    def test_whatsapp_poste_vers_passerelle(self, mocker):
        post = mocker.patch("crewdesk.infra.notifications.httpx.post")
        sender = WhatsAppSender("https://gateway.test/send", "tok")
        ChannelNotifier(EmailSender("s", 1, None, None, "x"), sender).notify(
            NotificationChannel.WHATSAPP, "+33 6 12", PAYLOAD,
        )
        _, kwargs = post.call_args
        assert kwargs["json"]["to"] == "33612"
        assert kwargs["headers"] == {"Authorization": "Bearer tok"}


class TestMessages:
    def test_nouvelle_demande(self):
        req = make_request()
        n = new_client_request(req, make_client(), make_crew())
        assert "interview" in n.subject
        assert "Blue Ocean Shipping" in n.text

    def test_reponse_approuvee(self):
        req = make_request(status=RequestStatus.APPROVED, admin_response="See you Monday")
        n = request_status_update(req, make_client(), make_crew())
        assert "approved" in n.text
        assert "See you Monday" in n.text
        assert "next steps" in n.text
