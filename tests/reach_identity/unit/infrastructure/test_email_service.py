"""Unit tests for EmailService."""

import smtplib
from unittest.mock import MagicMock, patch

import pytest
from pydantic import SecretStr

from reach_config.settings import Settings
from reach_identity.infrastructure.email import EmailService

SMTP_PATH = "reach_identity.infrastructure.email.email_service.smtplib.SMTP"
ACTIVATION_LINK = "https://crm.example.com/activate/tok"


def _settings(**overrides):
    values = {
        "_env_file": None,
        "jwt_secret_key": SecretStr("s" * 32),
        "activation_secret_key": SecretStr("a" * 32),
        "smtp_enabled": True,
        "smtp_host": "smtp.example.com",
        "smtp_port": 587,
        "smtp_user": "mailer",
        "smtp_password": SecretStr("pw"),
        "smtp_from_email": "noreply@example.com",
    }
    values.update(overrides)
    return Settings(**values)


def _parts(message):
    plain, rich = message.get_payload()
    return (
        plain.get_payload(decode=True).decode(),
        rich.get_payload(decode=True).decode(),
    )


class TestEmailService:
    """Tests for outbound mail."""

    def test_activation_email_via_starttls(self):
        with patch(SMTP_PATH) as smtp_cls:
            server = MagicMock()
            smtp_cls.return_value.__enter__.return_value = server

            EmailService(_settings()).send_activation_email(
                to_email="a@b.com",
                name="A",
                activation_link=ACTIVATION_LINK,
            )

        smtp_cls.assert_called_once_with("smtp.example.com", 587)
        server.starttls.assert_called_once()
        server.login.assert_called_once_with("mailer", "pw")
        message = server.send_message.call_args.args[0]
        assert message["To"] == "a@b.com"
        assert message["Subject"] == "Activate Your Account"
        assert message["From"] == "Reach CRM <noreply@example.com>"
        assert ACTIVATION_LINK in message.as_string()

    def test_password_reset_email(self):
        with patch(SMTP_PATH) as smtp_cls:
            server = MagicMock()
            smtp_cls.return_value.__enter__.return_value = server

            EmailService(_settings()).send_password_reset_email(
                to_email="a@b.com",
                name="A",
                reset_link="https://crm.example.com/reset-password?token=abc",
            )

        message = server.send_message.call_args.args[0]
        assert message["Subject"] == "Reset Your Password"

    def test_disabled_smtp_sends_nothing(self):
        with patch(SMTP_PATH) as smtp_cls:
            EmailService(_settings(smtp_enabled=False)).send_activation_email(
                to_email="a@b.com",
                name="A",
                activation_link=ACTIVATION_LINK,
            )

        smtp_cls.assert_not_called()

    def test_smtp_failure_propagates(self):
        with patch(SMTP_PATH) as smtp_cls:
            server = MagicMock()
            server.send_message.side_effect = smtplib.SMTPException("rejected")
            smtp_cls.return_value.__enter__.return_value = server

            with pytest.raises(smtplib.SMTPException):
                EmailService(_settings()).send_activation_email(
                    to_email="a@b.com",
                    name="A",
                    activation_link=ACTIVATION_LINK,
                )

    def test_activation_html_escapes_display_name(self):
        name = '<a href="https://evil.test">Click</a>'
        with patch(SMTP_PATH) as smtp_cls:
            server = MagicMock()
            smtp_cls.return_value.__enter__.return_value = server

            EmailService(_settings()).send_activation_email(
                to_email="a@b.com",
                name=name,
                activation_link=ACTIVATION_LINK,
            )

        text, html_body = _parts(server.send_message.call_args.args[0])
        assert "<a href=\"https://evil.test\">" not in html_body
        assert "&lt;a href=&quot;https://evil.test&quot;&gt;Click&lt;/a&gt;" in html_body
        assert f'href="{ACTIVATION_LINK}"' in html_body
        assert name in text

    def test_reset_html_escapes_display_name_and_link(self):
        with patch(SMTP_PATH) as smtp_cls:
            server = MagicMock()
            smtp_cls.return_value.__enter__.return_value = server

            EmailService(_settings()).send_password_reset_email(
                to_email="a@b.com",
                name="<b>Eve</b>",
                reset_link="https://crm.example.com/reset-password?token=abc&x=1",
            )

        _, html_body = _parts(server.send_message.call_args.args[0])
        assert "<b>Eve</b>" not in html_body
        assert "Hi &lt;b&gt;Eve&lt;/b&gt;," in html_body
        assert "token=abc&amp;x=1" in html_body
