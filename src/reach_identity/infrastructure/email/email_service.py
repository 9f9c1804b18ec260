import html
import logging
import smtplib
import ssl
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

from reach_config.settings import Settings

logger = logging.getLogger(__name__)

ACTIVATION_SUBJECT = "Activate Your Account"

ACTIVATION_TEXT = """Hello {name},

Thank you for registering with Reach CRM!

Open the link below to activate your account (valid for 24 hours):
{activation_link}

Regards,
Reach CRM Team
"""

ACTIVATION_HTML = """
<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
</head>
<body style="font-family: Arial, sans-serif; padding: 20px; color: #333;">
    <h2>Hello {name},</h2>
    <p>Thank you for registering! Click below to activate your account:</p>
    <a href="{activation_link}" style="padding: 12px 20px; background-color: #033304d4; color: white; text-decoration: none; font-size: 16px; border-radius: 6px;">Activate Account</a>
    <p style="margin-top: 20px;">If the button doesn't work, click the link below:</p>
    <p style="word-break: break-all;">{activation_link}</p>
    <p style="margin-top: 30px;">Regards,<br/>Reach CRM Team</p>
</body>
</html>
"""

PASSWORD_RESET_SUBJECT = "Reset Your Password"

PASSWORD_RESET_TEXT = """Hi {name},

We received a request to reset your Reach CRM password.

Open the link below to choose a new password (valid for 1 hour):
{reset_link}

If you didn't request this, you can safely ignore this email.

Regards,
Reach CRM Team
"""

PASSWORD_RESET_HTML = """
<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
</head>
<body style="font-family: Arial, sans-serif; padding: 20px; background: #f7f7f7;">
    <div style="max-width: 600px; margin: auto; background: #ffffff; padding: 25px; border-radius: 8px;">
        <h2 style="color: #333; text-align: center;">Reset Your Password</h2>
        <p style="color: #555; font-size: 15px;">Hi {name},</p>
        <p style="color: #555; font-size: 15px; line-height: 1.6;">We received a request to reset your password. Click the button below to choose a new password. This link is valid for 1 hour.</p>
        <div style="text-align: center; margin: 30px 0;">
            <a href="{reset_link}" style="background: #033304d4; padding: 12px 20px; color: #fff; text-decoration: none; border-radius: 5px; font-weight: bold;">Reset Password</a>
        </div>
        <p style="color: #555; font-size: 14px;">If the button doesn't work, copy and paste the link below into your browser:</p>
        <p style="word-break: break-all; font-size: 14px; color: #033304d4;">{reset_link}</p>
        <p style="color: #555; font-size: 14px; margin-top: 25px;">If you didn't request this, you can safely ignore this email.</p>
        <p style="color: #333; font-size: 14px; margin-top: 40px;">Regards,<br/><strong>Reach CRM Team</strong></p>
    </div>
</body>
</html>
"""


class EmailService:
    """Outbound mail for account activation and password reset.

    Sending is blocking (smtplib); async callers run it in a worker thread.
    When SMTP is disabled the link is logged instead of sent.
    """

    def __init__(self, settings: Settings):
        self._settings = settings

    def _create_message(
        self,
        to_email: str,
        subject: str,
        text_body: str,
        html_body: str | None = None,
    ) -> MIMEMultipart:
        msg = MIMEMultipart("alternative")
        msg["Subject"] = subject
        msg["From"] = f"{self._settings.smtp_from_name} <{self._settings.smtp_from_email}>"
        msg["To"] = to_email

        msg.attach(MIMEText(text_body, "plain"))
        if html_body:
            msg.attach(MIMEText(html_body, "html"))

        return msg

    def _send_email(self, to_email: str, message: MIMEMultipart) -> None:
        if not self._settings.smtp_host:
            logger.error("SMTP host not configured")
            return

        smtp_password = (
            self._settings.smtp_password.get_secret_value()
            if self._settings.smtp_password
            else ""
        )

        try:
            if self._settings.smtp_use_tls and not self._settings.smtp_starttls:
                # Implicit TLS (port 465)
                context = ssl.create_default_context()
                with smtplib.SMTP_SSL(
                    self._settings.smtp_host,
                    self._settings.smtp_port,
                    context=context,
                ) as server:
                    if self._settings.smtp_user:
                        server.login(self._settings.smtp_user, smtp_password)
                    server.send_message(message)
            else:
                # STARTTLS (port 587) or plain
                with smtplib.SMTP(
                    self._settings.smtp_host,
                    self._settings.smtp_port,
                ) as server:
                    if self._settings.smtp_starttls:
                        context = ssl.create_default_context()
                        server.starttls(context=context)
                    if self._settings.smtp_user:
                        server.login(self._settings.smtp_user, smtp_password)
                    server.send_message(message)

            logger.info("Email sent to %s", to_email)

        except (smtplib.SMTPException, OSError) as e:
            logger.error("Failed to send email to %s: %s", to_email, e)
            raise

    def send_activation_email(
        self,
        to_email: str,
        name: str,
        activation_link: str,
    ) -> None:
        if not self._settings.smtp_enabled:
            logger.warning(
                "SMTP disabled, skipping activation email to %s (link: %s)",
                to_email,
                activation_link,
            )
            return

        message = self._create_message(
            to_email=to_email,
            subject=ACTIVATION_SUBJECT,
            text_body=ACTIVATION_TEXT.format(
                name=name,
                activation_link=activation_link,
            ),
            html_body=ACTIVATION_HTML.format(
                name=html.escape(name),
                activation_link=html.escape(activation_link),
            ),
        )
        self._send_email(to_email, message)

    def send_password_reset_email(
        self,
        to_email: str,
        name: str,
        reset_link: str,
    ) -> None:
        if not self._settings.smtp_enabled:
            logger.warning(
                "SMTP disabled, skipping password reset email to %s (link: %s)",
                to_email,
                reset_link,
            )
            return

        message = self._create_message(
            to_email=to_email,
            subject=PASSWORD_RESET_SUBJECT,
            text_body=PASSWORD_RESET_TEXT.format(name=name, reset_link=reset_link),
            html_body=PASSWORD_RESET_HTML.format(
                name=html.escape(name),
                reset_link=html.escape(reset_link),
            ),
        )
        self._send_email(to_email, message)
