# backend/userapi/services/email/sender.py
import asyncio
import logging
import smtplib
import ssl
from email.message import EmailMessage

from userapi.core.config import settings
from userapi.core.errors import EmailError
from userapi.core.logging import redact_email

logger = logging.getLogger(__name__)


class EmailService:
    """Sends account activation and password reset emails over SMTP.

    Without an SMTP host the message is only logged (dev mode).
    Delivery failures raise EmailError so callers can roll back.
    """

    def __init__(
        self,
        smtp_host: str | None = None,
        smtp_port: int = 587,
        smtp_user: str | None = None,
        smtp_password: str | None = None,
        smtp_use_tls: bool = True,
        mail_from: str | None = None,
        frontend_url: str | None = None,
    ):
        self.smtp_host = smtp_host
        self.smtp_port = smtp_port
        self.smtp_user = smtp_user
        self.smtp_password = smtp_password
        self.smtp_use_tls = smtp_use_tls
        self.mail_from = mail_from or settings.mail_from
        self.frontend_url = (frontend_url or settings.frontend_url).rstrip("/")

    @classmethod
    def from_settings(cls) -> "EmailService":
        return cls(
            smtp_host=settings.smtp_host,
            smtp_port=settings.smtp_port,
            smtp_user=settings.smtp_user,
            smtp_password=settings.smtp_password,
            smtp_use_tls=settings.smtp_use_tls,
            mail_from=settings.mail_from,
            frontend_url=settings.frontend_url,
        )

    @property
    def is_configured(self) -> bool:
        return bool(self.smtp_host)

    async def send_account_activation(self, email: str, token: str) -> None:
        link = f"{self.frontend_url}/#/login?token={token}"
        html = (
            "<div><b>Please click below link to activate your account</b></div>"
            f'<div><a href="{link}">Activate</a></div>'
        )
        await self._send(email, "Account Activation", html)

    async def send_password_reset(self, email: str, token: str) -> None:
        link = f"{self.frontend_url}/#/password-reset?reset={token}"
        html = (
            "<div><b>Please click below link to reset your password</b></div>"
            f'<div><a href="{link}">Reset</a></div>'
        )
        await self._send(email, "Password Reset", html)

    async def _send(self, to_email: str, subject: str, html_body: str) -> None:
        if not self.is_configured:
            logger.info(f"Email (dev mode) to {redact_email(to_email)}: {subject}")
            logger.debug(html_body)
            return

        msg = EmailMessage()
        msg["Subject"] = subject
        msg["From"] = self.mail_from
        msg["To"] = to_email
        msg.set_content(html_body, subtype="html")

        try:
            await asyncio.to_thread(self._deliver, msg)
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"Failed to send '{subject}' to {redact_email(to_email)}: {e}")
            raise EmailError() from e

        logger.info(f"Sent '{subject}' to {redact_email(to_email)}")

    def _deliver(self, msg: EmailMessage) -> None:
        context = ssl.create_default_context()
        if self.smtp_use_tls:
            with smtplib.SMTP(self.smtp_host, self.smtp_port, timeout=30) as server:
                server.starttls(context=context)
                if self.smtp_user and self.smtp_password:
                    server.login(self.smtp_user, self.smtp_password)
                server.send_message(msg)
        else:
            with smtplib.SMTP_SSL(self.smtp_host, self.smtp_port, context=context, timeout=30) as server:
                if self.smtp_user and self.smtp_password:
                    server.login(self.smtp_user, self.smtp_password)
                server.send_message(msg)
