"""
Email Service using SMTP
"""
import logging
import smtplib
import ssl
from email.mime.text import MIMEText

from app.config import settings
from app.exceptions import NotificationError

logger = logging.getLogger(__name__)


class EmailService:
    """Service to send booking notification emails over SMTP"""

    def __init__(
        self,
        host: str | None = None,
        port: int | None = None,
        username: str | None = None,
        password: str | None = None,
        from_address: str | None = None,
        use_tls: bool | None = None,
        timeout: float | None = None,
    ):
        self.host = settings.smtp_host if host is None else host
        self.port = settings.smtp_port if port is None else port
        self.username = settings.smtp_user if username is None else username
        self.password = settings.smtp_password if password is None else password
        self.from_address = settings.email_from_address if from_address is None else from_address
        self.use_tls = settings.smtp_use_tls if use_tls is None else use_tls
        self.timeout = settings.smtp_timeout if timeout is None else timeout

    @property
    def configured(self) -> bool:
        return bool(self.host)

    def _build_message(self, to_email: str, subject: str, body: str) -> MIMEText:
        msg = MIMEText(body, "html", "utf-8")
        msg["Subject"] = subject
        msg["From"] = self.from_address
        msg["To"] = to_email
        return msg

    def send_email(self, to_email: str, subject: str, body: str) -> dict:
        """
        Send a single email.

        Opens a fresh SMTP connection for every message.

        Args:
            to_email: Recipient address
            subject: Message subject
            body: Message body

        Returns:
            dict with send status

        Raises:
            NotificationError: the transport failed or timed out
        """
        if not self.configured:
            logger.info("SMTP not configured - email to %s not delivered: %s", to_email, subject)
            return {
                "status": "success",
                "to": to_email,
                "subject": subject,
                "note": "SMTP not configured - running in test mode",
            }

        msg = self._build_message(to_email, subject, body)
        try:
            with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as server:
                if self.use_tls:
                    server.starttls(context=ssl.create_default_context())
                if self.username:
                    server.login(self.username, self.password)
                server.sendmail(self.from_address, [to_email], msg.as_string())
        except (smtplib.SMTPException, OSError, UnicodeError) as e:
            logger.error("Failed to send email to %s via %s:%s: %s", to_email, self.host, self.port, e)
            raise NotificationError(f"Error sending email to {to_email}: {e}") from e

        logger.info("Email sent to %s: %s", to_email, subject)
        return {"status": "success", "to": to_email, "subject": subject}


# Global instance
_email_service = None


def get_email_service() -> EmailService:
    """Get or create email service instance"""
    global _email_service
    if _email_service is None:
        _email_service = EmailService()
    return _email_service
