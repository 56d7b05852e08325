"""
SMTP Client
Async SMTP transport for outgoing account emails
"""

import aiosmtplib
from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart
from email.utils import make_msgid
from typing import List, Optional, Dict, Any
import logging
from datetime import datetime, timezone
import time

from notification_service.config import get_smtp_config

logger = logging.getLogger(__name__)


class SMTPError(Exception):
    """Custom SMTP exception"""
    pass


class EmailMessage:
    """Email message container"""

    def __init__(
        self,
        to_emails: List[str],
        subject: str,
        html_content: Optional[str] = None,
        text_content: Optional[str] = None,
        from_email: Optional[str] = None,
        headers: Optional[Dict[str, str]] = None
    ):
        self.to_emails = to_emails if isinstance(to_emails, list) else [to_emails]
        self.subject = subject
        self.html_content = html_content
        self.text_content = text_content
        self.from_email = from_email
        self.headers = headers or {}

        # Validation
        if not self.to_emails:
            raise ValueError("At least one recipient email is required")
        if not self.subject:
            raise ValueError("Subject is required")
        if not self.html_content and not self.text_content:
            raise ValueError("Either HTML or text content is required")


class SMTPClient:
    """SMTP client; one connection per message"""

    def __init__(self, config=None):
        self.config = config or get_smtp_config()

    def _connect_options(self) -> Dict[str, Any]:
        return {
            "hostname": self.config.smtp_host,
            "port": self.config.smtp_port,
            "use_tls": self.config.smtp_use_tls,
            "start_tls": False if self.config.smtp_use_tls else self.config.smtp_start_tls,
            "timeout": self.config.smtp_timeout,
        }

    async def send_email(self, email_message: EmailMessage) -> Dict[str, Any]:
        """
        Send a single email

        Args:
            email_message: Email message to send

        Returns:
            Dictionary with send result

        Raises:
            SMTPError: when the relay rejects or cannot be reached
        """
        mime_message = self._create_mime_message(email_message)

        try:
            await self._send_mime_message(mime_message, email_message.to_emails)
        except Exception as e:
            logger.error(f"❌ Email send to {', '.join(email_message.to_emails)} failed: {e}")
            raise SMTPError(str(e)) from e

        logger.info(f"📧 Email sent to {', '.join(email_message.to_emails)}")
        return {
            "success": True,
            "message_id": mime_message['Message-ID'],
            "recipients": email_message.to_emails,
            "sent_at": datetime.now(timezone.utc).isoformat()
        }

    def _create_mime_message(self, email_message: EmailMessage) -> MIMEMultipart:
        """Create MIME message from EmailMessage"""
        from_email = email_message.from_email or self.config.email_from

        if email_message.html_content and email_message.text_content:
            msg = MIMEMultipart('alternative')
        else:
            msg = MIMEMultipart()

        msg['From'] = from_email
        msg['To'] = ', '.join(email_message.to_emails)
        msg['Subject'] = email_message.subject
        msg['Message-ID'] = make_msgid(domain=from_email.split('@')[-1])

        for key, value in email_message.headers.items():
            msg[key] = value

        if email_message.text_content:
            msg.attach(MIMEText(email_message.text_content, 'plain', 'utf-8'))

        if email_message.html_content:
            msg.attach(MIMEText(email_message.html_content, 'html', 'utf-8'))

        return msg

    async def _send_mime_message(self, message: MIMEMultipart, recipients: List[str]) -> Any:
        """Send MIME message via SMTP"""
        smtp = aiosmtplib.SMTP(**self._connect_options())
        await smtp.connect()
        try:
            if self.config.smtp_user and self.config.smtp_pass:
                await smtp.login(self.config.smtp_user, self.config.smtp_pass)

            return await smtp.send_message(message, recipients=recipients)
        finally:
            try:
                await smtp.quit()
            except aiosmtplib.SMTPException as e:
                logger.debug(f"SMTP quit failed: {e}")

    async def verify_connection(self) -> Dict[str, Any]:
        """Open a connection (and authenticate when configured) without sending"""
        try:
            smtp = aiosmtplib.SMTP(**self._connect_options())

            start_time = time.time()
            await smtp.connect()
            connection_time = time.time() - start_time

            if self.config.smtp_user and self.config.smtp_pass:
                await smtp.login(self.config.smtp_user, self.config.smtp_pass)

            await smtp.quit()

            return {
                "success": True,
                "connection_time": round(connection_time, 3),
                "host": self.config.smtp_host,
                "port": self.config.smtp_port,
            }

        except Exception as e:
            return {
                "success": False,
                "error": str(e),
                "host": self.config.smtp_host,
                "port": self.config.smtp_port
            }


# Global SMTP client instance
_smtp_client: Optional[SMTPClient] = None


def get_smtp_client() -> SMTPClient:
    """Get SMTP client instance"""
    global _smtp_client
    if _smtp_client is None:
        _smtp_client = SMTPClient()
    return _smtp_client
