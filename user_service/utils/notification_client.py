"""
Notification Service Client
HTTP client for communication with notification-service
"""

import httpx
import logging
from typing import Dict, Any, Optional

from shared.utils.logger import mask_token
from user_service.config import get_config

logger = logging.getLogger(__name__)


class NotificationError(Exception):
    """Raised when the notification service cannot send an email"""
    pass


class NotificationClient:
    """HTTP client for notification service"""

    def __init__(
        self,
        base_url: Optional[str] = None,
        app_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        config = get_config()
        self.base_url = base_url or config.notification_service_url
        self.app_url = app_url or config.app_url
        self.timeout = httpx.Timeout(timeout or config.notification_timeout)
        self._transport = transport

    async def send_account_email(
        self,
        email_type: str,
        to_email: str,
        name: Optional[str],
        token: str
    ) -> Dict[str, Any]:
        """
        Send a templated account email via notification service

        Args:
            email_type: signup_confirmation or password_reset
            to_email: Recipient address
            name: Greeting name; the service falls back to the address' local part
            token: Verification token embedded in the link

        Returns:
            Response from notification service
        """
        payload = {
            "to": to_email,
            "type": email_type,
            "name": name,
            "token": token,
            "appUrl": self.app_url
        }

        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self._transport
            ) as client:
                response = await client.post('/api/send-email', json=payload)
                response.raise_for_status()

                result = response.json()
                if not isinstance(result, dict):
                    raise ValueError("response body is not a JSON object")
                logger.info(
                    f"✅ {email_type} email sent to {to_email} "
                    f"(token {mask_token(token)}): {result.get('messageId')}"
                )
                return result

        except httpx.HTTPStatusError as e:
            logger.error(f"❌ HTTP error sending {email_type} email: {e.response.status_code} - {e.response.text}")
            raise NotificationError(f"Failed to send email: HTTP {e.response.status_code}") from e
        except httpx.RequestError as e:
            logger.error(f"❌ Request error sending {email_type} email: {e}")
            raise NotificationError(f"Failed to connect to notification service: {str(e)}") from e
        except ValueError as e:
            logger.error(f"❌ Invalid response sending {email_type} email: {e}")
            raise NotificationError("Invalid response from notification service") from e

    async def send_confirmation_email(self, to_email: str, name: Optional[str], token: str) -> Dict[str, Any]:
        return await self.send_account_email("signup_confirmation", to_email, name, token)

    async def send_password_reset_email(self, to_email: str, name: Optional[str], token: str) -> Dict[str, Any]:
        return await self.send_account_email("password_reset", to_email, name, token)


_notification_client: Optional[NotificationClient] = None


def get_notification_client() -> NotificationClient:
    """Get notification client instance"""
    global _notification_client
    if _notification_client is None:
        _notification_client = NotificationClient()
    return _notification_client
