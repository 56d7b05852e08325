"""
Email API Routes
Templated and custom email sending
"""

from fastapi import APIRouter
from fastapi.responses import JSONResponse
import logging

from notification_service.config import get_app_config
from notification_service.models.email import EmailType, SendEmailRequest, SendEmailResponse
from notification_service.services.template_service import get_template_service
from notification_service.utils.smtp_client import get_smtp_client, EmailMessage, SMTPError

router = APIRouter()
logger = logging.getLogger(__name__)

SUPPORTED_TYPES = ", ".join(t.value for t in EmailType)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": message})


@router.post("/send-email", response_model=SendEmailResponse)
async def send_email(request: SendEmailRequest):
    """
    Send a signup confirmation, password reset or custom email

    Templated types build their link from `appUrl` (or APP_URL) and the token;
    `name` defaults to the local part of the recipient address.
    """
    if not request.to:
        return _error(400, "Missing required field: to is required")

    token_prefix = request.token[:5] if request.token else ""
    logger.info(f"Sending {request.type or 'custom'} email to: {request.to} with token: {token_prefix}...")

    if request.type in (EmailType.SIGNUP_CONFIRMATION.value, EmailType.PASSWORD_RESET.value):
        template_service = get_template_service()
        app_url = request.app_url or get_app_config().app_url
        link = template_service.build_link(request.type, app_url, request.token)
        rendered = template_service.render_template(request.type, {
            "name": request.name or request.to.split('@')[0],
            "link": link,
        })
        subject = rendered["subject"]
        html_content = rendered["html_content"]
        text_content = rendered["text_content"]

    elif request.type == EmailType.CUSTOM.value:
        if not request.subject or not request.html:
            return _error(400, "For custom emails, subject and html are required")
        subject = request.subject
        html_content = request.html
        text_content = None

    else:
        return _error(400, f"Invalid email type. Supported types: {SUPPORTED_TYPES}")

    try:
        result = await get_smtp_client().send_email(EmailMessage(
            to_emails=[request.to],
            subject=subject,
            html_content=html_content,
            text_content=text_content,
        ))
    except SMTPError as e:
        logger.error(f"Error sending email: {e}")
        return _error(500, str(e) or "Failed to send email")

    logger.info(f"Email sent successfully: {result.get('message_id')}")
    return SendEmailResponse(
        success=True,
        message="Email sent successfully",
        messageId=result.get("message_id"),
    )
