"""
Template Service
Jinja2 file rendering for account emails
"""

import os
import re
import logging
from typing import Dict, Any, Optional
from datetime import datetime

from jinja2 import Environment, FileSystemLoader, select_autoescape, TemplateNotFound

from notification_service.config import get_app_config

logger = logging.getLogger(__name__)


# Fixed subjects for the templated email types
TEMPLATE_SUBJECTS = {
    "signup_confirmation": "Welcome to GO AI HUB – Vendor Registration Successful",
    "password_reset": "Password Reset – GO AI HUB",
}

# Path in the link each templated email points at
TEMPLATE_LINK_PATHS = {
    "signup_confirmation": "confirm-email",
    "password_reset": "reset-password",
}


class TemplateService:
    """Template service for file-based Jinja2 templates"""

    def __init__(self, templates_dir: str = None):
        app_config = get_app_config()

        self.templates_dir = templates_dir or app_config.templates_dir or os.path.join(
            os.path.dirname(__file__), "..", "templates"
        )

        self.jinja_env = Environment(
            loader=FileSystemLoader(self.templates_dir),
            autoescape=select_autoescape(['html', 'xml', 'j2']),
            trim_blocks=True,
            lstrip_blocks=True
        )

        # Default template variables available to all templates
        self.default_variables = {
            "brand_color": "#00afaf",
            "support_email": "ai.support@go.com.sa",
            "contact_email": "info@go.com.sa",
            "contact_email_ar": "info@goaihub.com",
            "website_url": "https://www.goaihub.ai",
            "website_label": "www.goaihub.ai",
            "current_year": datetime.now().year,
        }

    def build_link(self, template_name: str, app_url: str, token: Optional[str]) -> str:
        """Link embedded in a templated email"""
        path = TEMPLATE_LINK_PATHS[template_name]
        return f"{app_url.rstrip('/')}/{path}?token={token or ''}"

    def render_template(self, template_name: str, variables: Dict[str, Any]) -> Dict[str, str]:
        """
        Render a templated email

        Args:
            template_name: signup_confirmation or password_reset
            variables: name and link

        Returns:
            subject, html_content and text_content
        """
        if template_name not in TEMPLATE_SUBJECTS:
            raise ValueError(f"Template '{template_name}' not found")

        template_vars = {
            **self.default_variables,
            **variables
        }

        try:
            html_template = self.jinja_env.get_template(f"account/{template_name}.html.j2")
        except TemplateNotFound:
            logger.error(f"HTML template not found: account/{template_name}.html.j2")
            raise ValueError(f"No template file found for '{template_name}'")

        html_content = html_template.render(**template_vars)

        return {
            "subject": TEMPLATE_SUBJECTS[template_name],
            "html_content": html_content,
            "text_content": self._html_to_text(html_content)
        }

    def _html_to_text(self, html: str) -> str:
        """Convert HTML to plain text (basic conversion)"""
        text = re.sub(r'<br\s*/?>', '\n', html, flags=re.IGNORECASE)
        text = re.sub(r'<p[^>]*>', '\n', text, flags=re.IGNORECASE)
        text = re.sub(r'</p>', '\n', text, flags=re.IGNORECASE)
        text = re.sub(r'<a [^>]*href="([^"]+)"[^>]*>[^<]*</a>', r'\1', text, flags=re.IGNORECASE)
        text = re.sub(r'<[^>]+>', '', text)

        text = text.replace('&amp;', '&')
        text = text.replace('&lt;', '<')
        text = text.replace('&gt;', '>')
        text = text.replace('&nbsp;', ' ')
        text = text.replace('&quot;', '"')
        text = text.replace('&#34;', '"')
        text = text.replace('&#39;', "'")

        text = re.sub(r'[ \t]+\n', '\n', text)
        text = re.sub(r'\n\s*\n', '\n\n', text)
        return text.strip()


# Global instance
_template_service: Optional[TemplateService] = None


def get_template_service() -> TemplateService:
    """Get template service singleton"""
    global _template_service
    if _template_service is None:
        _template_service = TemplateService()
    return _template_service
