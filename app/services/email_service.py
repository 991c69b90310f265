"""Email service supporting SMTP and Resend providers.

The provider and its credentials come from the application settings
(``EMAIL_PROVIDER``, ``RESEND_API_KEY``, ``SMTP_*``).
"""

import asyncio
import logging
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from pathlib import Path
from typing import Any

import aiosmtplib
import resend
from jinja2 import Environment, FileSystemLoader, select_autoescape

from app.config import Settings, get_settings
from app.schemas.support import SupportRequestType

logger = logging.getLogger(__name__)


class EmailService:
    """Service for sending transactional emails via SMTP or Resend."""

    def __init__(self, config: Settings | None = None):
        """Initialize the email service."""
        self.config = config or get_settings()
        templates_path = Path(__file__).parent.parent / "templates" / "emails"
        self.jinja_env = Environment(
            loader=FileSystemLoader(str(templates_path)),
            autoescape=select_autoescape(["html", "xml"]),
        )

    def _render_template(self, template_name: str, context: dict[str, Any]) -> str:
        """Render an email template with the given context."""
        template = self.jinja_env.get_template(template_name)
        return template.render(**context)

    async def _send_via_smtp(
        self,
        from_address: str,
        recipients: list[str],
        subject: str,
        html_body: str,
        reply_to: str | None,
    ) -> str:
        """Send email via SMTP."""
        msg = MIMEMultipart("alternative")
        msg["From"] = from_address
        msg["To"] = ", ".join(recipients)
        msg["Subject"] = subject

        if reply_to:
            msg["Reply-To"] = reply_to

        msg.attach(MIMEText(html_body, "html", "utf-8"))

        port = self.config.smtp_port

        # Port 465 = implicit SSL, port 587 = STARTTLS
        if port == 465:
            tls_kwargs = {"use_tls": True, "start_tls": False}
        else:
            tls_kwargs = {"use_tls": False, "start_tls": self.config.smtp_use_tls}

        await aiosmtplib.send(
            msg,
            hostname=self.config.smtp_host,
            port=port,
            username=self.config.smtp_username or None,
            password=self.config.smtp_password or None,
            recipients=recipients,
            timeout=30,
            **tls_kwargs,
        )

        return f"smtp-{id(msg)}"

    async def _send_via_resend(
        self,
        from_address: str,
        recipients: list[str],
        subject: str,
        html_body: str,
        reply_to: str | None,
    ) -> str:
        """Send email via Resend."""
        resend.api_key = self.config.resend_api_key

        params: dict[str, Any] = {
            "from": from_address,
            "to": recipients,
            "subject": subject,
            "html": html_body,
        }

        if reply_to:
            params["reply_to"] = reply_to

        # The Resend SDK is synchronous
        result = await asyncio.to_thread(resend.Emails.send, params)
        return result.get("id", "resend-ok")

    async def send(
        self,
        to: str | list[str],
        subject: str,
        template_name: str,
        context: dict[str, Any],
        reply_to: str | None = None,
    ) -> str | None:
        """Send an email using a Jinja2 template.

        Returns a message ID string if successful, None if failed or not configured.
        """
        if not self.config.email_configured:
            logger.warning(
                f"Email provider {self.config.email_provider} not configured, skipping send"
            )
            return None

        provider = self.config.email_provider

        try:
            html_body = self._render_template(template_name, context)

            from_address = f"{self.config.email_from_name} <{self.config.email_from_address}>"
            recipients = to if isinstance(to, list) else [to]

            if provider == "resend":
                result_id = await self._send_via_resend(
                    from_address, recipients, subject, html_body, reply_to,
                )
            else:
                result_id = await self._send_via_smtp(
                    from_address, recipients, subject, html_body, reply_to,
                )

            logger.info(f"Email sent via {provider} to {recipients}: {result_id}")
            return result_id

        except Exception as e:
            logger.error(f"Failed to send email via {provider} to {to}: {e}")
            return None

    async def send_support_request(
        self,
        request_type: SupportRequestType,
        name: str,
        email: str,
        subject: str,
        message: str,
    ) -> str | None:
        """Forward a support form submission to the support inbox.

        Replies from the inbox go straight back to the submitter.
        """
        logger.info(f"Sending support request from {email} to {self.config.support_inbox_address}")
        return await self.send(
            to=self.config.support_inbox_address,
            subject=f"[{request_type.label}] {subject}",
            template_name="support_request.html",
            context={
                "type_label": request_type.label,
                "name": name,
                "email": email,
                "subject": subject,
                "message": message,
                "app_name": self.config.app_name,
            },
            reply_to=email,
        )


# Singleton instance
_email_service: EmailService | None = None


def get_email_service() -> EmailService:
    """Get the email service singleton."""
    global _email_service
    if _email_service is None:
        _email_service = EmailService()
    return _email_service
