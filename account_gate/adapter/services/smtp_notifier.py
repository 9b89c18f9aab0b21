"""Transactional email delivery for account flows."""

import asyncio
import logging
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from pathlib import Path
from typing import Dict, Optional

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

from account_gate.app.services.notifier import INotifier
from account_gate.domain.entities import User

logger = logging.getLogger(__name__)

EMAIL_TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates" / "email"

_ENV: Optional[Environment] = None


def _get_env() -> Environment:
    global _ENV
    if _ENV is None:
        _ENV = Environment(
            loader=FileSystemLoader(EMAIL_TEMPLATE_DIR),
            autoescape=select_autoescape(["html", "xml", "html.jinja"]),
            undefined=StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
        )
    return _ENV


def render_email(template: str, context: Dict[str, object]) -> tuple[str, str]:
    """Render the (html, text) bodies for template."""
    env = _get_env()
    html = env.get_template(f"{template}.html.jinja").render(**context)
    text = env.get_template(f"{template}.txt.jinja").render(**context)
    return html, text


class SmtpNotifier(INotifier):
    """
    Sends multipart (text + html) mail over SMTP.

    With no SMTP host configured the message is logged instead of sent,
    which keeps local development usable without a mail server.
    """

    def __init__(
        self,
        host: str,
        port: int = 587,
        username: str = "",
        password: str = "",
        sender: str = "noreply@localhost",
        starttls: bool = True,
    ):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.sender = sender
        self.starttls = starttls

    def build_message(
        self, *, user: User, subject: str, reset_url: str, template: str
    ) -> MIMEMultipart:
        html, text = render_email(
            template,
            {"user": user, "subject": subject, "reset_url": reset_url},
        )
        msg = MIMEMultipart("alternative")
        msg["Subject"] = subject
        msg["From"] = self.sender
        msg["To"] = user.email
        msg.attach(MIMEText(text, "plain"))
        msg.attach(MIMEText(html, "html"))
        return msg

    async def send(self, *, user: User, subject: str, reset_url: str, template: str) -> None:
        msg = self.build_message(
            user=user, subject=subject, reset_url=reset_url, template=template
        )

        if not self.host:
            logger.info("[DEV] %s for %s: %s", subject, user.email, reset_url)
            return

        await asyncio.to_thread(self._deliver, msg)
        logger.info("Sent %s email to %s", template, user.email)

    def _deliver(self, msg: MIMEMultipart) -> None:
        with smtplib.SMTP(self.host, self.port) as server:
            if self.starttls:
                server.starttls()
            if self.username:
                server.login(self.username, self.password)
            server.send_message(msg)
