"""Email building and SMTP delivery.

``EmailSender`` holds one email (template, subject, context and recipients)
and turns it into a ``multipart/related`` message with inline images.
``SmtpMailer`` relays messages through an authenticated STARTTLS server.

Delivery is best effort: ``EmailSender.send`` logs failures and returns
``False`` instead of raising, so callers never fail because of email.
"""

from __future__ import annotations

import smtplib
import ssl
from email.message import EmailMessage
from email.utils import parseaddr
from typing import Any, Dict, Iterable, List, Optional

from mentor_link.core.logging_config import get_logger
from mentor_link.server.core.config import SmtpConfig

from .errors import InvalidAddressError, NotificationError
from .templates import TemplateRenderer, cid_images_for_template

logger = get_logger(__name__)


def is_valid_address(value: Optional[str]) -> bool:
    if not value:
        return False
    _, address = parseaddr(value)
    local, _, domain = address.partition("@")
    return bool(local) and bool(domain) and "." in domain


class SmtpMailer:
    """Thin wrapper around ``smtplib`` for an authenticated relay."""

    def __init__(
        self,
        host: str,
        port: int = 587,
        *,
        username: Optional[str] = None,
        password: Optional[str] = None,
        use_tls: bool = True,
        timeout: float = 30.0,
    ) -> None:
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.use_tls = use_tls
        self.timeout = timeout

    @classmethod
    def from_config(cls, config: SmtpConfig) -> "SmtpMailer":
        return cls(
            config.host,
            config.port,
            username=config.username,
            password=config.password,
            timeout=config.timeout,
        )

    def send(self, message: EmailMessage) -> None:
        """Deliver a message. Raises ``smtplib.SMTPException`` or ``OSError`` on failure."""
        with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as server:
            if self.use_tls:
                server.starttls(context=ssl.create_default_context())
            if self.username and self.password:
                server.login(self.username, self.password)
            server.send_message(message)


class EmailSender:
    """One templated email and its recipients."""

    def __init__(
        self,
        template_name: str,
        subject: str,
        context: Dict[str, Any],
        receiver: str,
        cc_emails: Iterable[Optional[str]] = (),
    ) -> None:
        self.template_name = template_name
        self.subject = subject
        self.context = context
        self.receiver = receiver
        self.cc_emails: List[str] = [cc for cc in cc_emails if cc]

    def valid_cc(self) -> List[str]:
        valid = []
        for cc in self.cc_emails:
            if is_valid_address(cc):
                valid.append(cc)
            else:
                logger.warning(f"Invalid CC address {cc!r} dropped from {self.template_name}")
        return valid

    def build_message(self, renderer: TemplateRenderer, sender_address: str) -> EmailMessage:
        """Render the template and assemble the MIME message.

        Missing inline images are logged and skipped.

        Raises:
            TemplateRenderError: If the template fails to render.
            InvalidAddressError: If the receiver address is malformed.
        """
        if not is_valid_address(self.receiver):
            raise InvalidAddressError(self.receiver)
        html = renderer.render(self.template_name, self.context)

        message = EmailMessage()
        message["Subject"] = self.subject
        message["From"] = sender_address
        message["To"] = self.receiver
        cc = self.valid_cc()
        if cc:
            message["Cc"] = ", ".join(cc)
        message.set_content(html, subtype="html")

        for image_path, cid in cid_images_for_template(self.template_name):
            try:
                data = renderer.resolve(image_path).read_bytes()
            except OSError as e:
                logger.warning(f"Inline image {image_path} could not be loaded: {e}")
                continue
            message.add_related(data, maintype="image", subtype="png", cid=f"<{cid}>", filename=f"{cid}.png")
        return message

    def send(self, renderer: TemplateRenderer, mailer: SmtpMailer, sender_address: str) -> bool:
        """Render, build and deliver the email.

        Returns:
            True if the relay accepted the message, False otherwise.
        """
        try:
            message = self.build_message(renderer, sender_address)
        except NotificationError as e:
            logger.error(f"Email {self.template_name} to {self.receiver} not built: {e}")
            return False

        try:
            mailer.send(message)
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"Email delivery failed: {e!r}, to {self.receiver}")
            return False
        logger.info(f"Email {self.template_name} sent to {self.receiver}")
        return True
