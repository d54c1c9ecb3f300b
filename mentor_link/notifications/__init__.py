"""
Email notifications.

- ``templates``: Jinja2 rendering and the inline images each template uses
- ``sender``: MIME assembly and SMTP delivery
- ``notifier``: lifecycle and monthly report emails
"""

from .errors import InvalidAddressError, NotificationError, TemplateRenderError
from .notifier import TaskNotifier, monthly_subject
from .sender import EmailSender, SmtpMailer, is_valid_address
from .templates import TemplateRenderer, cid_images_for_template

__all__ = [
    "EmailSender",
    "InvalidAddressError",
    "NotificationError",
    "SmtpMailer",
    "TaskNotifier",
    "TemplateRenderError",
    "TemplateRenderer",
    "cid_images_for_template",
    "is_valid_address",
    "monthly_subject",
]
