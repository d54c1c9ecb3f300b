"""Error types for email rendering and delivery."""

from __future__ import annotations


class NotificationError(Exception):
    """Base error for notification failures."""


class TemplateRenderError(NotificationError):
    """Raised when a template cannot be loaded or rendered.

    Args:
        template_name: Name of the template that failed.
        message: Description of the failure.
    """

    def __init__(self, template_name: str, message: str) -> None:
        super().__init__(f"Failed to render {template_name}: {message}")
        self.template_name = template_name


class InvalidAddressError(NotificationError):
    def __init__(self, address: str) -> None:
        super().__init__(f"Invalid email address: {address!r}")
        self.address = address
