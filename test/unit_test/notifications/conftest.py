"""Fixtures for notification tests."""

from pathlib import Path
from unittest.mock import Mock

import pytest

from mentor_link.notifications import SmtpMailer, TemplateRenderer
from mentor_link.server.core.config import DEFAULT_TEMPLATE_DIR


@pytest.fixture
def renderer() -> TemplateRenderer:
    return TemplateRenderer(DEFAULT_TEMPLATE_DIR)


@pytest.fixture
def mailer() -> Mock:
    return Mock(spec=SmtpMailer)


@pytest.fixture
def broken_template_dir(tmp_path: Path) -> Path:
    templates = tmp_path / "templates"
    templates.mkdir()
    (templates / "task_assigned.html").write_text("{% if %}")
    return tmp_path
