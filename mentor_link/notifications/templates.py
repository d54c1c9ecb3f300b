"""Email template rendering.

Templates are Jinja2 HTML files under ``{template_dir}/templates``. Images
referenced by ``cid:`` URLs live under ``{template_dir}/templates/image`` and
are attached inline by the sender.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, List, Mapping, Tuple

from jinja2 import Environment, FileSystemLoader, TemplateError, select_autoescape

from .errors import TemplateRenderError

TASK_ASSIGNED = "task_assigned.html"
TASK_FAILED = "task_failed.html"
TASK_COMPLETED = "task_completed_points.html"
MONTHLY_SUMMARY = "monthly_points_summary.html"

_STATUS_IMAGES = {
    TASK_ASSIGNED: "templates/image/task_assigned.png",
    TASK_FAILED: "templates/image/task_failed.png",
    TASK_COMPLETED: "templates/image/task_completed.png",
    MONTHLY_SUMMARY: "templates/image/task_points.png",
}


def cid_images_for_template(template_name: str) -> List[Tuple[str, str]]:
    """Inline images a template needs, as ``(path relative to template_dir, content id)`` pairs."""
    images = [("templates/image/background.png", "background")]
    status_image = _STATUS_IMAGES.get(template_name)
    if status_image:
        images.append((status_image, "task_status"))
    return images


class TemplateRenderer:
    """Renders email templates from a template directory."""

    def __init__(self, template_dir: str | Path) -> None:
        self.base_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.base_dir / "templates")),
            autoescape=select_autoescape(["html"]),
        )

    def render(self, template_name: str, context: Mapping[str, Any]) -> str:
        try:
            html = self.env.get_template(template_name).render(**context)
        except TemplateError as e:
            raise TemplateRenderError(template_name, str(e)) from e
        return html.replace("\r\n", "\n")

    def resolve(self, relative_path: str) -> Path:
        return self.base_dir / relative_path
