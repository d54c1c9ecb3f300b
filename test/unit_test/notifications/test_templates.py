"""Unit tests for email template rendering."""

import pytest

from mentor_link.notifications import TemplateRenderError, TemplateRenderer
from mentor_link.notifications.templates import (
    MONTHLY_SUMMARY,
    TASK_ASSIGNED,
    TASK_COMPLETED,
    TASK_FAILED,
    cid_images_for_template,
)

TASK_CONTEXT = {
    "student_name": "Li Lei",
    "task_title": "Write the monthly report",
    "task_link": "https://github.com/r2cn-dev/mentor-link/issues/1",
    "mentor_name": "Mona",
    "project_link": "https://github.com/r2cn-dev/mentor-link",
}


@pytest.mark.parametrize("template_name", [TASK_ASSIGNED, TASK_FAILED])
def test_task_templates_render_context(renderer, template_name):
    html = renderer.render(template_name, TASK_CONTEXT)

    assert "Li Lei" in html
    assert "Write the monthly report" in html
    assert "cid:background" in html
    assert "cid:task_status" in html


def test_completed_template_shows_balance(renderer):
    html = renderer.render(TASK_COMPLETED, {**TASK_CONTEXT, "points_total": 42})
    assert "42" in html


def test_monthly_template(renderer):
    html = renderer.render(
        MONTHLY_SUMMARY,
        {"student_name": "Li Lei", "points_earned_month": 12, "points_redeemed_month": 5, "points_balance": 30},
    )
    assert "12" in html and "30" in html


def test_context_is_escaped(renderer):
    html = renderer.render(TASK_ASSIGNED, {**TASK_CONTEXT, "task_title": "<script>x</script>"})
    assert "<script>x</script>" not in html
    assert "&lt;script&gt;" in html


def test_missing_template(renderer):
    with pytest.raises(TemplateRenderError) as exc_info:
        renderer.render("nope.html", {})
    assert exc_info.value.template_name == "nope.html"


def test_syntax_error_is_wrapped(broken_template_dir):
    with pytest.raises(TemplateRenderError):
        TemplateRenderer(broken_template_dir).render(TASK_ASSIGNED, {})


class TestCidImages:
    def test_background_always_first(self):
        for name in (TASK_ASSIGNED, TASK_FAILED, TASK_COMPLETED, MONTHLY_SUMMARY):
            assert cid_images_for_template(name)[0] == ("templates/image/background.png", "background")

    def test_status_image_per_template(self):
        assert cid_images_for_template(TASK_FAILED)[1] == ("templates/image/task_failed.png", "task_status")
        assert cid_images_for_template(MONTHLY_SUMMARY)[1] == ("templates/image/task_points.png", "task_status")

    def test_unknown_template_gets_background_only(self):
        assert cid_images_for_template("other.html") == [("templates/image/background.png", "background")]

    def test_images_exist(self, renderer):
        for path, _ in cid_images_for_template(TASK_COMPLETED):
            assert renderer.resolve(path).is_file()
