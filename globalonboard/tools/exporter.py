"""Onboarding pack export: a Word-compatible HTML document per locale."""

from __future__ import annotations

from html import escape

from globalonboard.common.models import PreviewState
from globalonboard.locales import BASE_LOCALE

EXPORT_MEDIA_TYPE = "application/msword"


def export_filename(locale: str) -> str:
    return f"onboarding-pack-{locale}.doc"


def render_onboarding_pack(state: PreviewState) -> str:
    """Serialize the previewed template and welcome note into an HTML document.

    For the base locale the raw authored note is exported; other locales use the
    preview welcome, which already falls back to the note when translation failed.
    """
    template = state.preview_template
    label = escape(state.locale_label)
    welcome = state.welcome_note if state.selected_locale == BASE_LOCALE else state.preview_welcome
    tasks = "".join(
        f"<p><strong>Task {index}: {escape(task.title)}</strong><br/>{escape(task.description)}</p>"
        for index, task in enumerate(template.tasks, start=1)
    )
    return f"""<!DOCTYPE html>
<html>
  <head>
    <meta charset="UTF-8" />
    <title>Onboarding Pack - {label}</title>
    <style>
      body {{ font-family: Arial, sans-serif; line-height: 1.5; color: #0f172a; }}
      h1 {{ font-size: 24px; margin-bottom: 0; }}
      h2 {{ font-size: 18px; margin-top: 24px; }}
      p {{ font-size: 14px; }}
    </style>
  </head>
  <body>
    <h1>Onboarding Pack – {label}</h1>
    <p><strong>Locale:</strong> {escape(state.selected_locale)}</p>
    <p><strong>Company:</strong> {escape(template.company_name)}</p>
    <p><strong>Role:</strong> {escape(template.role)}</p>
    <h2>Welcome Note</h2>
    <p>{escape(welcome)}</p>
    <h2>Onboarding Checklist</h2>
    {tasks}
  </body>
</html>
"""

