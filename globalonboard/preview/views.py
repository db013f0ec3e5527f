"""Render a preview snapshot into the single-preview or QA-comparison layout."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel

from globalonboard.common.models import PreviewState, Task, ViewMode
from globalonboard.locales import BASE_LOCALE
from globalonboard.preview.qa import health_message

UNTITLED_TASK = "Untitled task"
MISSING_DESCRIPTION = "No description available."
REVIEW_BADGE = "Longer than English"
QA_LOCALE_HINT = "Choose a non-English locale to compare translations side-by-side."


class TaskCard(BaseModel):
    id: str
    title: str
    description: str


class SinglePreviewView(BaseModel):
    mode: Literal["single"] = "single"
    locale: str
    locale_label: str
    panel_title: str
    app_title: str
    company_label: str
    company_name: str
    role: str
    welcome_heading: str
    welcome_text: str
    status: str | None = None
    checklist_heading: str
    tasks: list[TaskCard]


class ComparisonHeader(BaseModel):
    label: str
    company_name: str
    role: str


class ComparisonRow(BaseModel):
    id: str
    english: TaskCard
    target: TaskCard
    needs_review: bool
    badge: str | None = None


class QaView(BaseModel):
    mode: Literal["qa"] = "qa"
    locale: str
    locale_label: str
    hint: str | None = None
    english: ComparisonHeader | None = None
    localized: ComparisonHeader | None = None
    health: str | None = None
    issues: int = 0
    rows: list[ComparisonRow] = []


def _card(task: Task) -> TaskCard:
    return TaskCard(id=task.id, title=task.title, description=task.description)


def _status_line(state: PreviewState) -> str | None:
    if not state.should_translate:
        return None
    if state.is_translating:
        return state.preview_strings["status.translating"]
    if state.translation_error:
        return state.preview_strings["status.translation_error"]
    return None


def render_single(state: PreviewState) -> SinglePreviewView:
    strings = state.preview_strings
    template = state.preview_template
    return SinglePreviewView(
        locale=state.selected_locale,
        locale_label=state.locale_label,
        panel_title=strings["employee.panel_title"],
        app_title=strings["app.title"],
        company_label=strings["field.company_name"],
        company_name=template.company_name,
        role=template.role,
        welcome_heading=strings["section.welcome_note"],
        welcome_text=state.preview_welcome,
        status=_status_line(state),
        checklist_heading=strings["section.checklist"],
        tasks=[_card(task) for task in template.tasks],
    )


def render_qa(state: PreviewState) -> QaView:
    if state.selected_locale == BASE_LOCALE:
        return QaView(locale=state.selected_locale, locale_label=state.locale_label, hint=QA_LOCALE_HINT)

    rows = []
    for comparison in state.qa_comparisons:
        english = comparison.english
        rows.append(
            ComparisonRow(
                id=comparison.id,
                english=TaskCard(
                    id=comparison.id,
                    title=english.title if english else UNTITLED_TASK,
                    description=english.description if english else MISSING_DESCRIPTION,
                ),
                target=_card(comparison.target),
                needs_review=comparison.needs_review,
                badge=REVIEW_BADGE if comparison.needs_review else None,
            )
        )

    return QaView(
        locale=state.selected_locale,
        locale_label=state.locale_label,
        english=ComparisonHeader(label="English", company_name=state.company_name, role=state.role),
        localized=ComparisonHeader(
            label=state.locale_label,
            company_name=state.preview_template.company_name,
            role=state.preview_template.role,
        ),
        health=health_message(state.locale_label, state.qa_issue_count),
        issues=state.qa_issue_count,
        rows=rows,
    )


def render_view(state: PreviewState) -> SinglePreviewView | QaView:
    if state.view_mode == ViewMode.QA:
        return render_qa(state)
    return render_single(state)
