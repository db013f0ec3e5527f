"""Shared pydantic models and enums for GlobalOnboard."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class ViewMode(str, Enum):
    SINGLE = "single"
    QA = "qa"


class Task(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    description: str = ""


class Template(BaseModel):
    model_config = ConfigDict(frozen=True)

    company_name: str
    role: str
    tasks: tuple[Task, ...] = ()


class LocaleBundle(BaseModel):
    """One locale file: selector label, UI strings and onboarding template."""

    model_config = ConfigDict(frozen=True)

    label: str
    ui: dict[str, str]
    template: Template


class LocaleOption(BaseModel):
    code: str
    label: str


class WelcomeCacheEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    source: str
    value: str


class TaskComparison(BaseModel):
    id: str
    english: Task | None = None
    target: Task
    title_ratio: float = 1.0
    description_ratio: float = 1.0
    needs_review: bool = False


class PreviewState(BaseModel):
    """Settled view of one preview session, including derived values."""

    model_config = ConfigDict(frozen=True)

    session_id: str | None = None
    company_name: str
    role: str
    tasks: tuple[Task, ...]
    welcome_note: str
    selected_locale: str
    locale_label: str
    view_mode: ViewMode = ViewMode.SINGLE
    should_translate: bool = False
    translated_welcome: str
    preview_welcome: str
    is_translating: bool = False
    translation_error: bool = False
    preview_strings: dict[str, str]
    preview_template: Template
    qa_comparisons: tuple[TaskComparison, ...] = ()
    qa_issue_count: int = 0


class SessionCreateRequest(BaseModel):
    company_name: str | None = None
    role: str | None = None
    welcome_note: str | None = None
    locale: str = "en"
    view_mode: ViewMode = ViewMode.SINGLE


class ContentUpdateRequest(BaseModel):
    company_name: str | None = None
    role: str | None = None
    welcome_note: str | None = None


class TaskUpdateRequest(BaseModel):
    title: str | None = None
    description: str | None = None


class LocaleSelectRequest(BaseModel):
    locale: str = Field(min_length=1)


class ViewModeRequest(BaseModel):
    view_mode: ViewMode


class LocaleDetail(BaseModel):
    code: str
    label: str
    ui: dict[str, str]
    template: Template
