from globalonboard.common.models import Task, TaskComparison, ViewMode
from globalonboard.preview.controller import PreviewController
from globalonboard.preview.views import (
    MISSING_DESCRIPTION,
    QA_LOCALE_HINT,
    REVIEW_BADGE,
    UNTITLED_TASK,
    QaView,
    SinglePreviewView,
    render_view,
)


def test_single_view_in_english_uses_live_edits(translator, inline) -> None:
    controller = PreviewController(translator, dispatch=inline)
    controller.set_company_name("Globex")

    view = render_view(controller.snapshot())

    assert isinstance(view, SinglePreviewView)
    assert view.company_name == "Globex"
    assert view.panel_title == "Employee preview"
    assert view.status is None
    assert [task.id for task in view.tasks] == ["paperwork", "laptop", "buddy", "goals"]


def test_single_view_in_french(translator, inline) -> None:
    controller = PreviewController(translator, dispatch=inline, locale="fr")

    view = render_view(controller.snapshot())

    assert view.locale == "fr"
    assert view.welcome_heading == "Mot de bienvenue"
    assert view.welcome_text.startswith("[fr] ")
    assert view.tasks[0].title == "Remplir les documents RH"


def test_single_view_shows_error_status(make_translator, inline) -> None:
    translator = make_translator(fail_locales={"es"})
    controller = PreviewController(translator, dispatch=inline, welcome_note="Welcome aboard")
    controller.select_locale("es")

    view = render_view(controller.snapshot())

    assert view.welcome_text == "Welcome aboard"
    assert view.status == "Traducción no disponible. Se muestra la nota original."


def test_single_view_shows_translating_status(translator, inline) -> None:
    controller = PreviewController(translator, dispatch=inline, locale="de")
    state = controller.snapshot().model_copy(update={"is_translating": True})

    view = render_view(state)

    assert view.status == "Willkommensnachricht wird übersetzt..."


def test_qa_view_in_english_only_shows_hint(translator, inline) -> None:
    controller = PreviewController(translator, dispatch=inline, view_mode=ViewMode.QA)

    view = render_view(controller.snapshot())

    assert isinstance(view, QaView)
    assert view.hint == QA_LOCALE_HINT
    assert view.rows == []


def test_qa_view_pairs_tasks_and_flags_long_ones(translator, inline) -> None:
    controller = PreviewController(translator, dispatch=inline, locale="fr", view_mode=ViewMode.QA)
    controller.update_task(0, "title", "HR")

    view = render_view(controller.snapshot())

    assert view.english.label == "English"
    assert view.localized.label == "Français"
    rows = {row.id: row for row in view.rows}
    assert rows["paperwork"].english.title == "HR"
    assert rows["paperwork"].needs_review is True
    assert rows["paperwork"].badge == REVIEW_BADGE
    assert view.issues == sum(1 for row in view.rows if row.needs_review)
    assert view.health.startswith("Français: ")


def test_qa_view_uses_placeholders_for_missing_english(translator, inline) -> None:
    controller = PreviewController(translator, dispatch=inline, locale="fr", view_mode=ViewMode.QA)
    orphan = TaskComparison(id="ghost", english=None, target=Task(id="ghost", title="Fantôme", description="Rien"))
    state = controller.snapshot().model_copy(update={"qa_comparisons": (orphan,), "qa_issue_count": 0})

    view = render_view(state)

    [row] = view.rows
    assert row.english.title == UNTITLED_TASK
    assert row.english.description == MISSING_DESCRIPTION
    assert row.badge is None
    assert view.health == "Français: All tasks fit within English length."
