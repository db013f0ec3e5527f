"""Preview controller: authoring state, locale selection and welcome-note translation."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import Any

from globalonboard.agent.translator import Translator
from globalonboard.common.io import utcnow_iso
from globalonboard.common.models import PreviewState, Task, TaskComparison, Template, ViewMode, WelcomeCacheEntry
from globalonboard.common.store import EventBus
from globalonboard.locales import (
    BASE_LOCALE,
    SUPPORTED_LOCALES,
    UnsupportedLocaleError,
    get_locale_label,
    get_template,
    get_ui,
)
from globalonboard.preview.qa import LENGTH_ALERT_RATIO, compare_tasks, count_review_issues

logger = logging.getLogger(__name__)

DEFAULT_WELCOME = (
    "Welcome to the team! Use this space to celebrate new hires and explain how their work matters."
)
TASK_FIELDS = ("title", "description")

Dispatch = Callable[[Callable[[], None]], None]


class PreviewController:
    """Owns the state of one preview session.

    Authoring edits apply synchronously and never reach the network. Changing the
    welcome note or the selected locale re-runs the translation reaction, whose
    single request runs through ``dispatch`` (a daemon thread unless one is
    injected). Every reaction bumps ``_generation``; a completion carrying an older
    generation is dropped without touching state or cache.
    """

    def __init__(
        self,
        translator: Translator,
        *,
        session_id: str | None = None,
        event_bus: EventBus | None = None,
        dispatch: Dispatch | None = None,
        length_alert_ratio: float = LENGTH_ALERT_RATIO,
        company_name: str | None = None,
        role: str | None = None,
        welcome_note: str | None = None,
        locale: str = BASE_LOCALE,
        view_mode: ViewMode = ViewMode.SINGLE,
    ) -> None:
        self.translator = translator
        self.session_id = session_id
        self.event_bus = event_bus
        self.length_alert_ratio = length_alert_ratio
        self._dispatch = dispatch or self._spawn
        self._lock = threading.RLock()
        self._settled = threading.Condition(self._lock)
        self._generation = 0

        self._english_template = get_template(BASE_LOCALE)
        self._company_name = self._english_template.company_name if company_name is None else company_name
        self._role = self._english_template.role if role is None else role
        self._tasks: list[Task] = list(self._english_template.tasks)
        self._welcome_note = DEFAULT_WELCOME if welcome_note is None else welcome_note
        self._selected_locale = BASE_LOCALE
        self._view_mode = ViewMode(view_mode)

        self._translated_welcome = self._welcome_note
        self._is_translating = False
        self._translation_error = False
        self._welcome_cache: dict[str, WelcomeCacheEntry] = {}

        if locale != BASE_LOCALE:
            self.select_locale(locale)

    # Authoring edits

    def set_company_name(self, value: str) -> None:
        with self._lock:
            self._company_name = value
        self._publish("company_name_updated")

    def set_role(self, value: str) -> None:
        with self._lock:
            self._role = value
        self._publish("role_updated")

    def update_task(self, index: int, field: str, value: str) -> Task:
        if field not in TASK_FIELDS:
            raise ValueError(f"Unknown task field: {field}")
        with self._lock:
            if not 0 <= index < len(self._tasks):
                raise IndexError(f"Task index out of range: {index}")
            task = self._tasks[index].model_copy(update={field: value})
            self._tasks[index] = task
        self._publish("task_updated", task_id=task.id)
        return task

    def set_welcome_note(self, value: str) -> None:
        with self._lock:
            if value == self._welcome_note:
                return
            self._welcome_note = value
        self._publish("welcome_note_updated")
        self._react()

    def select_locale(self, locale: str) -> None:
        if locale not in SUPPORTED_LOCALES:
            raise UnsupportedLocaleError(locale)
        with self._lock:
            if locale == self._selected_locale:
                return
            self._selected_locale = locale
        self._publish("locale_selected")
        self._react()

    def set_view_mode(self, mode: ViewMode | str) -> None:
        with self._lock:
            self._view_mode = ViewMode(mode)
        self._publish("view_mode_changed", view_mode=self._view_mode.value)

    # Translation reaction

    def _react(self) -> None:
        with self._lock:
            self._generation += 1
            generation = self._generation
            if not self.should_translate:
                self._mark_settled()
                return

            locale = self._selected_locale
            note = self._welcome_note
            cached = self._welcome_cache.get(locale)
            if cached is not None and cached.source == note:
                self._translated_welcome = cached.value
                self._mark_settled()
                self._translation_error = False
                hit = True
            else:
                self._is_translating = True
                self._translation_error = False
                hit = False

        if hit:
            logger.debug("Welcome note cache hit for %s", locale)
            self._publish("translation_cached")
            return

        self._publish("translation_started")
        self._dispatch(lambda: self._fetch(generation, locale, note))

    def _fetch(self, generation: int, locale: str, note: str) -> None:
        try:
            result = self.translator.translate(note, locale)
        except Exception as exc:
            with self._lock:
                if generation != self._generation:
                    logger.debug("Discarding stale translation failure for %s", locale)
                    return
                self._translation_error = True
                self._translated_welcome = note
                self._mark_settled()
            logger.warning("Welcome note translation to %s failed: %s", locale, exc)
            self._publish("translation_failed", error=str(exc))
            return

        with self._lock:
            if generation != self._generation:
                logger.debug("Discarding stale translation for %s", locale)
                return
            self._welcome_cache[locale] = WelcomeCacheEntry(source=note, value=result)
            self._translated_welcome = result
            self._mark_settled()
        self._publish("translation_completed")

    def _mark_settled(self) -> None:
        # Caller holds self._lock.
        self._is_translating = False
        self._settled.notify_all()

    def _spawn(self, work: Callable[[], None]) -> None:
        threading.Thread(target=work, daemon=True).start()

    def wait(self, timeout: float | None = None) -> bool:
        """Block until the current generation's translation settles. Returns False on timeout.

        Completions from superseded generations never settle the controller, so a
        stale worker finishing first does not release the wait.
        """
        with self._settled:
            return self._settled.wait_for(lambda: not self._is_translating, timeout)

    # Derived state

    @property
    def should_translate(self) -> bool:
        with self._lock:
            return self._selected_locale != BASE_LOCALE and bool(self._welcome_note.strip())

    @property
    def preview_welcome(self) -> str:
        with self._lock:
            if self.should_translate and not self._translation_error:
                return self._translated_welcome
            return self._welcome_note

    @property
    def preview_strings(self) -> dict[str, str]:
        return get_ui(self._selected_locale)

    @property
    def preview_template(self) -> Template:
        with self._lock:
            if self._selected_locale == BASE_LOCALE:
                return Template(company_name=self._company_name, role=self._role, tasks=tuple(self._tasks))
            return get_template(self._selected_locale)

    @property
    def qa_comparisons(self) -> list[TaskComparison]:
        with self._lock:
            if self._selected_locale == BASE_LOCALE:
                return []
            return compare_tasks(
                get_template(self._selected_locale).tasks,
                self._tasks,
                self._english_template.tasks,
                threshold=self.length_alert_ratio,
            )

    @property
    def selected_locale(self) -> str:
        return self._selected_locale

    @property
    def welcome_note(self) -> str:
        return self._welcome_note

    @property
    def is_translating(self) -> bool:
        return self._is_translating

    @property
    def translation_error(self) -> bool:
        return self._translation_error

    def cached_translation(self, locale: str) -> WelcomeCacheEntry | None:
        with self._lock:
            return self._welcome_cache.get(locale)

    def snapshot(self) -> PreviewState:
        with self._lock:
            comparisons = self.qa_comparisons
            return PreviewState(
                session_id=self.session_id,
                company_name=self._company_name,
                role=self._role,
                tasks=tuple(self._tasks),
                welcome_note=self._welcome_note,
                selected_locale=self._selected_locale,
                locale_label=get_locale_label(self._selected_locale),
                view_mode=self._view_mode,
                should_translate=self.should_translate,
                translated_welcome=self._translated_welcome,
                preview_welcome=self.preview_welcome,
                is_translating=self._is_translating,
                translation_error=self._translation_error,
                preview_strings=self.preview_strings,
                preview_template=self.preview_template,
                qa_comparisons=tuple(comparisons),
                qa_issue_count=count_review_issues(comparisons),
            )

    def _publish(self, action: str, **extra: Any) -> None:
        if self.event_bus is None or self.session_id is None:
            return
        payload = {
            "timestamp": utcnow_iso(),
            "session_id": self.session_id,
            "action": action,
            "locale": self._selected_locale,
            "is_translating": self._is_translating,
            "translation_error": self._translation_error,
            **extra,
        }
        self.event_bus.publish(self.session_id, payload)
