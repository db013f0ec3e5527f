"""Length-inflation check for localized checklist tasks.

The ratio threshold is a product heuristic: it flags translations that are much
longer than their English source and says nothing about whether they are correct.
"""

from __future__ import annotations

import os
from collections.abc import Iterable, Sequence

from globalonboard.common.models import Task, TaskComparison

LENGTH_ALERT_RATIO = 1.5


def configured_ratio() -> float:
    raw = os.getenv("LENGTH_ALERT_RATIO")
    if not raw:
        return LENGTH_ALERT_RATIO
    try:
        value = float(raw)
    except ValueError as exc:
        raise ValueError(f"LENGTH_ALERT_RATIO must be a number, got {raw!r}") from exc
    if value <= 0:
        raise ValueError("LENGTH_ALERT_RATIO must be positive")
    return value


def length_ratio(target: str, english: str | None) -> float:
    """Return len(target) / len(english), or 1.0 when there is no English text."""
    if not english:
        return 1.0
    return len(target) / len(english)


def _index(tasks: Iterable[Task]) -> dict[str, Task]:
    return {task.id: task for task in tasks}


def compare_tasks(
    localized: Sequence[Task],
    english_live: Sequence[Task],
    english_original: Sequence[Task] = (),
    threshold: float = LENGTH_ALERT_RATIO,
) -> list[TaskComparison]:
    live_by_id = _index(english_live)
    original_by_id = _index(english_original)

    comparisons: list[TaskComparison] = []
    for target in localized:
        english = live_by_id.get(target.id) or original_by_id.get(target.id)
        title_ratio = length_ratio(target.title, english.title if english else None)
        description_ratio = length_ratio(target.description, english.description if english else None)
        comparisons.append(
            TaskComparison(
                id=target.id,
                english=english,
                target=target,
                title_ratio=title_ratio,
                description_ratio=description_ratio,
                needs_review=title_ratio > threshold or description_ratio > threshold,
            )
        )
    return comparisons


def count_review_issues(comparisons: Iterable[TaskComparison]) -> int:
    return sum(1 for comparison in comparisons if comparison.needs_review)


def health_message(locale_label: str, issues: int) -> str:
    if issues == 0:
        return f"{locale_label}: All tasks fit within English length."
    noun = "task needs" if issues == 1 else "tasks need"
    return f"{locale_label}: {issues} {noun} review because translations are longer than English."
