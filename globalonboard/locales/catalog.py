"""Locale catalog backed by the localized JSON files in ``data/``.

Each file holds the selector label, the UI string table and the onboarding
template for one locale. Files are read once and validated; lookups hand out
frozen models or copies so the catalog itself cannot be mutated.
"""

from __future__ import annotations

from functools import lru_cache

from globalonboard.common.io import read_json
from globalonboard.common.models import LocaleBundle, LocaleOption, Template
from globalonboard.common.paths import LOCALES_DIR


BASE_LOCALE = "en"
SUPPORTED_LOCALES: tuple[str, ...] = ("en", "es", "fr", "de", "ja")


class UnsupportedLocaleError(ValueError):
    """Raised when a locale code is not in the catalog."""

    def __init__(self, locale: str) -> None:
        super().__init__(f"Unsupported locale: {locale}")
        self.locale = locale


@lru_cache(maxsize=None)
def _load_bundle(locale: str) -> LocaleBundle:
    return LocaleBundle.model_validate(read_json(LOCALES_DIR / f"{locale}.json"))


def get_bundle(locale: str) -> LocaleBundle:
    if locale not in SUPPORTED_LOCALES:
        raise UnsupportedLocaleError(locale)
    return _load_bundle(locale)


def get_ui(locale: str) -> dict[str, str]:
    return dict(get_bundle(locale).ui)


def get_template(locale: str) -> Template:
    return get_bundle(locale).template


def get_locale_label(locale: str) -> str:
    return get_bundle(locale).label


def list_locales() -> list[LocaleOption]:
    return [LocaleOption(code=code, label=get_locale_label(code)) for code in SUPPORTED_LOCALES]
