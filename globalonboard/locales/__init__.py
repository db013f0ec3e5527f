"""Static locale catalog: UI strings and onboarding templates per locale."""

from .catalog import (
    BASE_LOCALE,
    SUPPORTED_LOCALES,
    UnsupportedLocaleError,
    get_locale_label,
    get_template,
    get_ui,
    list_locales,
)

__all__ = [
    "BASE_LOCALE",
    "SUPPORTED_LOCALES",
    "UnsupportedLocaleError",
    "get_locale_label",
    "get_template",
    "get_ui",
    "list_locales",
]
