"""Welcome-note translation backed by Gemini."""

from __future__ import annotations

import logging
import os
import time
from typing import Protocol

from globalonboard.agent.gemini_client import GeminiClient
from globalonboard.locales import BASE_LOCALE, get_locale_label

logger = logging.getLogger(__name__)


SYSTEM_PROMPT = (
    "You translate onboarding messages written by HR teams for new employees. "
    "Keep the tone warm and professional, keep names and product terms unchanged, "
    "and return only the translated text with no quotes, notes or explanations."
)


class TranslationError(RuntimeError):
    """Raised for any translation failure: credentials, network, quota or service."""


class Translator(Protocol):
    def translate(self, text: str, target_locale: str) -> str: ...


class GeminiTranslator:
    def __init__(self, client: GeminiClient, source_locale: str = BASE_LOCALE) -> None:
        self.client = client
        self.source_locale = source_locale

    def translate(self, text: str, target_locale: str) -> str:
        if not self.client.enabled:
            raise TranslationError("Gemini API key not configured")

        source_label = get_locale_label(self.source_locale)
        target_label = get_locale_label(target_locale)
        user_prompt = (
            f"Translate the following message from {source_label} ({self.source_locale}) "
            f"to {target_label} ({target_locale}).\n\n{text}"
        )

        started = time.perf_counter()
        try:
            translated = self.client.generate_text(user_prompt)
        except RuntimeError as exc:
            raise TranslationError(str(exc)) from exc
        latency_ms = int((time.perf_counter() - started) * 1000)

        logger.info("Translated welcome note to %s in %d ms", target_locale, latency_ms)
        return translated


def build_translator() -> Translator:
    return GeminiTranslator(GeminiClient(api_key=os.getenv("GEMINI_API_KEY", ""), system_instruction=SYSTEM_PROMPT))
