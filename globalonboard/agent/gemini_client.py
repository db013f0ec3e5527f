"""Gemini text generation for translation prompts, via the google-generativeai SDK."""

from __future__ import annotations

import os

import google.generativeai as genai
from google.generativeai.types import GenerationConfig


DEFAULT_MODEL = "gemini-2.0-flash"


class GeminiClient:
    """Single-turn Gemini calls bound to one system instruction.

    Raises RuntimeError when no key is configured, when the SDK call fails, or
    when the model returns no usable text (blocked prompt, empty candidate).
    """

    def __init__(self, api_key: str, system_instruction: str | None = None, model: str | None = None) -> None:
        self.api_key = api_key
        self.system_instruction = system_instruction
        self.model_name = model or os.getenv("GEMINI_MODEL", DEFAULT_MODEL)
        self._model = None
        if self.api_key:
            genai.configure(api_key=self.api_key)
            self._model = genai.GenerativeModel(self.model_name, system_instruction=system_instruction)

    @property
    def enabled(self) -> bool:
        return bool(self.api_key)

    def generate_text(self, prompt: str, *, temperature: float = 0.2) -> str:
        if not self._model:
            raise RuntimeError("Gemini API key not configured")

        try:
            response = self._model.generate_content(prompt, generation_config=GenerationConfig(temperature=temperature))
        except Exception as e:
            raise RuntimeError(f"Gemini generation failed: {e}") from e

        feedback = getattr(response, "prompt_feedback", None)
        if feedback is not None and getattr(feedback, "block_reason", None):
            raise RuntimeError(f"Gemini blocked the prompt: {feedback.block_reason}")
        if not response.parts:
            raise RuntimeError("Gemini returned empty response")

        text = response.text.strip()
        if not text:
            raise RuntimeError("Gemini returned blank text")
        return text
