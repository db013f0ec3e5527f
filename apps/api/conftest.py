import sys
from collections.abc import Callable
from pathlib import Path

import pytest
from dotenv import load_dotenv

# Add project root to python path for tests
ROOT_DIR = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT_DIR))

load_dotenv(dotenv_path=Path(__file__).resolve().parent / ".env")

from globalonboard.agent.translator import TranslationError  # noqa: E402


class FakeTranslator:
    """Records calls and returns "[locale] text", or raises when failing."""

    def __init__(self, fail_locales: set[str] | None = None) -> None:
        self.calls: list[tuple[str, str]] = []
        self.fail_locales = fail_locales or set()

    def translate(self, text: str, target_locale: str) -> str:
        self.calls.append((text, target_locale))
        if target_locale in self.fail_locales:
            raise TranslationError("quota exceeded")
        return f"[{target_locale}] {text}"


def run_inline(work: Callable[[], None]) -> None:
    work()


@pytest.fixture
def translator() -> FakeTranslator:
    return FakeTranslator()


@pytest.fixture
def inline() -> Callable[[Callable[[], None]], None]:
    return run_inline


@pytest.fixture
def make_translator() -> type[FakeTranslator]:
    return FakeTranslator
