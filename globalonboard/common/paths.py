"""Path helpers for bundled package data."""

from __future__ import annotations

from pathlib import Path


PACKAGE_DIR = Path(__file__).resolve().parents[1]
LOCALES_DIR = PACKAGE_DIR / "locales" / "data"

