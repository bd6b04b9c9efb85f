from __future__ import annotations

import json
import re
from collections.abc import Callable
from functools import lru_cache
from pathlib import Path

from quiz_tutor.constants import LOCALES_PATH

FALLBACK_LOCALE = "en"

# CLDR plural rules for supported locales
PLURAL_RULES: dict[str, Callable[[int], str]] = {
    "en": lambda n: "one" if n == 1 else "other",
    "ru": lambda n: (
        "one"
        if n % 10 == 1 and n % 100 != 11
        else (
            "few"
            if 2 <= n % 10 <= 4 and not (12 <= n % 100 <= 14)
            else "many"
            if n % 10 == 0 or 5 <= n % 10 <= 9 or 11 <= n % 100 <= 14
            else "other"
        )
    ),
}

# Matches {varName, plural, one {text} other {text}} patterns
_PLURAL_RE = re.compile(r"\{(\w+),\s*plural,\s*(.*)\}", re.DOTALL)
# Matches individual plural branches like: one {some text} or =0 {some text}
_BRANCH_RE = re.compile(r"(=\d+|\w+)\s*\{([^{}]*(?:\{[^{}]*\}[^{}]*)*)\}")
# Matches simple {varName} placeholders
_PLACEHOLDER_RE = re.compile(r"\{(\w+)\}")


def _resolve_plural(message: str, params: dict[str, object], locale: str) -> str:
    def replace_plural(match: re.Match) -> str:
        var_name = match.group(1)
        count = params.get(var_name, 0)
        if not isinstance(count, int | float):
            try:
                count = int(count)
            except (ValueError, TypeError):
                count = 0

        branches = {
            branch.group(1): branch.group(2)
            for branch in _BRANCH_RE.finditer(match.group(2))
        }

        exact_key = f"={int(count)}"
        if exact_key in branches:
            result = branches[exact_key]
        else:
            rule = PLURAL_RULES.get(locale, PLURAL_RULES[FALLBACK_LOCALE])
            result = branches.get(rule(int(count)), branches.get("other", ""))

        return result.replace("#", str(count))

    return _PLURAL_RE.sub(replace_plural, message)


def _resolve_placeholders(message: str, params: dict[str, object]) -> str:
    def replace_placeholder(match: re.Match) -> str:
        key = match.group(1)
        return str(params.get(key, match.group(0)))

    return _PLACEHOLDER_RE.sub(replace_placeholder, message)


def format_message(
    message: str, params: dict[str, object] | None = None, locale: str = "en"
) -> str:
    if not params:
        return message
    result = _resolve_plural(message, params, locale)
    return _resolve_placeholders(result, params)


class TranslationManager:
    def __init__(self, locales_dir: str | Path) -> None:
        self._locales_dir = Path(locales_dir)
        self._translations: dict[str, dict[str, str]] = {}
        self._load_all()

    def _load_all(self) -> None:
        if not self._locales_dir.exists():
            return
        for path in sorted(self._locales_dir.glob("*.json")):
            with open(path, encoding="utf-8") as f:
                self._translations[path.stem] = json.load(f)

    def t(self, locale: str, key: str, **params: object) -> str:
        message = self._translations.get(locale, {}).get(key)
        if message is None:
            message = self._translations.get(FALLBACK_LOCALE, {}).get(key)
        if message is None:
            return key
        return format_message(message, params if params else None, locale)

    def get_all(self, locale: str) -> dict[str, str]:
        base = dict(self._translations.get(FALLBACK_LOCALE, {}))
        if locale != FALLBACK_LOCALE:
            base.update(self._translations.get(locale, {}))
        return base

    def available_locales(self) -> list[str]:
        return sorted(self._translations.keys())


@lru_cache(maxsize=1)
def get_translator() -> TranslationManager:
    """Process-wide catalogue loaded from the bundled locale files."""
    return TranslationManager(LOCALES_PATH)
