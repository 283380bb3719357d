"""
Translation cache and provider adapter.

The provider is anything with ``translate(text, locale) -> str`` that raises
on failure. ``CachingTranslator`` sits in front of it, keeps one translation
per (locale, text) for the whole run and never lets a provider failure reach
the caller.
"""
from __future__ import annotations

import logging
import re
from typing import Optional, Protocol

from deep_translator import GoogleTranslator

logger = logging.getLogger('site_translator')

# Registry codes that Google spells differently.
GOOGLE_LANG_ALIASES = {
    "zh": "zh-CN",
    "zh-cn": "zh-CN",
    "zh-hans": "zh-CN",
    "zh-tw": "zh-TW",
    "zh-hant": "zh-TW",
    "he": "iw",
}


class TranslationError(Exception):
    """Raised by a provider when a fragment could not be translated."""


class TranslationProvider(Protocol):
    def translate(self, text: str, locale: str) -> str:
        ...


def to_google_lang(code: str) -> str:
    return GOOGLE_LANG_ALIASES.get(code.lower(), code)


def truncate_str(s: str, length: int = 30) -> str:
    """Truncates string with ellipsis in middle if too long"""
    return f"{s[:length]}...{s[-length:]}" if len(s) > length * 2 else s


def chunk_text(text: str, max_len: int = 4000) -> list[str]:
    """Splits text into pieces of at most max_len, preferring to break on a space."""
    if len(text) <= max_len:
        return [text]
    parts: list[str] = []
    start = 0
    while start < len(text):
        end = min(start + max_len, len(text))
        if end < len(text):
            space = text.rfind(" ", start, end)
            if space > start + 200:
                end = space
        parts.append(text[start:end])
        start = end
    return parts


class GoogleProvider:
    """Google Translate through deep_translator, one translator per locale."""

    # Google rejects anything over 5000 characters
    def __init__(self, source: str = "en", max_len: int = 4000) -> None:
        self.source = source
        self.max_len = max_len
        self._translators: dict[str, GoogleTranslator] = {}

    def _translator(self, locale: str) -> GoogleTranslator:
        translator = self._translators.get(locale)
        if translator is None:
            translator = GoogleTranslator(source=self.source, target=to_google_lang(locale))
            self._translators[locale] = translator
        return translator

    def translate(self, text: str, locale: str) -> str:
        try:
            translator = self._translator(locale)
        except Exception as exc:
            raise TranslationError(str(exc)) from exc
        translated_chunks: list[str] = []
        for chunk in chunk_text(text, self.max_len):
            core = chunk.strip()
            if not core:
                continue
            try:
                result = translator.translate(core)
            except Exception as exc:
                raise TranslationError(str(exc)) from exc
            if not result:
                raise TranslationError(f"Empty result for '{truncate_str(core)}'")
            translated_chunks.append(result.strip())
        return " ".join(translated_chunks)


class TranslationCache:
    """
    Process-lifetime mapping of (locale, trimmed source text) to translation.

    Entries are never evicted or overwritten: the first stored translation
    for a key wins.
    """

    def __init__(self) -> None:
        self._entries: dict[tuple[str, str], str] = {}

    def get(self, locale: str, text: str) -> Optional[str]:
        return self._entries.get((locale, text))

    def put(self, locale: str, text: str, translated: str) -> None:
        self._entries.setdefault((locale, text), translated)

    def __contains__(self, key: tuple[str, str]) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)


class CachingTranslator:
    def __init__(
        self,
        provider: TranslationProvider,
        brand_token: str,
        cache: Optional[TranslationCache] = None,
    ) -> None:
        self.provider = provider
        self.brand_token = brand_token
        self.cache = cache if cache is not None else TranslationCache()
        self.provider_calls = 0
        self.failures = 0
        self._brand_re = re.compile(f"({re.escape(brand_token)})", re.IGNORECASE)

    def contains_brand(self, text: str) -> bool:
        return self.brand_token.lower() in text.lower()

    def _call(self, text: str, locale: str) -> str:
        self.provider_calls += 1
        return self.provider.translate(text, locale)

    def _translate_segment(self, segment: str, locale: str) -> str:
        core = segment.strip()
        if not core:
            return segment
        lead = segment[: len(segment) - len(segment.lstrip())]
        trail = segment[len(segment.rstrip()):]
        return f"{lead}{self._call(core, locale)}{trail}"

    def _translate_around_brand(self, text: str, locale: str) -> str:
        # re.split with a capture group alternates text, token, text, ...
        parts = self._brand_re.split(text)
        last = len(parts) - 1
        out: list[str] = []
        for idx, part in enumerate(parts):
            if idx % 2 == 1 or idx == last:
                out.append(part)
            else:
                out.append(self._translate_segment(part, locale))
        return "".join(out)

    def translate(self, text: str, locale: str) -> str:
        """
        Returns the translation of ``text`` into ``locale``, or ``text``
        unchanged when the provider fails. Never raises.
        """
        key = text.strip()
        if not key:
            return text

        cached = self.cache.get(locale, key)
        if cached is not None:
            return cached

        try:
            if self.contains_brand(key):
                result = self._translate_around_brand(key, locale)
            else:
                result = self._call(key, locale)
        except Exception as exc:
            self.failures += 1
            logger.error(f"Error translating text '{truncate_str(key)}' to '{locale}': {exc}")
            return text

        self.cache.put(locale, key, result)
        return result
