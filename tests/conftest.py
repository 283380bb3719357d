from __future__ import annotations

import logging

import pytest

from transform import TransformPolicy
from translation import CachingTranslator, TranslationError

BRAND = "evaluating.tools"


class StubProvider:
    """Records every call; prefixes text with the locale or fails."""

    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.calls: list[tuple[str, str]] = []

    def translate(self, text: str, locale: str) -> str:
        self.calls.append((text, locale))
        if self.fail:
            raise TranslationError("provider unavailable")
        return f"[{locale}] {text}"


@pytest.fixture
def provider() -> StubProvider:
    return StubProvider()


@pytest.fixture
def failing_provider() -> StubProvider:
    return StubProvider(fail=True)


@pytest.fixture
def translator(provider: StubProvider) -> CachingTranslator:
    return CachingTranslator(provider, BRAND)


@pytest.fixture
def policy() -> TransformPolicy:
    return TransformPolicy(
        domain=BRAND,
        brand_token=BRAND,
        meta_translate=(
            ("name", "title"),
            ("name", "description"),
            ("property", "og:title"),
            ("property", "og:description"),
        ),
        meta_url=(("property", "og:url"),),
    )


@pytest.fixture(autouse=True)
def reset_logger():
    yield
    # main() installs its own handlers and stops propagation
    logger = logging.getLogger("site_translator")
    logger.handlers = []
    logger.propagate = True
