"""
Per-locale document transformation.

Given a parsed source document, a target locale and the page's path,
``localize_document`` returns a localized copy: ``<html lang>``, canonical and
alternate links, title and meta tags, internal ``/en/`` links and visible
text. The source document is never mutated.
"""
from __future__ import annotations

import copy
import logging
import re
from dataclasses import dataclass, field
from typing import Any, Sequence

from bs4 import BeautifulSoup, NavigableString, Tag

from locales import LocaleDescriptor
from translation import CachingTranslator

logger = logging.getLogger('site_translator')

TEXT_MODES = {"text_nodes", "whole"}
ANCHOR_MODES = {"element", "whole"}


@dataclass(frozen=True)
class TransformPolicy:
    domain: str
    brand_token: str
    copyright_symbol: str = "©"
    source_locale: str = "en"
    index_name: str = "index.html"
    selectors: Sequence[str] = ("h1", "h2", "h3", "h4", "h5", "h6", "span", "a", "button", "p", "label", "option", "div")
    text_mode: str = "text_nodes"
    anchor_mode: str = "element"
    translate_title: bool = True
    meta_translate: Sequence[tuple[str, str]] = field(default_factory=tuple)
    meta_url: Sequence[tuple[str, str]] = field(default_factory=tuple)
    skip_tags: frozenset[str] = frozenset({"script", "style", "code", "pre", "math", "svg", "noscript"})

    def __post_init__(self) -> None:
        if self.text_mode not in TEXT_MODES:
            raise ValueError(f"Unknown text_mode: {self.text_mode!r}")
        if self.anchor_mode not in ANCHOR_MODES:
            raise ValueError(f"Unknown anchor_mode: {self.anchor_mode!r}")

    @classmethod
    def from_config(cls, site: dict[str, Any], transform: dict[str, Any]) -> "TransformPolicy":
        return cls(
            domain=site["domain"],
            brand_token=site["brand_token"],
            copyright_symbol=site["copyright_symbol"],
            source_locale=site["source_locale"],
            index_name=site["index_name"],
            selectors=tuple(transform["selectors"]),
            text_mode=transform["text_mode"],
            anchor_mode=transform["anchor_mode"],
            translate_title=transform["translate_title"],
            meta_translate=tuple(tuple(m) for m in transform["meta_translate"]),
            meta_url=tuple(tuple(m) for m in transform["meta_url"]),
            skip_tags=frozenset(transform["skip_tags"]),
        )


def canonical_url(relative_path: str, locale: str, domain: str) -> str:
    """
    ``https://{domain}/{locale}/{path}/`` with the path cleaned of backslashes,
    leading ``./`` or ``/`` segments and trailing slashes. The root path
    yields ``https://{domain}/{locale}/``; a path naming an ``.html`` file
    gets no trailing slash.
    """
    clean = relative_path.replace("\\", "/")
    clean = re.sub(r"^(?:\.?/)+", "", clean)
    clean = clean.rstrip("/")
    if clean in ("", "."):
        return f"https://{domain}/{locale}/"
    if clean.endswith(".html"):
        return f"https://{domain}/{locale}/{clean}"
    return f"https://{domain}/{locale}/{clean}/"


def page_path(relative_dir: str, file_name: str, index_name: str = "index.html") -> str:
    """URL path of a page: its directory for the index file, else the file itself."""
    rel = relative_dir.replace("\\", "/").strip("/")
    if rel == ".":
        rel = ""
    if file_name == index_name:
        return rel
    return f"{rel}/{file_name}" if rel else file_name


def _is_attached(element: Tag) -> bool:
    # False once an ancestor had its whole text replaced
    return any(isinstance(parent, BeautifulSoup) for parent in element.parents)


def _in_skipped_block(element: Tag, policy: TransformPolicy) -> bool:
    if element.name in policy.skip_tags:
        return True
    return any(parent.name in policy.skip_tags for parent in element.parents)


def _should_skip(text: str, policy: TransformPolicy) -> bool:
    core = text.strip()
    if not core:
        return True
    if core.startswith(policy.copyright_symbol):
        return True
    return policy.brand_token.lower() in core.lower()


def translate_element_text(
    element: Tag,
    locale: str,
    translator: CachingTranslator,
    policy: TransformPolicy,
    mode: str | None = None,
) -> None:
    if not _is_attached(element) or _in_skipped_block(element, policy):
        return
    text = element.get_text()
    if _should_skip(text, policy):
        return

    mode = mode or policy.text_mode
    if mode == "whole":
        element.string = translator.translate(text.strip(), locale)
        return

    for child in list(element.children):
        # Comments, doctypes and CDATA are NavigableString subclasses
        if type(child) is not NavigableString:
            continue
        raw = str(child)
        core = raw.strip()
        if not core or core.startswith(policy.copyright_symbol):
            continue
        lead = re.match(r"^\s*", raw).group(0)
        trail = re.search(r"\s*$", raw).group(0)
        translated = translator.translate(core, locale)
        child.replace_with(f"{lead}{translated}{trail}")


def rewrite_href(element: Tag, locale: str, policy: TransformPolicy) -> None:
    href = element.get("href")
    segment = f"/{policy.source_locale}/"
    if href and segment in href:
        element["href"] = href.replace(segment, f"/{locale}/", 1)


def translate_anchor(
    element: Tag,
    locale: str,
    translator: CachingTranslator,
    policy: TransformPolicy,
) -> None:
    rewrite_href(element, locale, policy)
    mode = "whole" if policy.anchor_mode == "whole" else policy.text_mode
    translate_element_text(element, locale, translator, policy, mode=mode)


def _ensure_head(soup: BeautifulSoup) -> Tag:
    if soup.head is not None:
        return soup.head
    head = soup.new_tag("head")
    html = soup.find("html")
    if html is not None:
        html.insert(0, head)
    else:
        soup.insert(0, head)
    return head


def set_canonical_link(soup: BeautifulSoup, url: str) -> None:
    links = soup.find_all("link", rel="canonical")
    if links:
        canonical = links[0]
        for extra in links[1:]:
            extra.decompose()
    else:
        canonical = soup.new_tag("link")
        _ensure_head(soup).append(canonical)
    canonical["rel"] = "canonical"
    canonical["href"] = url


def set_alternate_links(
    soup: BeautifulSoup,
    locales: Sequence[LocaleDescriptor],
    page: str,
    policy: TransformPolicy,
) -> None:
    """One ``link[rel=alternate]`` per registry locale, generated or not."""
    for descriptor in locales:
        url = canonical_url(page, descriptor.code, policy.domain)
        links = soup.find_all("link", attrs={"rel": "alternate", "hreflang": descriptor.code})
        if links:
            links[0]["href"] = url
            for extra in links[1:]:
                extra.decompose()
            continue
        link = soup.new_tag("link", attrs={"rel": "alternate", "hreflang": descriptor.code, "href": url})
        _ensure_head(soup).append(link)


def translate_head(
    soup: BeautifulSoup,
    locale: str,
    url: str,
    translator: CachingTranslator,
    policy: TransformPolicy,
) -> None:
    if policy.translate_title and soup.title is not None:
        title = soup.title.get_text()
        if title.strip():
            soup.title.string = translator.translate(title, locale)

    for attr, value in policy.meta_translate:
        meta = soup.find("meta", attrs={attr: value})
        if meta is not None and meta.get("content"):
            meta["content"] = translator.translate(meta["content"], locale)

    for attr, value in policy.meta_url:
        meta = soup.find("meta", attrs={attr: value})
        if meta is not None:
            meta["content"] = url


def localize_document(
    source: BeautifulSoup,
    locale: LocaleDescriptor,
    locales: Sequence[LocaleDescriptor],
    page: str,
    translator: CachingTranslator,
    policy: TransformPolicy,
) -> BeautifulSoup:
    """Returns a localized copy of ``source`` for ``locale``."""
    soup = copy.copy(source)
    code = locale.code
    logger.debug(f"Localizing '{page or '/'}' for '{code}'")
    url = canonical_url(page, code, policy.domain)

    html = soup.find("html")
    if html is not None:
        html["lang"] = code

    set_canonical_link(soup, url)
    set_alternate_links(soup, locales, page, policy)
    translate_head(soup, code, url, translator, policy)

    for anchor in soup.find_all("a", href=True):
        rewrite_href(anchor, code, policy)

    for element in soup.find_all(list(policy.selectors)):
        if element.name == "a":
            translate_anchor(element, code, translator, policy)
        elif element.name == "div" and not element.get_text().strip():
            continue
        else:
            translate_element_text(element, code, translator, policy)

    return soup
