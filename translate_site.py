#!/usr/bin/env python3
"""
Generate per-locale copies of the source edition.

Run:
  python translate_site.py

Every ``*.html`` file under PATH_CONFIG['input_root'] is localized once per
registry locale flagged ``createnew`` and written to
``{output_root}/{locale}/{relative_dir}/{file_name}``.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

from bs4 import BeautifulSoup

from config import LOGGING_CONFIG, PATH_CONFIG, SITE_CONFIG, TRANSFORM_CONFIG
from locales import LocaleDescriptor, load_locales
from logger import set_verbose_mode, setup_logger
from transform import TransformPolicy, localize_document, page_path, set_alternate_links
from translation import CachingTranslator, GoogleProvider, TranslationProvider

logger = logging.getLogger('site_translator')


@dataclass
class RunSummary:
    files: int = 0
    written: int = 0
    failed: int = 0


def iter_html_files(root: Path) -> list[Path]:
    return sorted(p for p in root.rglob("*.html") if p.is_file())


def translate_html_file(
    path: Path,
    relative_dir: str,
    locales: Sequence[LocaleDescriptor],
    translator: CachingTranslator,
    policy: TransformPolicy,
    output_root: Path,
    summary: RunSummary,
    parser: str = "html.parser",
    write_source_alternates: bool = False,
) -> list[Path]:
    html = path.read_text(encoding="utf-8", errors="ignore")
    source = BeautifulSoup(html, parser)
    page = page_path(relative_dir, path.name, policy.index_name)

    written: list[Path] = []
    for locale in locales:
        if not locale.create_new:
            continue
        try:
            localized = localize_document(source, locale, locales, page, translator, policy)
            out_dir = output_root / locale.code / relative_dir
            out_dir.mkdir(parents=True, exist_ok=True)
            out_path = out_dir / path.name
            out_path.write_text(str(localized), encoding="utf-8")
        except Exception:
            summary.failed += 1
            logger.exception(f"Error processing file {path} for language {locale.code}")
            continue
        summary.written += 1
        written.append(out_path)
        logger.info(f"Translated: {path} -> {out_path}")

    if write_source_alternates:
        try:
            set_alternate_links(source, locales, page, policy)
            path.write_text(str(source), encoding="utf-8")
        except Exception:
            summary.failed += 1
            logger.exception(f"Error adding alternate links to source file {path}")
        else:
            logger.info(f"Updated alternates: {path}")

    return written


def process_folder(
    input_root: Path,
    output_root: Path,
    locales: Sequence[LocaleDescriptor],
    translator: CachingTranslator,
    policy: TransformPolicy,
    parser: str = "html.parser",
    write_source_alternates: bool = False,
) -> RunSummary:
    summary = RunSummary()
    html_files = iter_html_files(input_root)
    if not html_files:
        logger.warning(f"No HTML files found under {input_root}")
        return summary

    for html_path in html_files:
        relative_dir = html_path.parent.relative_to(input_root).as_posix()
        if relative_dir == ".":
            relative_dir = ""
        summary.files += 1
        try:
            translate_html_file(
                html_path,
                relative_dir,
                locales,
                translator,
                policy,
                output_root,
                summary,
                parser=parser,
                write_source_alternates=write_source_alternates,
            )
        except Exception:
            summary.failed += 1
            logger.exception(f"Error reading file {html_path}")

    return summary


def main(provider: Optional[TranslationProvider] = None) -> int:
    set_verbose_mode(setup_logger(), LOGGING_CONFIG['verbose'])

    input_root = Path(PATH_CONFIG['input_root'])
    if not input_root.is_dir():
        logger.error(f"Input folder does not exist: {input_root}")
        return 1

    try:
        locales = load_locales(Path(PATH_CONFIG['languages_file']))
    except (OSError, ValueError) as exc:
        logger.error(f"Could not load locale registry {PATH_CONFIG['languages_file']}: {exc}")
        return 1

    policy = TransformPolicy.from_config(SITE_CONFIG, TRANSFORM_CONFIG)
    if provider is None:
        provider = GoogleProvider(source=SITE_CONFIG['source_locale'])
    translator = CachingTranslator(provider, SITE_CONFIG['brand_token'])

    summary = process_folder(
        input_root,
        Path(PATH_CONFIG['output_root']),
        locales,
        translator,
        policy,
        parser=TRANSFORM_CONFIG['parser'],
        write_source_alternates=TRANSFORM_CONFIG['write_source_alternates'],
    )

    logger.info(
        f"Translation process completed! files={summary.files} written={summary.written} "
        f"failed={summary.failed} provider_calls={translator.provider_calls} "
        f"provider_failures={translator.failures} cached={len(translator.cache)}"
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
